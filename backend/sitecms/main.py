"""FastAPI application entry point. Builds services, registers middleware, routers and error handlers."""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sitecms import __version__
from sitecms.config import Settings, settings as default_settings
from sitecms.database import Base, SessionLocal, build_engine, build_session_factory, engine
from sitecms.errors import register_exception_handlers
import sitecms.models  # noqa: F401 - registers model metadata
from sitecms.routers import admin, auth, content, users
from sitecms.services.credential_store import CredentialStore
from sitecms.services.token_service import TokenIssuer

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Compassion Course site content service",
        description="Public site content, admin content management and session authentication",
        version=__version__,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
    )

    app.state.settings = settings
    if settings.DATABASE_URL == default_settings.DATABASE_URL:
        app.state.engine, app.state.session_factory = engine, SessionLocal
    else:
        app.state.engine = build_engine(settings.DATABASE_URL)
        app.state.session_factory = build_session_factory(app.state.engine)

    app.state.credential_store = CredentialStore(
        rounds=settings.BCRYPT_ROUNDS,
        max_attempts=settings.MAX_LOGIN_ATTEMPTS,
        lock_minutes=settings.LOCK_TIME_MINUTES,
    )
    app.state.token_issuer = TokenIssuer(
        settings.SECRET_KEY,
        issuer=settings.TOKEN_ISSUER,
        audience=settings.TOKEN_AUDIENCE,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        cookie_name=settings.COOKIE_NAME,
        secure_cookie=settings.is_production,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, expose_internal_errors=not settings.is_production)

    app.include_router(auth.router)
    app.include_router(content.router)
    app.include_router(admin.router)
    app.include_router(users.router)

    @app.on_event("startup")
    def ensure_schema():
        Base.metadata.create_all(bind=app.state.engine)
        logger.info("[startup] schema ready (%s)", settings.ENVIRONMENT)

    @app.get("/api/health")
    def health_check():
        return {"status": "ok", "service": "sitecms", "environment": settings.ENVIRONMENT}

    return app


app = create_app()
