import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.orm import Session

from sitecms.database import get_db
from sitecms.deps import get_credential_store, get_token_issuer
from sitecms.errors import Forbidden, SiteError, Unauthorized
from sitecms.models.user import User
from sitecms.services.credential_store import CredentialStore
from sitecms.services.token_service import TokenIssuer
from sitecms.utils.permissions import Role, authorize

logger = logging.getLogger(__name__)


def extract_token(request: Request, cookie_name: str) -> Optional[str]:
    token = request.cookies.get(cookie_name)
    if token:
        return token
    scheme, credentials = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() == "bearer" and credentials:
        return credentials
    return None


def _resolve_user(
    request: Request,
    db: Session,
    issuer: TokenIssuer,
    store: CredentialStore,
) -> User:
    token = extract_token(request, issuer.cookie_name)
    if not token:
        raise Unauthorized("Access denied. No token provided.")

    user_id = issuer.validate(token)
    user = store.get(db, user_id)
    if not user:
        raise Unauthorized("Invalid token. User not found.")
    if not user.is_active:
        raise Unauthorized("Account is deactivated.")
    return user


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
    store: CredentialStore = Depends(get_credential_store),
) -> User:
    return _resolve_user(request, db, issuer, store)


def get_optional_user(
    request: Request,
    db: Session = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
    store: CredentialStore = Depends(get_credential_store),
) -> Optional[User]:
    try:
        return _resolve_user(request, db, issuer, store)
    except SiteError as exc:
        logger.debug("[auth] optional auth skipped: %s", exc.message)
        return None


def require_roles(*roles: Role):
    def checker(current_user: User = Depends(get_current_user)) -> User:
        if not authorize(roles, current_user.role):
            raise Forbidden(f"Access denied. Required roles: {', '.join(r.value for r in roles)}")
        return current_user
    return checker


require_admin = require_roles(Role.ADMIN, Role.SUPER_ADMIN)
require_super_admin = require_roles(Role.SUPER_ADMIN)
