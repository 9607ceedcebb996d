import pytest
from fastapi.testclient import TestClient
from sitecms.config import Settings
from sitecms.database import Base
from sitecms.main import create_app
from sitecms.models.site_content import SiteContent
from sitecms.utils.permissions import Role

TEST_DB_URL = "sqlite:///./test_sitecms.db"
PASSWORD = "Passw0rd"

test_settings = Settings(
    DATABASE_URL=TEST_DB_URL,
    SECRET_KEY="test-secret-key",
    ENVIRONMENT="development",
    BCRYPT_ROUNDS=4,
    LOG_LEVEL="WARNING",
)
app = create_app(test_settings)
engine = app.state.engine
TestingSession = app.state.session_factory


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def store():
    return app.state.credential_store


@pytest.fixture
def issuer():
    return app.state.token_issuer


@pytest.fixture
def seed_users(db, store):
    users = {
        "super_admin": store.create(db, name="Root", email="root@site.com", password=PASSWORD, role=Role.SUPER_ADMIN),
        "admin": store.create(db, name="Admin", email="admin@site.com", password=PASSWORD, role=Role.ADMIN),
        "user": store.create(db, name="Member", email="user@site.com", password=PASSWORD, role=Role.USER),
    }
    # logins commit through the app's own sessions; make later queries on this session reload rows
    db.expire_all()
    return users


@pytest.fixture
def seed_content(db, seed_users):
    rows = [
        SiteContent(key="hero-title", title="Hero Title", content="Discover", section="hero", order=1,
                    last_modified_by=seed_users["admin"].user_id),
        SiteContent(key="hero-subtitle", title="Hero Subtitle", content="Changing lives", section="hero", order=2,
                    last_modified_by=seed_users["admin"].user_id),
        SiteContent(key="about-title", title="About Title", content="About us", section="about", order=1,
                    last_modified_by=seed_users["admin"].user_id),
        SiteContent(key="cta-draft", title="Draft CTA", content="Soon", section="cta", order=1,
                    is_published=False, last_modified_by=seed_users["admin"].user_id),
    ]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    return {row.key: row for row in rows}


def get_token(client, email: str, password: str = PASSWORD) -> str:
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    # keep the session cookie out of later requests so each call uses its own header
    client.cookies.clear()
    return resp.json()["token"]


def auth_headers(client, email: str, password: str = PASSWORD) -> dict:
    return {"Authorization": f"Bearer {get_token(client, email, password)}"}
