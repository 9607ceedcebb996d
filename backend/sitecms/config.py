"""Central application settings loaded from environment variables."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./sitecms.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Session token (JWT)
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 24 * 60
    TOKEN_ISSUER: str = "compassion-course"
    TOKEN_AUDIENCE: str = "compassion-course-users"
    COOKIE_NAME: str = "token"

    # Credentials
    BCRYPT_ROUNDS: int = 12
    MAX_LOGIN_ATTEMPTS: int = 5
    LOCK_TIME_MINUTES: int = 120

    # Initial super-admin created by scripts/init_db.py
    ADMIN_EMAIL: str = "admin@compassioncourse.com"
    ADMIN_PASSWORD: str = "Admin123456"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == "production"

    class Config:
        # load backend/.env regardless of the working directory
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
