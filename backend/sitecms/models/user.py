"""User account SQLAlchemy model."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func

from sitecms.database import Base
from sitecms.utils.permissions import Role


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.USER.value, index=True)  # user/admin/super-admin
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    bio = Column(String(500), nullable=False, default="")
    avatar = Column(String(500))

    # Preferences
    newsletter = Column(Boolean, nullable=False, default=True)
    notifications = Column(Boolean, nullable=False, default=True)
    theme = Column(String(10), nullable=False, default="light")

    # Lockout bookkeeping
    failed_login_attempts = Column(Integer, nullable=False, default=0)
    lock_until = Column(DateTime, nullable=True)
    last_login = Column(DateTime, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    @property
    def display_name(self) -> str:
        return self.name or (self.email or "").split("@")[0]

    @property
    def preferences(self) -> dict:
        return {
            "newsletter": bool(self.newsletter),
            "notifications": bool(self.notifications),
            "theme": self.theme or "light",
        }
