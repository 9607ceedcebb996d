"""Credential store: user creation, bcrypt password checks and login lockout counters."""

import logging
import secrets
from datetime import timedelta
from typing import Optional, Tuple

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sitecms.errors import DuplicateEmail
from sitecms.models.user import User
from sitecms.utils.helpers import normalize_email, utcnow
from sitecms.utils.permissions import Role

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72


def _encode(secret: str) -> bytes:
    return (secret or "").encode("utf-8")[:BCRYPT_MAX_BYTES]


class CredentialStore:
    """Persists user identities and their hashed credentials.

    One instance is built at startup; every operation receives the request's
    database session explicitly.
    """

    def __init__(self, rounds: int = 12, max_attempts: int = 5, lock_minutes: int = 120):
        self.rounds = rounds
        self.max_attempts = max_attempts
        self.lock_time = timedelta(minutes=lock_minutes)
        # checked against when the email is unknown so both failure paths cost the same
        self._dummy_hash = self.hash_password(secrets.token_urlsafe(16))

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def check_password(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), (password_hash or "").encode("utf-8"))
        except ValueError:
            return False

    def get(self, db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.user_id == user_id).first()

    def find_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == normalize_email(email)).first()

    def create(
        self,
        db: Session,
        *,
        name: str,
        email: str,
        password: str,
        role: Role = Role.USER,
    ) -> User:
        normalized = normalize_email(email)
        if self.find_by_email(db, normalized):
            raise DuplicateEmail()

        user = User(
            name=(name or "").strip(),
            email=normalized,
            password_hash=self.hash_password(password),
            role=Role(role).value,
            is_active=True,
            failed_login_attempts=0,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # lost a race with a concurrent registration for the same email
            db.rollback()
            raise DuplicateEmail()
        db.refresh(user)
        logger.info("[auth] created user %s with role %s", user.user_id, user.role)
        return user

    def set_password(self, db: Session, user: User, password: str) -> User:
        user.password_hash = self.hash_password(password)
        db.commit()
        db.refresh(user)
        return user

    def verify(self, db: Session, email: str, password: str) -> Tuple[Optional[User], bool]:
        user = self.find_by_email(db, email)
        if user is None:
            self.check_password(password, self._dummy_hash)
            return None, False
        return user, self.check_password(password, user.password_hash)

    def is_locked(self, user: User) -> bool:
        return bool(user.lock_until and user.lock_until > utcnow())

    def increment_failed_attempts(self, db: Session, user: User) -> User:
        now = utcnow()
        if user.lock_until and user.lock_until <= now:
            # previous lock expired, start counting again
            user.lock_until = None
            user.failed_login_attempts = 1
        else:
            attempts = (user.failed_login_attempts or 0) + 1
            user.failed_login_attempts = attempts
            if attempts >= self.max_attempts and not self.is_locked(user):
                user.lock_until = now + self.lock_time
                logger.warning("[auth] user %s locked until %s", user.user_id, user.lock_until)
        db.commit()
        db.refresh(user)
        return user

    def reset_failed_attempts(self, db: Session, user: User) -> User:
        user.failed_login_attempts = 0
        user.lock_until = None
        user.last_login = utcnow()
        db.commit()
        db.refresh(user)
        return user
