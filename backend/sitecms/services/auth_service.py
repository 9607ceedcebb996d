"""Registration, login and password change flows on top of the credential store."""

import logging

from sqlalchemy.orm import Session

from sitecms.errors import Locked, Unauthorized
from sitecms.models.user import User
from sitecms.schemas.user import LoginRequest, PasswordChangeRequest, RegisterRequest
from sitecms.services.credential_store import CredentialStore
from sitecms.utils.permissions import Role

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def register(db: Session, store: CredentialStore, data: RegisterRequest) -> User:
    user = store.create(db, name=data.name, email=data.email, password=data.password, role=Role.USER)
    logger.info("[auth] registered user %s", user.user_id)
    return user


def login(db: Session, store: CredentialStore, data: LoginRequest) -> User:
    user, matched = store.verify(db, data.email, data.password)
    if user is None:
        raise Unauthorized(INVALID_CREDENTIALS)

    if store.is_locked(user):
        logger.warning("[auth] login rejected for locked user %s", user.user_id)
        raise Locked()

    if not user.is_active:
        raise Unauthorized("Account is deactivated")

    if not matched:
        store.increment_failed_attempts(db, user)
        logger.warning(
            "[auth] failed login for user %s (%s attempts)", user.user_id, user.failed_login_attempts
        )
        raise Unauthorized(INVALID_CREDENTIALS)

    store.reset_failed_attempts(db, user)
    logger.info("[auth] user %s logged in", user.user_id)
    return user


def change_password(db: Session, store: CredentialStore, user: User, data: PasswordChangeRequest) -> User:
    if not store.check_password(data.current_password, user.password_hash):
        raise Unauthorized("Current password is incorrect")
    store.set_password(db, user, data.new_password)
    logger.info("[auth] user %s changed password", user.user_id)
    return user
