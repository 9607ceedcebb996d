"""User administration and self-service profile operations."""

import logging
import math
from datetime import timedelta
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from sitecms.errors import Forbidden, NotFound, ValidationFailed
from sitecms.models.user import User
from sitecms.schemas.user import ProfileUpdate
from sitecms.utils.helpers import utcnow
from sitecms.utils.permissions import Role, is_super_admin

logger = logging.getLogger(__name__)

RECENT_SIGNUP_DAYS = 7


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.user_id == user_id).first()
    if not user:
        raise NotFound("User not found")
    return user


def get_public_profile(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.user_id == user_id, User.is_active == True).first()  # noqa: E712
    if not user:
        raise NotFound("User not found")
    return user


def list_users(
    db: Session,
    role: Optional[Role] = None,
    active: Optional[bool] = None,
    page: int = 1,
    limit: int = 50,
) -> Tuple[List[User], int]:
    q = db.query(User)
    if role is not None:
        q = q.filter(User.role == Role(role).value)
    if active is not None:
        q = q.filter(User.is_active == active)
    total = q.count()
    users = (
        q.order_by(User.created_at.desc(), User.user_id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return users, total


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def user_stats(db: Session) -> Tuple[int, int]:
    active = db.query(User).filter(User.is_active == True)  # noqa: E712
    since = utcnow() - timedelta(days=RECENT_SIGNUP_DAYS)
    return active.count(), active.filter(User.created_at >= since).count()


def toggle_status(db: Session, user_id: int, current_user: User) -> User:
    user = get_user(db, user_id)
    if is_super_admin(user):
        raise Forbidden("Cannot modify super-admin status")
    if user.user_id == current_user.user_id:
        raise ValidationFailed("You cannot change the status of your own account")

    user.is_active = not user.is_active
    db.commit()
    db.refresh(user)
    logger.info(
        "[users] user %s %s by user %s",
        user.user_id, "activated" if user.is_active else "deactivated", current_user.user_id,
    )
    return user


def change_role(db: Session, user_id: int, role: Role, current_user: User) -> User:
    user = get_user(db, user_id)
    if user.user_id == current_user.user_id:
        raise ValidationFailed("You cannot change your own role")

    previous = user.role
    user.role = Role(role).value
    db.commit()
    db.refresh(user)
    logger.info("[users] user %s role %s -> %s by user %s", user.user_id, previous, user.role, current_user.user_id)
    return user


def update_profile(db: Session, user: User, data: ProfileUpdate) -> User:
    payload = data.model_dump(exclude_none=True)
    if "name" in payload:
        user.name = payload["name"]
    if "bio" in payload:
        user.bio = payload["bio"]
    for key, value in (payload.get("preferences") or {}).items():
        setattr(user, key, value)
    db.commit()
    db.refresh(user)
    return user
