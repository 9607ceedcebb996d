"""Role definitions and the single authorization decision used by every gated route."""

from enum import Enum
from typing import Iterable, Optional, Union


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super-admin"


ADMIN_ROLES = (Role.ADMIN, Role.SUPER_ADMIN)
SUPER_ADMIN_ONLY = (Role.SUPER_ADMIN,)
ALL_ROLES = tuple(Role)


def to_role(value: Union[str, Role, None]) -> Optional[Role]:
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value or "").strip())
    except ValueError:
        return None


def authorize(required: Iterable[Role], actual: Union[str, Role, None]) -> bool:
    role = to_role(actual)
    if role is None:
        return False
    return role in tuple(required)


def is_admin(user) -> bool:
    return authorize(ADMIN_ROLES, user.role)


def is_super_admin(user) -> bool:
    return authorize(SUPER_ADMIN_ONLY, user.role)
