"""SQLAlchemy model package."""

from sitecms.models.user import User
from sitecms.models.site_content import SiteContent, ContentHistory

__all__ = [
    "User",
    "SiteContent", "ContentHistory",
]
