"""Service layer package."""

from sitecms.services import (
    auth_service,
    content_service,
    user_service,
    version_service,
)
