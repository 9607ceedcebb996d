"""Admin API router: content management with history, user management and dashboard stats."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from sitecms.database import get_db
from sitecms.middleware.auth_middleware import require_admin, require_super_admin
from sitecms.models.site_content import Section
from sitecms.models.user import User
from sitecms.schemas.site_content import (
    BackupRequest,
    ContentCreate,
    ContentEnvelope,
    ContentList,
    ContentMessage,
    ContentStatsOut,
    ContentUpdate,
    HistoryList,
)
from sitecms.schemas.user import (
    MessageUserEnvelope,
    RoleUpdate,
    UserEnvelope,
    UserListOut,
    UserStatsOut,
)
from sitecms.services import content_service, user_service, version_service
from sitecms.utils.permissions import Role

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/stats/users", response_model=UserStatsOut)
def user_stats(
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_admin),
):
    total, recent = user_service.user_stats(db)
    return {"total": total, "recent": recent}


@router.get("/stats/content", response_model=ContentStatsOut)
def content_stats(
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_admin),
):
    return {"total": content_service.count_published(db)}


# Content

@router.get("/content", response_model=ContentList)
def list_content(
    section: Optional[Section] = None,
    published: Optional[bool] = None,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_admin),
):
    return {"content": content_service.list_content(db, section=section, published=published)}


@router.get("/content/{content_id}", response_model=ContentEnvelope)
def get_content(
    content_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_admin),
):
    return {"content": content_service.get_content(db, content_id)}


@router.post("/content", response_model=ContentMessage, status_code=status.HTTP_201_CREATED)
def create_content(
    data: ContentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    item = content_service.create_content(db, data, current_user)
    return {"message": "Content created successfully", "content": item}


@router.put("/content/{content_id}", response_model=ContentMessage)
def update_content(
    content_id: int,
    data: ContentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    item = content_service.update_content(db, content_id, data, current_user)
    return {"message": "Content updated successfully", "content": item}


@router.delete("/content/{content_id}")
def delete_content(
    content_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    content_service.delete_content(db, content_id, current_user)
    return {"message": "Content deleted successfully"}


@router.get("/content/{content_id}/history", response_model=HistoryList)
def content_history(
    content_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_admin),
):
    item = content_service.get_content(db, content_id)
    rows = version_service.list_history(item)
    return {"history": [version_service.to_response(i, row) for i, row in enumerate(rows)]}


@router.post("/content/{content_id}/restore/{version_index}", response_model=ContentMessage)
def restore_content(
    content_id: int,
    version_index: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    item = content_service.get_content(db, content_id)
    item = version_service.restore(db, item, version_index, current_user.user_id)
    return {"message": "Content restored successfully", "content": item}


@router.post("/content/{content_id}/backup", response_model=ContentMessage)
def backup_content(
    content_id: int,
    data: Optional[BackupRequest] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    item = content_service.get_content(db, content_id)
    note = data.note if data else None
    item = version_service.create_backup(db, item, current_user.user_id, note)
    return {"message": "Backup created successfully", "content": item}


# Users

@router.get("/users", response_model=UserListOut)
def list_users(
    role: Optional[Role] = None,
    active: Optional[bool] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_admin),
):
    users, total = user_service.list_users(db, role=role, active=active, page=page, limit=limit)
    return {
        "users": users,
        "pagination": {"page": page, "pages": user_service.page_count(total, limit), "total": total},
    }


@router.get("/users/{user_id}", response_model=UserEnvelope)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_admin),
):
    return {"user": user_service.get_user(db, user_id)}


@router.put("/users/{user_id}/toggle-status", response_model=MessageUserEnvelope)
def toggle_user_status(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    user = user_service.toggle_status(db, user_id, current_user)
    state = "activated" if user.is_active else "deactivated"
    return {"message": f"User {state} successfully", "user": user}


@router.put("/users/{user_id}/role", response_model=MessageUserEnvelope)
def change_user_role(
    user_id: int,
    data: RoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_super_admin),
):
    user = user_service.change_role(db, user_id, data.role, current_user)
    return {"message": "User role updated successfully", "user": user}
