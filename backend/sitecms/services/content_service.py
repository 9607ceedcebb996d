"""Site content repository: CRUD over content blocks and the public published views."""

import logging
from collections import OrderedDict
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sitecms.errors import DuplicateKey, NotFound
from sitecms.models.site_content import ContentType, Section, SiteContent
from sitecms.models.user import User
from sitecms.schemas.site_content import ContentCreate, ContentUpdate
from sitecms.services import version_service

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "key", "title", "content", "content_type", "section", "order",
    "is_published", "description", "keywords", "author",
)
# optional metadata an update may clear with an explicit null
CLEARABLE_FIELDS = ("description", "keywords", "author")


def _enum_value(value):
    if isinstance(value, (Section, ContentType)):
        return value.value
    return value


def _commit_unique_key(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateKey()


def _find_by_key(db: Session, key: str) -> Optional[SiteContent]:
    return db.query(SiteContent).filter(SiteContent.key == key).first()


def get_content(db: Session, content_id: int) -> SiteContent:
    item = db.query(SiteContent).filter(SiteContent.content_id == content_id).first()
    if not item:
        raise NotFound("Content not found")
    return item


def list_content(
    db: Session,
    section: Optional[Section] = None,
    published: Optional[bool] = None,
) -> List[SiteContent]:
    q = db.query(SiteContent)
    if section is not None:
        q = q.filter(SiteContent.section == _enum_value(section))
    if published is not None:
        q = q.filter(SiteContent.is_published == published)
    return q.order_by(SiteContent.section, SiteContent.order, SiteContent.created_at.desc()).all()


def list_published(db: Session, section: Optional[Section] = None) -> List[SiteContent]:
    q = db.query(SiteContent).filter(SiteContent.is_published == True)  # noqa: E712
    if section is not None:
        q = q.filter(SiteContent.section == _enum_value(section))
    return q.order_by(SiteContent.section, SiteContent.order, SiteContent.content_id).all()


def group_by_section(items: List[SiteContent]) -> Dict[str, List[SiteContent]]:
    grouped: Dict[str, List[SiteContent]] = OrderedDict()
    for item in items:
        grouped.setdefault(item.section, []).append(item)
    return grouped


def get_by_key(db: Session, key: str) -> SiteContent:
    item = (
        db.query(SiteContent)
        .filter(SiteContent.key == key, SiteContent.is_published == True)  # noqa: E712
        .first()
    )
    if not item:
        raise NotFound("Content not found")
    return item


def create_content(db: Session, data: ContentCreate, current_user: User) -> SiteContent:
    if _find_by_key(db, data.key):
        raise DuplicateKey()

    payload = {k: _enum_value(v) for k, v in data.model_dump().items()}
    item = SiteContent(
        **payload,
        version=1,
        last_modified_by=current_user.user_id,
    )
    db.add(item)
    _commit_unique_key(db)
    db.refresh(item)
    logger.info("[content] created %s in %s by user %s", item.key, item.section, current_user.user_id)
    return item


def update_content(db: Session, content_id: int, data: ContentUpdate, current_user: User) -> SiteContent:
    item = get_content(db, content_id)

    payload = {
        k: _enum_value(v)
        for k, v in data.model_dump(exclude_unset=True).items()
        if k in UPDATABLE_FIELDS and (v is not None or k in CLEARABLE_FIELDS)
    }

    next_key = payload.get("key")
    if next_key and next_key != item.key and _find_by_key(db, next_key):
        raise DuplicateKey()

    new_body = payload.pop("content", None)
    for key, value in payload.items():
        setattr(item, key, value)

    if new_body is not None and new_body != item.content:
        version_service.record_revision(item, new_body=new_body, actor_id=current_user.user_id)
    item.last_modified_by = current_user.user_id

    _commit_unique_key(db)
    db.refresh(item)
    logger.info("[content] updated %s (version %s) by user %s", item.key, item.version, current_user.user_id)
    return item


def delete_content(db: Session, content_id: int, current_user: User) -> None:
    item = get_content(db, content_id)
    key = item.key
    db.delete(item)
    db.commit()
    logger.info("[content] deleted %s by user %s", key, current_user.user_id)


def count_published(db: Session) -> int:
    return db.query(SiteContent).filter(SiteContent.is_published == True).count()  # noqa: E712
