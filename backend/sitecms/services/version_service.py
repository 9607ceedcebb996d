"""Content revision history: the single path that versions a body change, plus restore and backup."""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from sitecms.errors import InvalidVersionIndex
from sitecms.models.site_content import ContentHistory, SiteContent
from sitecms.utils.helpers import utcnow

logger = logging.getLogger(__name__)

AUTO_SAVE_NOTE = "Auto-saved version"
MANUAL_BACKUP_NOTE = "Manual backup"


def _snapshot(item: SiteContent, actor_id: Optional[int], note: str) -> ContentHistory:
    return ContentHistory(
        content=item.content,
        version=item.version,
        modified_by=actor_id,
        modified_at=utcnow(),
        note=note,
    )


def record_revision(
    item: SiteContent,
    *,
    new_body: str,
    actor_id: Optional[int],
    note: str = AUTO_SAVE_NOTE,
) -> SiteContent:
    """Replace the live body, keeping the previous one in history.

    Appends exactly one history entry holding the current body and version,
    then swaps in ``new_body`` and bumps ``version`` by one. The caller commits.
    """
    item.history.append(_snapshot(item, actor_id, note))
    item.content = new_body
    item.version = (item.version or 1) + 1
    item.last_modified_by = actor_id
    return item


def list_history(item: SiteContent) -> List[ContentHistory]:
    return list(item.history)


def restore(db: Session, item: SiteContent, history_index: int, actor_id: int) -> SiteContent:
    entries = list_history(item)
    if history_index < 0 or history_index >= len(entries):
        raise InvalidVersionIndex()

    target = entries[history_index]
    record_revision(
        item,
        new_body=target.content,
        actor_id=actor_id,
        note=f"Backup before restoring to version {target.version}",
    )
    db.commit()
    db.refresh(item)
    logger.info(
        "[content] %s restored to history[%s] (version %s) by user %s, now version %s",
        item.key, history_index, target.version, actor_id, item.version,
    )
    return item


def create_backup(db: Session, item: SiteContent, actor_id: int, note: Optional[str] = None) -> SiteContent:
    item.history.append(_snapshot(item, actor_id, note or MANUAL_BACKUP_NOTE))
    db.commit()
    db.refresh(item)
    return item


def to_response(index: int, row: ContentHistory) -> Dict[str, Any]:
    return {
        "index": index,
        "history_id": row.history_id,
        "content": row.content,
        "version": row.version,
        "modified_by": row.modified_by,
        "modified_at": row.modified_at,
        "note": row.note,
    }
