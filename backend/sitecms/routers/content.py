"""Public content API router. Only published blocks are exposed; no login needed."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sitecms.database import get_db
from sitecms.models.site_content import Section
from sitecms.schemas.site_content import GroupedContent, PublicContentEnvelope, PublicContentList
from sitecms.services import content_service

router = APIRouter(prefix="/api/content", tags=["content"])


@router.get("", response_model=GroupedContent)
def list_all_published(db: Session = Depends(get_db)):
    items = content_service.list_published(db)
    return {"content": content_service.group_by_section(items)}


@router.get("/section/{section}", response_model=PublicContentList)
def list_section(section: Section, db: Session = Depends(get_db)):
    return {"content": content_service.list_published(db, section=section)}


@router.get("/key/{key}", response_model=PublicContentEnvelope)
def get_by_key(key: str, db: Session = Depends(get_db)):
    return {"content": content_service.get_by_key(db, key)}
