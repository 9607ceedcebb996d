"""Pydantic request/response contracts for site content and its history."""

from datetime import datetime
from typing import Annotated, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, Field, StringConstraints

from sitecms.models.site_content import ContentType, Section

KEY_PATTERN = r"^[a-z0-9_-]+$"


def _strip_required(value: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValueError("Value cannot be empty")
    return text


ContentKey = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=100, pattern=KEY_PATTERN),
]
Title = Annotated[str, Field(max_length=200), AfterValidator(_strip_required)]
Body = Annotated[str, AfterValidator(_strip_required)]


class ContentCreate(BaseModel):
    key: ContentKey
    title: Title
    content: Body
    section: Section
    content_type: ContentType = Field(default=ContentType.TEXT, alias="type")
    order: int = Field(default=0, ge=0)
    is_published: bool = True
    description: Optional[str] = Field(default=None, max_length=500)
    keywords: Optional[List[str]] = None
    author: Optional[str] = Field(default=None, max_length=100)

    model_config = {"populate_by_name": True}


class ContentUpdate(BaseModel):
    key: Optional[ContentKey] = None
    title: Optional[Title] = None
    content: Optional[Body] = None
    section: Optional[Section] = None
    content_type: Optional[ContentType] = Field(default=None, alias="type")
    order: Optional[int] = Field(default=None, ge=0)
    is_published: Optional[bool] = None
    description: Optional[str] = Field(default=None, max_length=500)
    keywords: Optional[List[str]] = None
    author: Optional[str] = Field(default=None, max_length=100)

    model_config = {"populate_by_name": True}


class BackupRequest(BaseModel):
    note: Optional[str] = Field(default=None, max_length=200)


class PublicContentOut(BaseModel):
    content_id: int
    key: str
    title: str
    content: str
    content_type: str = Field(serialization_alias="type")
    section: str
    is_published: bool
    order: int
    description: Optional[str] = None
    keywords: Optional[List[str]] = None
    author: Optional[str] = None
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ContentOut(PublicContentOut):
    last_modified_by: Optional[int] = None


class HistoryEntryOut(BaseModel):
    index: int
    history_id: int
    content: str
    version: int
    modified_by: Optional[int] = None
    modified_at: datetime
    note: Optional[str] = None


class PublicContentList(BaseModel):
    content: List[PublicContentOut]


class GroupedContent(BaseModel):
    content: Dict[str, List[PublicContentOut]]


class PublicContentEnvelope(BaseModel):
    content: PublicContentOut


class ContentList(BaseModel):
    content: List[ContentOut]


class ContentEnvelope(BaseModel):
    content: ContentOut


class ContentMessage(BaseModel):
    message: str
    content: ContentOut


class HistoryList(BaseModel):
    history: List[HistoryEntryOut]


class ContentStatsOut(BaseModel):
    total: int
