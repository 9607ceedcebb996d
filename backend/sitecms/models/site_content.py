"""Editable site content blocks and their revision history."""

from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, JSON, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sitecms.database import Base


class Section(str, Enum):
    HERO = "hero"
    ABOUT = "about"
    PROGRAMS = "programs"
    TESTIMONIALS = "testimonials"
    CTA = "cta"
    FOOTER = "footer"
    NAVIGATION = "navigation"
    STATISTICS = "statistics"
    GENERAL = "general"


class ContentType(str, Enum):
    TEXT = "text"
    HTML = "html"
    MARKDOWN = "markdown"
    JSON = "json"


class SiteContent(Base):
    __tablename__ = "site_content"

    content_id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(100), unique=True, nullable=False, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    content_type = Column(String(20), nullable=False, default=ContentType.TEXT.value)
    section = Column(String(30), nullable=False, index=True)
    is_published = Column(Boolean, nullable=False, default=True, index=True)
    order = Column("sort_order", Integer, nullable=False, default=0, index=True)

    # Metadata
    description = Column(String(500))
    keywords = Column(JSON)
    author = Column(String(100))
    last_modified_by = Column(Integer, ForeignKey("users.user_id"), nullable=True)

    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    history = relationship(
        "ContentHistory",
        back_populates="item",
        order_by="ContentHistory.history_id",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("idx_site_content_section_order", "section", "sort_order"),
    )


class ContentHistory(Base):
    __tablename__ = "content_history"

    history_id = Column(Integer, primary_key=True, autoincrement=True)
    content_id = Column(Integer, ForeignKey("site_content.content_id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)  # body as it was before the change
    version = Column(Integer, nullable=False)
    modified_by = Column(Integer, ForeignKey("users.user_id"), nullable=True)
    modified_at = Column(DateTime, nullable=False)
    note = Column(String(200))

    item = relationship("SiteContent", back_populates="history")
