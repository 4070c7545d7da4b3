# database/models/content_model.py
from sqlalchemy import Column, Integer, String, Text, JSON, DateTime, Enum, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from database.db import Base
from datetime import datetime, timezone
import enum


def _utcnow():
    return datetime.now(timezone.utc)


class ContentType(str, enum.Enum):
    NEWS = "news"
    JOURNAL = "journal"
    BOOK = "book"


class Content(Base):
    __tablename__ = "contents"
    __table_args__ = (
        Index("ix_contents_type_category", "type", "category"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Stable article identifier from the news cache (md5 / upstream id)
    external_id = Column(String(255), unique=True, nullable=True)

    type = Column(Enum(ContentType, values_callable=lambda x: [e.value for e in x]), nullable=False, default=ContentType.NEWS)
    title = Column(String(1024), nullable=False)
    author = Column(String(255), nullable=True)
    source = Column(String(255), nullable=True)
    url = Column(String(2048), nullable=False, default="")
    image_url = Column(String(2048), nullable=True)
    description = Column(Text, nullable=True)
    body = Column(Text, nullable=True)
    summary = Column(Text, nullable=True)  # filled lazily by the AI summary endpoint
    category = Column(String(255), nullable=True)
    published_at = Column(DateTime(timezone=True), nullable=True)
    reading_time = Column(Integer, nullable=True)  # minutes

    views = Column(Integer, default=0, nullable=False)
    likes = Column(Integer, default=0, nullable=False)  # == len(liked_by)

    topics = Column(JSON, default=list)
    content_metadata = Column(JSON, default=lambda: {})

    created_at = Column(DateTime(timezone=True), default=_utcnow)

    # Relationships
    liked_by = relationship("ContentLike", back_populates="content", cascade="all, delete-orphan")
    saved_items = relationship("SavedItem", back_populates="content", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="content", cascade="all, delete-orphan")


class ContentLike(Base):
    __tablename__ = "content_likes"
    __table_args__ = (
        UniqueConstraint("content_id", "user_id", name="uq_content_like"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    content_id = Column(Integer, ForeignKey("contents.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)

    content = relationship("Content", back_populates="liked_by")


class SavedItem(Base):
    __tablename__ = "saved_items"
    __table_args__ = (
        UniqueConstraint("user_id", "content_id", name="uq_saved_user_content"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content_id = Column(Integer, ForeignKey("contents.id", ondelete="CASCADE"), nullable=False, index=True)
    saved_at = Column(DateTime(timezone=True), default=_utcnow)

    user = relationship("User", back_populates="saved_items")
    content = relationship("Content", back_populates="saved_items")


class Comment(Base):
    __tablename__ = "comments"
    __table_args__ = (
        Index("ix_comments_content_created", "content_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content_id = Column(Integer, ForeignKey("contents.id", ondelete="CASCADE"), nullable=False)
    text = Column(String(1000), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)

    user = relationship("User", back_populates="comments")
    content = relationship("Content", back_populates="comments")
