# database/models/user_model.py
from sqlalchemy import Column, String, DateTime, Enum, JSON
from sqlalchemy.orm import relationship
from database.db import Base
from datetime import datetime, timezone
import enum


def _utcnow():
    return datetime.now(timezone.utc)


def _default_preferences():
    return {"categories": ["general"], "sources": [], "reading_time": "any"}


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class SubscriptionPlan(str, enum.Enum):
    FREE = "free"
    PREMIUM = "premium"
    SUPPORTER = "supporter"


class SubscriptionStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    CANCELED = "canceled"


SUPPORTED_LANGUAGES = ("en", "hi", "es", "fr", "mr")  # English, Hindi, Spanish, French, Marathi
HISTORY_LIMIT = 50


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)  # UUID
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=True)  # null for Google-only accounts
    google_id = Column(String(255), nullable=True)
    role = Column(Enum(UserRole, values_callable=lambda x: [e.value for e in x]), default=UserRole.USER, nullable=False)
    avatar = Column(String(1024), default="")
    language = Column(String(8), default="en", nullable=False)

    preferences = Column(JSON, default=_default_preferences)
    history = Column(JSON, default=list)  # newest first, capped at HISTORY_LIMIT

    subscription_plan = Column(
        Enum(SubscriptionPlan, values_callable=lambda x: [e.value for e in x]),
        default=SubscriptionPlan.FREE, nullable=False
    )
    subscription_status = Column(
        Enum(SubscriptionStatus, values_callable=lambda x: [e.value for e in x]),
        default=SubscriptionStatus.ACTIVE, nullable=False
    )
    subscription_start = Column(DateTime(timezone=True), nullable=True)
    subscription_renewal = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=_utcnow)

    # Relationships
    saved_items = relationship("SavedItem", back_populates="user", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="user", cascade="all, delete-orphan")
    collections = relationship("Collection", back_populates="owner", cascade="all, delete-orphan")
