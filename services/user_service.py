# services/user_service.py
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.attributes import flag_modified

from database.models.content_model import SavedItem
from database.models.user_model import (
    HISTORY_LIMIT,
    SUPPORTED_LANGUAGES,
    SubscriptionPlan,
    SubscriptionStatus,
    User,
)
from services.errors import ValidationFailedError
from services.serializers import saved_item_to_dict, user_to_dict

logger = logging.getLogger(__name__)


def get_dashboard(db: Session, user: User) -> Dict[str, Any]:
    bookmarks = db.scalars(
        select(SavedItem)
        .where(SavedItem.user_id == user.id)
        .options(selectinload(SavedItem.content))
        .order_by(SavedItem.saved_at.desc())
    ).all()

    data = user_to_dict(user)
    data["bookmarks"] = [saved_item_to_dict(b) for b in bookmarks]
    return data


def update_profile_preferences(
    db: Session, user: User, language: Optional[str] = None, categories: Optional[List[str]] = None
) -> Dict[str, Any]:
    if language:
        if language not in SUPPORTED_LANGUAGES:
            raise ValidationFailedError(f"Unsupported language '{language}'")
        user.language = language

    if categories is not None:
        prefs = dict(user.preferences or {})
        prefs["categories"] = categories
        user.preferences = prefs

    db.commit()
    db.refresh(user)
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "language": user.language,
        "preferences": dict(user.preferences or {}),
    }


def get_preferences(user: User) -> Dict[str, Any]:
    return dict(user.preferences or {})


def update_reading_preferences(
    db: Session,
    user: User,
    categories: Optional[List[str]] = None,
    sources: Optional[List[str]] = None,
    reading_time: Optional[str] = None,
) -> Dict[str, Any]:
    current = dict(user.preferences or {})
    user.preferences = {
        "categories": categories or current.get("categories") or [],
        "sources": sources or current.get("sources") or [],
        "reading_time": reading_time or current.get("reading_time") or "any",
    }
    db.commit()
    db.refresh(user)
    return dict(user.preferences)


def add_to_history(db: Session, user: User, article_id: str, title: Optional[str], url: Optional[str]) -> List[Dict[str, Any]]:
    """Moves the article to the top of the reading history, capped at HISTORY_LIMIT."""
    history = [h for h in (user.history or []) if h.get("article_id") != article_id]
    history.insert(0, {
        "article_id": article_id,
        "title": title,
        "url": url,
        "viewed_at": datetime.now(timezone.utc).isoformat(),
    })
    user.history = history[:HISTORY_LIMIT]
    flag_modified(user, "history")
    db.commit()
    db.refresh(user)
    return list(user.history)


def update_subscription(db: Session, user: User, plan: str) -> Dict[str, Any]:
    try:
        selected = SubscriptionPlan(plan)
    except ValueError as e:
        raise ValidationFailedError("Invalid plan selected") from e

    now = datetime.now(timezone.utc)
    try:
        renewal = now.replace(year=now.year + 1)
    except ValueError:
        # Feb 29th
        renewal = now.replace(year=now.year + 1, day=28)

    user.subscription_plan = selected
    user.subscription_status = SubscriptionStatus.ACTIVE
    user.subscription_start = now
    user.subscription_renewal = renewal
    db.commit()
    db.refresh(user)

    logger.info(f"USER_SUBSCRIPTION user_id={user.id} plan={selected.value}")
    return user_to_dict(user)["subscription"]
