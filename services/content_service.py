# services/content_service.py
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database.models.content_model import Content, ContentType, SavedItem
from database.models.user_model import User
from services import ai_service
from services.errors import NotFoundError
from services.serializers import content_to_dict
from utils.sanitization import escape_like

logger = logging.getLogger(__name__)

SORT_OPTIONS = {
    "newest": Content.published_at.desc(),
    "oldest": Content.published_at.asc(),
    "popularity": Content.views.desc(),
    "readingTime": Content.reading_time.asc(),
}


def paginate(db: Session, stmt, page: int, limit: int, serializer=content_to_dict) -> Dict[str, Any]:
    page = max(1, page)
    total = db.scalar(select(func.count()).select_from(stmt.order_by(None).subquery())) or 0
    rows = db.scalars(stmt.offset((page - 1) * limit).limit(limit)).all()
    return {
        "items": [serializer(r) for r in rows],
        "current_page": page,
        "total_pages": math.ceil(total / limit) if limit else 0,
        "total": total,
    }


def search_clause(search: str):
    pattern = f"%{escape_like(search.strip())}%"
    return or_(
        Content.title.ilike(pattern, escape="\\"),
        Content.description.ilike(pattern, escape="\\"),
    )


def list_contents(
    db: Session,
    content_type: ContentType,
    page: int = 1,
    limit: int = 25,
    category: Optional[str] = None,
    source: Optional[str] = None,
    search: Optional[str] = None,
    sort: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> Dict[str, Any]:
    stmt = select(Content).where(Content.type == content_type)

    if category:
        stmt = stmt.where(Content.category == category)
    if source:
        stmt = stmt.where(Content.source == source)
    if search and search.strip():
        stmt = stmt.where(search_clause(search))
    if start_date and end_date:
        stmt = stmt.where(Content.published_at >= start_date, Content.published_at <= end_date)

    order = SORT_OPTIONS.get(sort or "newest", SORT_OPTIONS["newest"])
    stmt = stmt.order_by(order, Content.id.desc())
    return paginate(db, stmt, page, limit)


def get_content(db: Session, content_id: int) -> Content:
    content = db.get(Content, content_id)
    if content is None:
        raise NotFoundError("Content not found")
    return content


def get_or_create_summary(db: Session, content_id: int) -> str:
    """Returns the persisted summary, generating and storing it on first request."""
    content = get_content(db, content_id)
    if content.summary:
        return content.summary

    payload = {"title": content.title, "description": content.description}
    # No transaction stays open across the AI call
    db.rollback()
    summary = ai_service.generate_summary(payload)

    try:
        content = get_content(db, content_id)
        if content.summary:
            # Another request stored one first
            return content.summary
        content.summary = summary
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Storing summary failed for content #{content_id}")
        raise
    return summary


def create_content(db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
    content = Content(
        type=ContentType(data["type"]),
        title=data["title"],
        author=data.get("author"),
        source=data.get("source"),
        url=data.get("url") or "",
        description=data.get("description"),
        category=data.get("category"),
        image_url=data.get("image_url"),
        published_at=datetime.now(timezone.utc),
    )
    db.add(content)
    db.commit()
    db.refresh(content)
    logger.info(f"Content #{content.id} added manually")
    return content_to_dict(content)


def recommendations_for(db: Session, user: User, limit: int = 10) -> Dict[str, Any]:
    """Persisted content in the categories of the user's saved items, newest first."""
    saved = db.scalars(
        select(SavedItem).where(SavedItem.user_id == user.id).order_by(SavedItem.saved_at.desc()).limit(50)
    ).all()

    categories = sorted({s.content.category for s in saved if s.content and s.content.category})

    stmt = select(Content)
    if categories:
        stmt = stmt.where(Content.category.in_(categories))
    stmt = stmt.order_by(Content.published_at.desc(), Content.id.desc()).limit(limit)

    recommendations = [content_to_dict(c) for c in db.scalars(stmt).all()]
    suggestions = ai_service.suggest_categories(user.preferences, [s.content.title for s in saved if s.content])
    return {"recommendations": recommendations, "suggested_categories": suggestions or []}


def daily_brief_for(db: Session, user: User, days: int = 3, limit: int = 10) -> Dict[str, Any]:
    categories: List[str] = (user.preferences or {}).get("categories") or []
    since = datetime.now(timezone.utc) - timedelta(days=days)

    stmt = select(Content).where(Content.published_at >= since)
    if categories:
        stmt = stmt.where(Content.category.in_(categories))
    stmt = stmt.order_by(Content.published_at.desc()).limit(limit)

    items = [content_to_dict(c) for c in db.scalars(stmt).all()]
    return {
        "date": datetime.now(timezone.utc).isoformat(),
        "content": items,
        "briefing": ai_service.generate_daily_brief(items),
        "message": "Your personalized daily briefing",
    }
