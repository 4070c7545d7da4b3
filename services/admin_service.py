# services/admin_service.py
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from database.models.content_model import Comment, Content, ContentType, SavedItem
from database.models.user_model import User
from services.serializers import content_to_dict, user_to_dict
from utils.sanitization import escape_like

logger = logging.getLogger(__name__)


def list_users(db: Session, page: int = 1, limit: int = 25, search: Optional[str] = None) -> Dict[str, Any]:
    stmt = select(User)
    if search and search.strip():
        pattern = f"%{escape_like(search.strip())}%"
        stmt = stmt.where(or_(User.name.ilike(pattern, escape="\\"), User.email.ilike(pattern, escape="\\")))

    page = max(1, page)
    total = db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
    users = db.scalars(
        stmt.order_by(User.created_at.desc()).offset((page - 1) * limit).limit(limit)
    ).all()

    return {
        "users": [user_to_dict(u) for u in users],
        "current_page": page,
        "total_pages": math.ceil(total / limit) if limit else 0,
        "total": total,
    }


def _count(db: Session, stmt) -> int:
    return db.scalar(stmt) or 0


def get_analytics(db: Session, top: int = 10) -> Dict[str, Any]:
    thirty_days_ago = datetime.now(timezone.utc) - timedelta(days=30)

    by_type = dict(
        db.execute(select(Content.type, func.count(Content.id)).group_by(Content.type)).all()
    )

    save_count = func.count(SavedItem.id).label("save_count")
    most_saved = db.execute(
        select(Content, save_count)
        .join(SavedItem, SavedItem.content_id == Content.id)
        .group_by(Content.id)
        .order_by(save_count.desc(), Content.id)
        .limit(top)
    ).all()

    return {
        "total_users": _count(db, select(func.count(User.id))),
        "total_content": _count(db, select(func.count(Content.id))),
        "total_comments": _count(db, select(func.count(Comment.id))),
        "total_saves": _count(db, select(func.count(SavedItem.id))),
        "content_by_type": {
            "news": by_type.get(ContentType.NEWS, 0),
            "journals": by_type.get(ContentType.JOURNAL, 0),
            "books": by_type.get(ContentType.BOOK, 0),
        },
        "recent_users": _count(db, select(func.count(User.id)).where(User.created_at >= thirty_days_ago)),
        "most_saved_content": [
            {"count": count, "content": content_to_dict(content)} for content, count in most_saved
        ],
    }
