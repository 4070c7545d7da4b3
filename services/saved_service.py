# services/saved_service.py
import logging
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from database.models.content_model import Content, ContentType, SavedItem
from database.models.user_model import User
from services.content_service import paginate
from services.errors import NotFoundError, PermissionDeniedError
from services.materialization_service import find_by_external_id
from services.serializers import saved_item_to_dict
from utils.id_normalization import parse_content_pk

logger = logging.getLogger(__name__)


def list_saved(db: Session, user: User, page: int = 1, limit: int = 25, content_type: Optional[str] = None) -> Dict[str, Any]:
    stmt = (
        select(SavedItem)
        .where(SavedItem.user_id == user.id)
        .options(selectinload(SavedItem.content))
        .order_by(SavedItem.saved_at.desc(), SavedItem.id.desc())
    )
    if content_type:
        stmt = stmt.join(Content, SavedItem.content_id == Content.id).where(Content.type == ContentType(content_type))
    return paginate(db, stmt, page, limit, serializer=saved_item_to_dict)


def remove_saved(db: Session, user: User, saved_id: int) -> None:
    item = db.get(SavedItem, saved_id)
    if item is None:
        raise NotFoundError("Saved item not found")
    if item.user_id != user.id:
        raise PermissionDeniedError("Not authorized")

    db.delete(item)
    db.commit()


def remove_saved_by_content(db: Session, user: User, content_id: str) -> None:
    """`content_id` may be the integer primary key or the external id."""
    content = find_by_external_id(db, content_id)
    if content is None:
        pk = parse_content_pk(content_id)
        content = db.get(Content, pk) if pk is not None else None
    if content is None:
        raise NotFoundError("Content not found")

    item = db.scalar(
        select(SavedItem).where(SavedItem.user_id == user.id).where(SavedItem.content_id == content.id)
    )
    if item is None:
        raise NotFoundError("Saved item not found")

    db.delete(item)
    db.commit()
