# services/comment_service.py
import logging
from typing import Any, Dict

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from database.models.content_model import Comment, Content
from database.models.user_model import User, UserRole
from services.content_service import paginate
from services.errors import NotFoundError, PermissionDeniedError, ValidationFailedError
from services.serializers import comment_to_dict

logger = logging.getLogger(__name__)

MAX_COMMENT_LENGTH = 1000


def list_comments(db: Session, content_id: int, page: int = 1, limit: int = 25) -> Dict[str, Any]:
    stmt = (
        select(Comment)
        .where(Comment.content_id == content_id)
        .options(selectinload(Comment.user))
        .order_by(Comment.created_at.desc(), Comment.id.desc())
    )
    return paginate(db, stmt, page, limit, serializer=comment_to_dict)


def add_comment(db: Session, user: User, content_id: int, text: str) -> Dict[str, Any]:
    text = (text or "").strip()
    if not text:
        raise ValidationFailedError("Comment text is required")
    if len(text) > MAX_COMMENT_LENGTH:
        raise ValidationFailedError(f"Comment must be at most {MAX_COMMENT_LENGTH} characters")
    if db.get(Content, content_id) is None:
        raise NotFoundError("Content not found")

    comment = Comment(user_id=user.id, content_id=content_id, text=text)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment_to_dict(comment)


def delete_comment(db: Session, user: User, content_id: int, comment_id: int) -> None:
    comment = db.get(Comment, comment_id)
    if comment is None or comment.content_id != content_id:
        raise NotFoundError("Comment not found")

    is_admin = user.role == UserRole.ADMIN
    if comment.user_id != user.id and not is_admin:
        raise PermissionDeniedError("Not authorized")

    db.delete(comment)
    db.commit()
    logger.info(f"Comment #{comment_id} deleted by {user.id}")
