# File: services/materialization_service.py
import logging
from typing import Any, Dict, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from database.models.content_model import Content, ContentType
from services.data_normalization_service import estimate_reading_time, parse_published_at
from utils.sanitization import clean_text

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def find_by_external_id(db: Session, external_id: str) -> Optional[Content]:
    return db.scalar(select(Content).where(Content.external_id == external_id))


def _content_values(external_id: Optional[str], article: Mapping[str, Any], content_type: str) -> Dict[str, Any]:
    description = article.get("description") or ""
    body = article.get("body") or description
    return {
        "external_id": external_id,
        "type": ContentType(content_type),
        "title": clean_text(article.get("title")) or "Untitled",
        "author": article.get("author"),
        "source": article.get("source"),
        "url": article.get("url") or "",
        "image_url": article.get("image_url"),
        "description": description,
        "body": body,
        "category": article.get("category"),
        "published_at": parse_published_at(article.get("published_at")),
        "reading_time": estimate_reading_time(body),
        "views": 0,
        "likes": 0,
        "topics": list(article.get("topics") or []),
        "content_metadata": dict(article.get("metadata") or {}),
    }


def insert_if_absent(db: Session, external_id: str, article: Mapping[str, Any], content_type: str = "news") -> bool:
    """
    Single conditional insert keyed by external_id.
    Returns True if this call created the row. Does not commit.
    """
    values = _content_values(external_id, article, content_type)
    dialect = db.get_bind().dialect.name
    insert_fn = _DIALECT_INSERTS.get(dialect)

    if insert_fn is not None:
        stmt = insert_fn(Content).values(**values).on_conflict_do_nothing(index_elements=["external_id"])
        result = db.execute(stmt)
        return bool(result.rowcount)

    # Other backends: check-then-insert, the unique constraint rejects the loser
    if find_by_external_id(db, external_id) is not None:
        return False
    db.add(Content(**values))
    db.flush()
    return True


def materialize(db: Session, external_id: str, article: Mapping[str, Any], content_type: str = "news") -> Content:
    """
    Promotes an ephemeral article into a durable Content row, reusing any row
    that already carries the same external_id. Does not commit.
    """
    created = insert_if_absent(db, external_id, article, content_type)
    content = find_by_external_id(db, external_id)
    if created:
        logger.info(f"📦 Materialized article {external_id} as content #{content.id}")
    return content
