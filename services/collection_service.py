# services/collection_service.py
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from database.models.collection_model import Collection, CollectionItem
from database.models.content_model import Content
from database.models.user_model import User
from services.errors import NotFoundError, PermissionDeniedError, ValidationFailedError
from services.serializers import collection_to_dict

logger = logging.getLogger(__name__)


def _ordered_unique(ids: List[int]) -> List[int]:
    return list(dict.fromkeys(ids))


def _build_items(db: Session, content_ids: List[int]) -> List[CollectionItem]:
    content_ids = _ordered_unique(content_ids)
    if not content_ids:
        return []

    existing = set(db.scalars(select(Content.id).where(Content.id.in_(content_ids))).all())
    missing = [cid for cid in content_ids if cid not in existing]
    if missing:
        raise ValidationFailedError(f"Unknown content ids: {missing}")

    return [CollectionItem(content_id=cid, position=i) for i, cid in enumerate(content_ids)]


def _owned(db: Session, user: User, collection_id: int) -> Collection:
    collection = db.get(Collection, collection_id)
    if collection is None:
        raise NotFoundError("Collection not found")
    if collection.user_id != user.id:
        raise PermissionDeniedError("Not authorized")
    return collection


def list_collections(db: Session, user: User) -> List[Dict[str, Any]]:
    collections = db.scalars(
        select(Collection)
        .where(Collection.user_id == user.id)
        .options(selectinload(Collection.items).selectinload(CollectionItem.content))
        .order_by(Collection.updated_at.desc(), Collection.id.desc())
    ).all()
    return [collection_to_dict(c) for c in collections]


def create_collection(
    db: Session, user: User, name: str, description: Optional[str] = None, contents: Optional[List[int]] = None
) -> Dict[str, Any]:
    collection = Collection(user_id=user.id, name=name, description=description)
    collection.items = _build_items(db, contents or [])
    db.add(collection)
    db.commit()
    db.refresh(collection)
    return collection_to_dict(collection)


def update_collection(
    db: Session,
    user: User,
    collection_id: int,
    name: Optional[str] = None,
    description: Optional[str] = None,
    contents: Optional[List[int]] = None,
) -> Dict[str, Any]:
    collection = _owned(db, user, collection_id)

    if name:
        collection.name = name
    if description is not None:
        collection.description = description
    if contents is not None:
        items = _build_items(db, contents)
        # old rows must be gone before the new ones hit uq_collection_content
        collection.items.clear()
        db.flush()
        collection.items = items

    db.commit()
    db.refresh(collection)
    return collection_to_dict(collection)


def delete_collection(db: Session, user: User, collection_id: int) -> None:
    collection = _owned(db, user, collection_id)
    db.delete(collection)
    db.commit()
