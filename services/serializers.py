# services/serializers.py
from datetime import datetime
from typing import Any, Dict, Optional

from database.models.content_model import Content, SavedItem, Comment
from database.models.collection_model import Collection
from database.models.user_model import User


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _enum_value(value: Any) -> Any:
    return value.value if hasattr(value, "value") else value


def content_to_dict(content: Content) -> Dict[str, Any]:
    return {
        "id": content.id,
        "external_id": content.external_id,
        "type": _enum_value(content.type),
        "title": content.title,
        "author": content.author,
        "source": content.source,
        "url": content.url,
        "image_url": content.image_url,
        "description": content.description,
        "summary": content.summary,
        "category": content.category,
        "published_at": _iso(content.published_at),
        "reading_time": content.reading_time,
        "views": content.views or 0,
        "likes": content.likes or 0,
        "topics": list(content.topics or []),
        "metadata": dict(content.content_metadata or {}),
        "created_at": _iso(content.created_at),
    }


def user_public_dict(user: User) -> Dict[str, Any]:
    return {"id": user.id, "name": user.name, "avatar": user.avatar or ""}


def user_to_dict(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": _enum_value(user.role),
        "avatar": user.avatar or "",
        "language": user.language,
        "preferences": dict(user.preferences or {}),
        "history": list(user.history or []),
        "subscription": {
            "plan": _enum_value(user.subscription_plan),
            "status": _enum_value(user.subscription_status),
            "start_date": _iso(user.subscription_start),
            "renewal_date": _iso(user.subscription_renewal),
        },
        "created_at": _iso(user.created_at),
    }


def saved_item_to_dict(item: SavedItem) -> Dict[str, Any]:
    return {
        "id": item.id,
        "user_id": item.user_id,
        "content": content_to_dict(item.content) if item.content else None,
        "saved_at": _iso(item.saved_at),
    }


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    return {
        "id": comment.id,
        "content_id": comment.content_id,
        "user": user_public_dict(comment.user) if comment.user else None,
        "text": comment.text,
        "created_at": _iso(comment.created_at),
    }


def collection_to_dict(collection: Collection) -> Dict[str, Any]:
    return {
        "id": collection.id,
        "name": collection.name,
        "description": collection.description,
        "contents": [content_to_dict(i.content) for i in collection.items if i.content],
        "created_at": _iso(collection.created_at),
        "updated_at": _iso(collection.updated_at),
    }
