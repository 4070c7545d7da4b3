#File: services/data_normalization_service.py
import logging
import math
import re
from datetime import datetime, timezone
from typing import Any, Optional

from state.state_schema import ExternalArticle, NormalizedArticle
from utils.id_normalization import resolve_article_id
from utils.sanitization import clean_text

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "general"

# Frontend labels -> upstream category keys
CATEGORY_ALIASES = {
    "academic": "academia",
    "human & environment": "world",
    "political": "politics",
    "financial market": "finance",
    "music": "entertainment",
    "all": "general",
}

WORDS_PER_MINUTE = 200


def normalize_category(label: Optional[str]) -> str:
    if not label or not str(label).strip():
        return DEFAULT_CATEGORY
    key = str(label).strip().lower()
    return CATEGORY_ALIASES.get(key, key)


def parse_published_at(value: Any) -> Optional[datetime]:
    """
    Parses upstream publish timestamps into aware UTC datetimes.
    Supports: datetime objects, ISO strings, Currents' 'YYYY-MM-DD HH:MM:SS +0000'.
    Returns None when nothing sensible can be extracted.
    """
    if not value:
        return None

    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        dt = None

        # 1. ISO (arXiv / NewsAPI style '2024-05-01T10:00:00Z')
        try:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            pass

        # 2. Currents style
        if dt is None:
            try:
                dt = datetime.strptime(text, "%Y-%m-%d %H:%M:%S %z")
            except ValueError:
                pass

        # 3. Bare date somewhere in the string
        if dt is None:
            match = re.search(r"(\d{4})-(\d{2})-(\d{2})", text)
            if not match:
                return None
            try:
                dt = datetime(int(match.group(1)), int(match.group(2)), int(match.group(3)))
            except ValueError:
                return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def normalize_article(external: ExternalArticle) -> NormalizedArticle:
    """
    Turns an ExternalArticle into the shape kept by the article store and cache.
    Identity is derived before any field is cleaned so the hash sees the raw url/title.
    """
    article_id = resolve_article_id(external)

    title = clean_text(external.get("title")) or "Untitled"
    description = clean_text(external.get("description"))
    published = parse_published_at(external.get("published_at"))
    author = clean_text(external.get("author")) or "Unknown"

    return NormalizedArticle(
        id=article_id,
        title=title,
        description=description,
        body=external.get("body") or description,
        image_url=external.get("image_url"),
        published_at=published.isoformat() if published else None,
        author=author,
        source_name=external.get("source_name"),
        source=clean_text(external.get("source_name")) or author,
        url=external.get("url"),
        category=clean_text(external.get("category")) or DEFAULT_CATEGORY,
    )


def estimate_reading_time(*texts: Optional[str]) -> int:
    words = sum(len((t or "").split()) for t in texts)
    return max(1, math.ceil(words / WORDS_PER_MINUTE))
