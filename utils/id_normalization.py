# utils/id_normalization.py
from typing import Any, Mapping, Optional
import hashlib


def resolve_article_id(article: Mapping[str, Any]) -> str:
    """
    Derives a stable identifier for an upstream article.

    - upstream id if the provider supplied one
    - otherwise md5(url), falling back to md5(title)

    Two url-less articles sharing a title collide. Accepted.
    """
    upstream_id = article.get("id")
    if upstream_id is not None and str(upstream_id).strip():
        return str(upstream_id).strip()

    basis = article.get("url") or article.get("title") or ""
    return hashlib.md5(str(basis).encode("utf-8")).hexdigest()


def parse_content_pk(raw_id: str) -> Optional[int]:
    """Returns the integer primary key if `raw_id` looks like one."""
    if raw_id is None:
        return None
    raw_id = str(raw_id).strip()
    if not raw_id.isdigit():
        return None
    return int(raw_id)
