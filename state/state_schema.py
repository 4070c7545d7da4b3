# File: state/state_schema.py
from typing import TypedDict, List, Optional


class ExternalArticle(TypedDict, total=False):
    # Provider-assigned id, when the provider has one
    id: Optional[str]

    title: str
    description: str
    body: str
    image_url: Optional[str]
    published_at: Optional[str]   # ISO 8601
    author: str
    source_name: Optional[str]
    url: Optional[str]
    category: str


class NormalizedArticle(ExternalArticle, total=False):
    source: str
    views: int   # never set by the cache; only persisted records count views


class CacheEntry(TypedDict):
    articles: List[NormalizedArticle]
    inserted_at: float   # clock seconds


