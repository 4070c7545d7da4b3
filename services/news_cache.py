# services/news_cache.py
import logging
import time
from typing import Callable, Dict, Iterator, List, Optional

from state.state_schema import CacheEntry, NormalizedArticle

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 15 * 60


class ArticleStore:
    """
    Process-lifetime id -> article map.
    Never evicted: grows with every distinct article seen until restart.
    """

    def __init__(self):
        self._articles: Dict[str, NormalizedArticle] = {}

    def put(self, article: NormalizedArticle) -> None:
        self._articles[article["id"]] = article

    def get(self, article_id: str) -> Optional[NormalizedArticle]:
        return self._articles.get(article_id)

    def __len__(self) -> int:
        return len(self._articles)


class CategoryCache:
    """
    category key -> (articles, inserted_at).
    Expired entries are kept so they can be served when the upstream is down.
    No locking: concurrent writers on one key race and the last one wins.
    """

    def __init__(self, ttl_seconds: int = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        return self._entries.get(key)

    def put(self, key: str, articles: List[NormalizedArticle]) -> CacheEntry:
        entry = CacheEntry(articles=list(articles), inserted_at=self.clock())
        self._entries[key] = entry
        return entry

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self.clock() - entry["inserted_at"] < self.ttl_seconds

    def is_empty(self) -> bool:
        return not any(entry["articles"] for entry in self._entries.values())

    def all_articles(self) -> Iterator[NormalizedArticle]:
        # Snapshot the entries so a concurrent put() can't break iteration
        for entry in list(self._entries.values()):
            yield from entry["articles"]

    def find(self, article_id: str) -> Optional[NormalizedArticle]:
        for article in self.all_articles():
            if article["id"] == article_id:
                return article
        return None

    def keys(self) -> List[str]:
        return list(self._entries.keys())
