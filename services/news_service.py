# File: services/news_service.py
import logging
import random
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from database.models.content_model import Content, ContentLike, SavedItem
from services.data_normalization_service import normalize_article, normalize_category, parse_published_at
from services.errors import ConflictError, NotFoundError, UpstreamUnavailable
from services.materialization_service import find_by_external_id, materialize
from services.mock_content import MockNewsProvider
from services.news_cache import ArticleStore, CategoryCache, DEFAULT_TTL_SECONDS
from services.serializers import content_to_dict, saved_item_to_dict
from state.state_schema import NormalizedArticle
from utils.id_normalization import parse_content_pk

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class NewsService:
    """
    News caching and materialization layer.

    Reads (fetch_category and the aggregation views) always succeed: upstream
    failures fall back to stale cache entries, then to mock content.
    Writes (toggle_like, save) materialize the article on first use and surface
    NotFoundError / ConflictError / SQLAlchemyError to the caller.

    Construct one per process; every collaborator is injected so tests can use
    fake clocks, upstreams and seeded randomness.
    """

    def __init__(
        self,
        upstream,
        session_factory: sessionmaker,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
        mock_provider: Optional[MockNewsProvider] = None,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ):
        self.upstream = upstream
        self.session_factory = session_factory
        self.clock = clock
        self.rng = rng or random.Random()
        self.mock_provider = mock_provider or MockNewsProvider(clock=clock)
        self.store = ArticleStore()
        self.cache = CategoryCache(ttl_seconds=ttl_seconds, clock=clock)

    # ------------------------------------------------------------
    # CATEGORY CACHE
    # ------------------------------------------------------------
    def fetch_category(self, category: Optional[str] = None) -> List[NormalizedArticle]:
        key = normalize_category(category)

        entry = self.cache.get_entry(key)
        if entry is not None and self.cache.is_fresh(entry):
            logger.info(f"Serving from cache for category: {key}")
            return self._copies(entry["articles"])

        try:
            raw = self.upstream.latest_news(key)
        except UpstreamUnavailable as e:
            logger.warning(f"⚠️ Upstream unavailable for '{key}' ({e})")

            stale = self.cache.get_entry(key)
            if stale is not None:
                logger.info(f"Serving STALE cache for category: {key}")
                return self._copies(stale["articles"])

            articles = self._remember(self.mock_provider.articles_for(key))
            self.cache.put(key, articles)
            logger.info(f"Serving {len(articles)} mock articles for category: {key}")
            return self._copies(articles)

        articles = self._remember(raw)
        self.cache.put(key, articles)
        logger.info(f"📥 Cached {len(articles)} articles for category: {key}")
        return self._copies(articles)

    def _remember(self, raw_articles: Iterable[Mapping[str, Any]]) -> List[NormalizedArticle]:
        articles = []
        for raw in raw_articles:
            article = normalize_article(raw)
            self.store.put(article)
            articles.append(article)
        return articles

    # ------------------------------------------------------------
    # AGGREGATION VIEWS (read-only over the cache)
    # ------------------------------------------------------------
    @staticmethod
    def _copies(articles: Iterable[NormalizedArticle]) -> List[NormalizedArticle]:
        return [dict(a) for a in articles]

    @staticmethod
    def _unique(articles: Iterable[NormalizedArticle]) -> List[NormalizedArticle]:
        # last write wins on duplicate ids
        return list({a["id"]: a for a in articles}.values())

    def _scan_or_mock(self) -> List[NormalizedArticle]:
        articles = list(self.cache.all_articles())
        if not articles:
            # Empty cache (fresh process): synthesize without touching the cache
            articles = self._remember(self.mock_provider.articles_for("general"))
        return articles

    def search(self, query: Optional[str], limit: int = 20) -> List[NormalizedArticle]:
        if not query or not query.strip():
            return []

        needle = query.strip().lower()
        matches = [
            a for a in self.cache.all_articles()
            if needle in (a.get("title") or "").lower()
            or needle in (a.get("description") or "").lower()
        ]

        unique = self._unique(matches)
        unique.sort(key=lambda a: (a.get("title") or "").lower())
        return self._copies(unique[:max(0, limit)])

    def trending(self, limit: int = 10) -> List[NormalizedArticle]:
        unique = self._unique(self._scan_or_mock())

        # Shuffle first so the stable sort breaks view ties randomly
        self.rng.shuffle(unique)
        unique.sort(key=lambda a: a.get("views") or 0, reverse=True)
        return self._copies(unique[:limit])

    def latest(self, page: int = 1, limit: int = 15) -> List[NormalizedArticle]:
        unique = self._unique(self._scan_or_mock())

        def _published(a: NormalizedArticle) -> datetime:
            return parse_published_at(a.get("published_at")) or _OLDEST

        unique.sort(key=_published, reverse=True)

        page = max(1, page)
        skip = (page - 1) * limit
        return self._copies(unique[skip:skip + limit])

    def recommended(self, count: int = 5) -> List[NormalizedArticle]:
        # No personalization yet: a uniform sample of what is cached
        unique = self._unique(self.cache.all_articles())
        return self._copies(self.rng.sample(unique, min(count, len(unique))))

    # ------------------------------------------------------------
    # LOOKUP
    # ------------------------------------------------------------
    def _resolve_ephemeral(self, article_id: str) -> Optional[NormalizedArticle]:
        article = self.store.get(article_id)
        if article is not None:
            return article
        return self.cache.find(article_id)

    def resolve_by_id(self, article_id: str) -> Dict[str, Any]:
        article = self._resolve_ephemeral(article_id)
        if article is not None:
            return dict(article)

        with self.session_factory() as db:
            content = find_by_external_id(db, article_id)
            if content is not None:
                return content_to_dict(content)

        raise NotFoundError("Article not found.")

    def _find_or_materialize(
        self, db: Session, content_id: str, fallback_article: Optional[Mapping[str, Any]] = None
    ) -> Content:
        # externalId, then store and cache, then primary key, then client copy
        content = find_by_external_id(db, content_id)
        if content is not None:
            return content

        article = self._resolve_ephemeral(content_id)
        if article is not None:
            return materialize(db, content_id, article)

        pk = parse_content_pk(content_id)
        content = db.get(Content, pk) if pk is not None else None
        if content is not None:
            return content

        if not fallback_article:
            raise NotFoundError("Article not found")

        return materialize(db, content_id, fallback_article)

    # ------------------------------------------------------------
    # DURABLE INTERACTIONS
    # ------------------------------------------------------------
    def toggle_like(self, article_id: str, user_id: str) -> Dict[str, Any]:
        with self.session_factory() as db:
            try:
                content = self._find_or_materialize(db, article_id)

                existing = db.scalar(
                    select(ContentLike)
                    .where(ContentLike.content_id == content.id)
                    .where(ContentLike.user_id == user_id)
                )

                if existing is not None:
                    db.delete(existing)
                    liked = False
                else:
                    db.add(ContentLike(content_id=content.id, user_id=user_id))
                    liked = True
                db.flush()

                # likes mirrors the ContentLike rows, recounted inside the UPDATE
                like_count = (
                    select(func.count(ContentLike.id))
                    .where(ContentLike.content_id == content.id)
                    .scalar_subquery()
                )
                db.execute(
                    update(Content)
                    .where(Content.id == content.id)
                    .values(likes=like_count)
                    .execution_options(synchronize_session=False)
                )
                db.commit()
                likes = db.scalar(select(Content.likes).where(Content.id == content.id))
            except NotFoundError:
                db.rollback()
                raise
            except SQLAlchemyError:
                db.rollback()
                logger.exception(f"Like toggle failed for {article_id}")
                raise

            return {"likes": likes, "liked": liked}

    def save(
        self, content_id: str, user_id: str, fallback_article: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        with self.session_factory() as db:
            try:
                content = self._find_or_materialize(db, content_id, fallback_article)

                already = db.scalar(
                    select(SavedItem)
                    .where(SavedItem.user_id == user_id)
                    .where(SavedItem.content_id == content.id)
                )
                if already is not None:
                    raise ConflictError("Content already saved")

                item = SavedItem(user_id=user_id, content_id=content.id)
                db.add(item)
                db.commit()
            except (NotFoundError, ConflictError):
                db.rollback()
                raise
            except IntegrityError as e:
                # A concurrent save of the same pair won the race
                db.rollback()
                raise ConflictError("Content already saved") from e
            except SQLAlchemyError:
                db.rollback()
                logger.exception(f"Save failed for {content_id}")
                raise

            db.refresh(item)
            logger.info(f"USER_SAVE user_id={user_id} content_id={item.content_id}")
            return saved_item_to_dict(item)

    def record_view(self, article_id: str) -> bool:
        """
        Increments the view counter of a persisted article.
        Best-effort: unknown ids and storage errors never fail the request.
        """
        with self.session_factory() as db:
            try:
                result = db.execute(
                    update(Content)
                    .where(Content.external_id == article_id)
                    .values(views=Content.views + 1)
                )
                db.commit()
                return bool(result.rowcount)
            except SQLAlchemyError:
                db.rollback()
                logger.warning(f"View count failed for {article_id}", exc_info=True)
                return False
