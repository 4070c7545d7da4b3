import uuid

import pytest
from sqlalchemy import event, func, select

from database.models.content_model import Content, ContentLike, SavedItem
from services.errors import ConflictError, NotFoundError
from services.materialization_service import insert_if_absent
from services.mock_content import MOCK_TITLES
from services.news_service import NewsService
from database.db import SessionLocal
from database.models.user_model import User


# ------------------------------------------------------------
# CATEGORY CACHE
# ------------------------------------------------------------
def test_fresh_entry_served_without_upstream_call(news_service, upstream, article_factory):
    upstream.batches["technology"] = [article_factory("t1", "Chips")]

    first = news_service.fetch_category("technology")
    second = news_service.fetch_category("technology")

    assert [a["id"] for a in first] == ["t1"]
    assert second == first
    assert upstream.calls == ["technology"]


def test_expired_entry_is_refetched(news_service, upstream, clock, article_factory):
    upstream.batches["technology"] = [article_factory("t1", "Chips")]
    news_service.fetch_category("technology")

    clock.advance(899)
    news_service.fetch_category("technology")
    assert len(upstream.calls) == 1

    upstream.batches["technology"] = [article_factory("t2", "Batteries")]
    clock.advance(2)
    refreshed = news_service.fetch_category("technology")

    assert [a["id"] for a in refreshed] == ["t2"]
    assert len(upstream.calls) == 2


def test_stale_entry_served_when_upstream_fails(news_service, upstream, clock, article_factory):
    upstream.batches["science"] = [article_factory("s1", "Comets", category="science")]
    news_service.fetch_category("science")

    clock.advance(3600)
    upstream.failing = True
    stale = news_service.fetch_category("science")

    assert [a["id"] for a in stale] == ["s1"]


def test_mock_fallback_is_cached(news_service, upstream):
    upstream.failing = True

    articles = news_service.fetch_category("technology")

    assert articles
    assert all(a["category"] == "technology" for a in articles)
    assert news_service.cache.keys() == ["technology"]

    news_service.fetch_category("technology")
    assert upstream.calls == ["technology"]


def test_unknown_category_gets_full_mock_batch(news_service, upstream):
    upstream.failing = True
    assert len(news_service.fetch_category("knitting")) == len(MOCK_TITLES)


def test_category_aliases_and_default(news_service, upstream):
    news_service.fetch_category("Political")
    news_service.fetch_category(None)
    assert upstream.calls == ["politics", "general"]


def test_results_are_copies(news_service, upstream, article_factory):
    upstream.batches["general"] = [article_factory("g1", "Original")]

    news_service.fetch_category()[0]["title"] = "Mutated"

    assert news_service.resolve_by_id("g1")["title"] == "Original"
    assert news_service.fetch_category()[0]["title"] == "Original"


# ------------------------------------------------------------
# AGGREGATION VIEWS
# ------------------------------------------------------------
def test_trending_on_empty_cache_synthesizes_without_upstream(news_service, upstream):
    trending = news_service.trending()

    assert len(trending) == 10
    assert len({a["id"] for a in trending}) == 10
    assert upstream.calls == []
    assert news_service.cache.keys() == []
    assert len(news_service.store) == len(MOCK_TITLES)


def test_views_deduplicate_across_categories(news_service, upstream, article_factory):
    upstream.batches["technology"] = [article_factory("dup", "Shared story"), article_factory("t1", "Other")]
    upstream.batches["business"] = [article_factory("dup", "Shared story", category="business")]
    news_service.fetch_category("technology")
    news_service.fetch_category("business")

    ids = [a["id"] for a in news_service.trending()]
    assert sorted(ids) == ["dup", "t1"]

    latest_ids = [a["id"] for a in news_service.latest()]
    assert sorted(latest_ids) == ["dup", "t1"]


def test_latest_orders_by_date_with_missing_dates_last(news_service, upstream, article_factory):
    upstream.batches["general"] = [
        article_factory("old", "Old", published_at="2024-01-01T00:00:00Z"),
        article_factory("undated", "Undated", published_at=None),
        article_factory("new", "New", published_at="2024-06-01 08:00:00 +0000"),
        article_factory("mid", "Mid", published_at="2024-03-01T00:00:00Z"),
    ]
    news_service.fetch_category()

    assert [a["id"] for a in news_service.latest()] == ["new", "mid", "old", "undated"]
    assert [a["id"] for a in news_service.latest(page=2, limit=3)] == ["undated"]
    assert news_service.latest(page=3, limit=3) == []


def test_latest_on_empty_cache_is_newest_mock_first(news_service):
    latest = news_service.latest(limit=3)
    assert [a["title"] for a in latest] == MOCK_TITLES[:3]


def test_search(news_service, upstream, article_factory):
    upstream.batches["general"] = [
        article_factory("a", "Zebra crossings", description="Road safety"),
        article_factory("b", "Apple harvest", description="Farmers and zebra herds"),
        article_factory("c", "Unrelated", description="Nothing here"),
    ]
    news_service.fetch_category()

    assert [a["id"] for a in news_service.search("ZEBRA")] == ["b", "a"]
    assert [a["id"] for a in news_service.search("zebra", limit=1)] == ["b"]
    assert news_service.search("   ") == []
    assert news_service.search(None) == []


def test_recommended(news_service, upstream, article_factory):
    assert news_service.recommended() == []

    upstream.batches["general"] = [article_factory(f"r{i}", f"Story {i}") for i in range(8)]
    news_service.fetch_category()

    picks = news_service.recommended()
    assert len(picks) == 5
    assert len({a["id"] for a in picks}) == 5


# ------------------------------------------------------------
# LOOKUP
# ------------------------------------------------------------
def test_resolve_unknown_id(news_service):
    with pytest.raises(NotFoundError):
        news_service.resolve_by_id("nope")


def test_resolve_falls_back_to_persisted_record(upstream, clock, article_factory, user):
    first = NewsService(upstream, SessionLocal, clock=clock)
    upstream.batches["general"] = [article_factory("abc123", "Persisted story")]
    first.fetch_category()
    first.save("abc123", user.id)

    # A new process has empty in-memory tiers
    restarted = NewsService(upstream, SessionLocal, clock=clock)
    resolved = restarted.resolve_by_id("abc123")

    assert resolved["external_id"] == "abc123"
    assert resolved["title"] == "Persisted story"


# ------------------------------------------------------------
# MATERIALIZATION
# ------------------------------------------------------------
def test_like_materializes_and_toggles(news_service, upstream, article_factory, user, db):
    upstream.batches["general"] = [article_factory("abc123", "Like me", url="https://x.test/like")]
    news_service.fetch_category()

    assert news_service.toggle_like("abc123", user.id) == {"likes": 1, "liked": True}
    assert news_service.toggle_like("abc123", user.id) == {"likes": 0, "liked": False}

    rows = db.scalars(select(Content).where(Content.external_id == "abc123")).all()
    assert len(rows) == 1
    assert rows[0].title == "Like me"
    assert rows[0].url == "https://x.test/like"
    assert db.scalar(select(func.count(ContentLike.id))) == 0


def test_like_unknown_article(news_service, user):
    with pytest.raises(NotFoundError):
        news_service.toggle_like("ghost", user.id)


def test_like_by_numeric_primary_key(news_service, user, db):
    content = Content(title="Seeded", url="https://x.test/seeded")
    db.add(content)
    db.commit()

    assert news_service.toggle_like(str(content.id), user.id)["liked"] is True


def test_save_with_fallback_article(news_service, user, db):
    fallback = {"title": "From the client", "description": "Client copy", "url": "https://x.test/c"}

    saved = news_service.save("client-only", user.id, fallback)

    assert saved["content"]["external_id"] == "client-only"
    assert saved["content"]["title"] == "From the client"
    assert saved["content"]["likes"] == 0
    assert saved["content"]["views"] == 0

    with pytest.raises(ConflictError):
        news_service.save("client-only", user.id, fallback)

    assert db.scalar(select(func.count(SavedItem.id))) == 1


def test_save_unknown_without_fallback(news_service, user):
    with pytest.raises(NotFoundError):
        news_service.save("ghost", user.id)


def test_like_then_save_share_one_record(news_service, upstream, article_factory, user, db):
    upstream.batches["general"] = [article_factory("abc123", "Shared")]
    news_service.fetch_category()

    news_service.toggle_like("abc123", user.id)
    news_service.save("abc123", user.id)

    assert db.scalar(select(func.count(Content.id))) == 1


def test_conditional_insert_keeps_first_row(db):
    assert insert_if_absent(db, "race-1", {"title": "First"}) is True
    assert insert_if_absent(db, "race-1", {"title": "Second"}) is False
    db.commit()

    rows = db.scalars(select(Content).where(Content.external_id == "race-1")).all()
    assert [r.title for r in rows] == ["First"]


def test_concurrent_materialization_reuses_existing_row(news_service, upstream, article_factory, user, db):
    upstream.batches["general"] = [article_factory("abc123", "Cached copy")]
    news_service.fetch_category()

    # Another request materialized it first
    insert_if_absent(db, "abc123", {"title": "Winner"})
    db.commit()

    news_service.toggle_like("abc123", user.id)

    rows = db.scalars(select(Content).where(Content.external_id == "abc123")).all()
    assert len(rows) == 1
    assert rows[0].title == "Winner"


def _second_user(db):
    other = User(id=str(uuid.uuid4()), name="Other", email="other@example.com")
    db.add(other)
    db.commit()
    return other


def _persisted(db, external_id="abc123"):
    content = Content(title="Shared", url="https://x.test/shared", external_id=external_id)
    db.add(content)
    db.commit()
    return content


def test_likes_from_two_users_are_both_counted(news_service, user, db):
    other = _second_user(db)
    _persisted(db)

    news_service.toggle_like("abc123", user.id)
    assert news_service.toggle_like("abc123", other.id) == {"likes": 2, "liked": True}
    assert news_service.toggle_like("abc123", user.id) == {"likes": 1, "liked": False}


def test_overlapping_likes_keep_counter_in_step(news_service, user, db, monkeypatch):
    other = _second_user(db)
    _persisted(db)
    load = news_service._find_or_materialize

    def load_then_other_user_likes(session, content_id, fallback_article=None):
        content = load(session, content_id, fallback_article)
        monkeypatch.setattr(news_service, "_find_or_materialize", load)
        # commits after this session has already read the row
        assert news_service.toggle_like(content_id, other.id) == {"likes": 1, "liked": True}
        return content

    monkeypatch.setattr(news_service, "_find_or_materialize", load_then_other_user_likes)

    assert news_service.toggle_like("abc123", user.id) == {"likes": 2, "liked": True}

    db.expire_all()
    assert db.scalar(select(Content.likes).where(Content.external_id == "abc123")) == 2
    assert db.scalar(select(func.count(ContentLike.id))) == 2


def test_concurrent_save_of_same_article_conflicts(news_service, user, db, monkeypatch):
    content = _persisted(db)
    content_id = content.id

    def save_from_another_request(session, flush_context, instances):
        with SessionLocal() as other:
            other.add(SavedItem(user_id=user.id, content_id=content_id))
            other.commit()

    def racing_session():
        session = SessionLocal()
        event.listen(session, "before_flush", save_from_another_request, once=True)
        return session

    monkeypatch.setattr(news_service, "session_factory", racing_session)

    with pytest.raises(ConflictError):
        news_service.save("abc123", user.id)

    db.expire_all()
    assert db.scalar(select(func.count(SavedItem.id))) == 1


def test_numeric_upstream_id_is_not_matched_by_primary_key(news_service, upstream, article_factory, user, db):
    unrelated = Content(title="Unrelated", url="https://x.test/unrelated")
    db.add(unrelated)
    db.commit()
    numeric_id = str(unrelated.id)

    upstream.batches["general"] = [article_factory(numeric_id, "Numbered story")]
    news_service.fetch_category()

    assert news_service.toggle_like(numeric_id, user.id) == {"likes": 1, "liked": True}

    db.expire_all()
    materialized = db.scalar(select(Content).where(Content.external_id == numeric_id))
    assert materialized.title == "Numbered story"
    assert db.get(Content, unrelated.id).likes == 0


def test_record_view(news_service, user, db):
    assert news_service.record_view("abc123") is False

    news_service.save("abc123", user.id, {"title": "Viewed"})
    assert news_service.record_view("abc123") is True
    assert news_service.record_view("abc123") is True

    views = db.scalar(select(Content.views).where(Content.external_id == "abc123"))
    assert views == 2
