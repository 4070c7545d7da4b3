from unittest.mock import patch

from sqlalchemy import func, select

from database.db import SessionLocal
from database.models.content_model import Content, ContentType
from services import ingestion_service
from services.mock_content import SEED_BOOKS, SEED_HEADLINES, SEED_JOURNALS


def _count(db, content_type):
    return db.scalar(select(func.count(Content.id)).where(Content.type == content_type))


def test_seed_without_key_uses_sample_content(db):
    ingestion_service.run_seed(SessionLocal, None)

    assert _count(db, ContentType.NEWS) == len(SEED_HEADLINES)
    assert _count(db, ContentType.JOURNAL) == len(SEED_JOURNALS)
    assert _count(db, ContentType.BOOK) == len(SEED_BOOKS)


def test_seeding_twice_creates_nothing_new(db):
    ingestion_service.run_seed(SessionLocal, None)
    assert ingestion_service.seed_books(SessionLocal) == 0
    assert ingestion_service.ingest_top_headlines(SessionLocal, None) == 0
    assert _count(db, ContentType.BOOK) == len(SEED_BOOKS)


@patch("services.ingestion_service.fetch_top_headlines")
def test_headlines_skip_removed_and_urlless(mock_fetch, db):
    mock_fetch.return_value = [
        {"title": "Kept", "url": "https://x.test/kept", "source": {"name": "Wire"}, "publishedAt": "2024-05-01T10:00:00Z"},
        {"title": "[Removed]", "url": "https://x.test/removed"},
        {"title": "No url"},
    ]

    created = ingestion_service.ingest_top_headlines(SessionLocal, "key")

    assert created == 1
    content = db.scalar(select(Content).where(Content.external_id == "news_https://x.test/kept"))
    assert content.source == "Wire"
    assert content.category == "general"


def test_reset_database_wipes_and_reseeds(db):
    from scripts.reset_db import reset_database

    ingestion_service.seed_journals(SessionLocal)
    assert reset_database(assume_yes=True, reseed=False) is True
    assert _count(db, ContentType.JOURNAL) == 0

    assert reset_database(assume_yes=True) is True
    assert _count(db, ContentType.BOOK) == len(SEED_BOOKS)


def test_reset_database_cancelled(monkeypatch, db):
    from scripts.reset_db import reset_database

    monkeypatch.setattr("builtins.input", lambda _prompt: "no")
    assert reset_database() is False
