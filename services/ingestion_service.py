# File: services/ingestion_service.py
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from clients.newsapi_client import fetch_top_headlines
from services.errors import UpstreamUnavailable
from services.materialization_service import insert_if_absent
from services.mock_content import SEED_BOOKS, SEED_HEADLINES, SEED_JOURNALS

logger = logging.getLogger(__name__)

REMOVED_TITLE = "[Removed]"


def _seed_rows(rows: List[Dict]) -> List[Dict]:
    """Resolves relative 'hours_ago' stamps against now."""
    now = datetime.now(timezone.utc)
    seeded = []
    for row in rows:
        row = dict(row)
        hours_ago = row.pop("hours_ago", None)
        if hours_ago is not None:
            row["published_at"] = (now - timedelta(hours=hours_ago)).isoformat()
        seeded.append(row)
    return seeded


def _store(session_factory: sessionmaker, rows: List[Dict], content_type: str) -> int:
    created = 0
    with session_factory() as db:
        try:
            for row in rows:
                if insert_if_absent(db, row["external_id"], row, content_type):
                    created += 1
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Failed to store {content_type} seed rows")
            raise
    return created


def ingest_top_headlines(session_factory: sessionmaker, api_key: Optional[str]) -> int:
    try:
        articles = fetch_top_headlines(api_key)
    except UpstreamUnavailable as e:
        logger.info(f"Top headlines unavailable ({e}). Using mock data.")
        created = _store(session_factory, _seed_rows(SEED_HEADLINES), "news")
        logger.info(f"Created {created} mock news articles")
        return created

    rows = []
    for article in articles:
        title = article.get("title")
        if not title or title == REMOVED_TITLE or not article.get("url"):
            continue
        rows.append({
            "external_id": f"news_{article['url']}",
            "title": title,
            "author": article.get("author") or "Unknown",
            "source": (article.get("source") or {}).get("name") or "Unknown",
            "url": article["url"],
            "image_url": article.get("urlToImage"),
            "description": article.get("description") or "",
            "body": article.get("content") or article.get("description") or "",
            "category": "general",
            "published_at": article.get("publishedAt") or datetime.now(timezone.utc).isoformat(),
        })

    created = _store(session_factory, rows, "news")
    logger.info(f"📥 Fetched {len(articles)} headlines, stored {created} new")
    return created


def seed_journals(session_factory: sessionmaker) -> int:
    created = _store(session_factory, _seed_rows(SEED_JOURNALS), "journal")
    logger.info(f"Created {created} mock journal papers")
    return created


def seed_books(session_factory: sessionmaker) -> int:
    created = _store(session_factory, _seed_rows(SEED_BOOKS), "book")
    logger.info(f"Created {created} mock books")
    return created


def run_seed(session_factory: sessionmaker, newsapi_key: Optional[str]) -> None:
    try:
        ingest_top_headlines(session_factory, newsapi_key)
        seed_journals(session_factory)
        seed_books(session_factory)
    except Exception:
        logger.exception("Error seeding data")


def start_background_seed(session_factory: sessionmaker, newsapi_key: Optional[str]) -> threading.Thread:
    thread = threading.Thread(
        target=run_seed,
        args=(session_factory, newsapi_key),
        name="readstream-seed",
        daemon=True,
    )
    thread.start()
    return thread
