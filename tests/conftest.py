import os

# Must be set before any project module reads the environment
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "0"
os.environ["RATE_LIMIT_PER_MINUTE"] = "0"
os.environ["LLM_PROVIDER"] = "openai"
os.environ.pop("OPENAI_API_KEY", None)
os.environ.pop("NEWS_API_KEY", None)
os.environ.pop("NEWSAPI_ORG_KEY", None)

import random
import uuid

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from database.db import Base, SessionLocal, engine, init_db
from database.models.user_model import User, UserRole
from services import ai_service, auth_service
from services.errors import UpstreamUnavailable
from services.news_service import NewsService
from utils.settings import Settings


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeUpstream:
    """Returns queued batches per category; raises when told to fail."""

    def __init__(self):
        self.batches = {}
        self.failing = False
        self.calls = []

    def latest_news(self, category, language="en"):
        self.calls.append(category)
        if self.failing:
            raise UpstreamUnavailable("upstream down")
        return [dict(a) for a in self.batches.get(category, [])]


def make_article(article_id=None, title="Sample headline", url=None, **extra):
    article = {
        "title": title,
        "description": extra.pop("description", f"About {title.lower()}"),
        "url": url,
        "author": "Staff",
        "source_name": extra.pop("source_name", "Wire"),
        "category": extra.pop("category", "technology"),
        "published_at": extra.pop("published_at", "2024-05-01T10:00:00Z"),
    }
    if article_id is not None:
        article["id"] = article_id
    article.update(extra)
    return article


@pytest.fixture(autouse=True)
def fresh_database():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)
    ai_service.clear_cache()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def news_service(upstream, clock):
    return NewsService(upstream, SessionLocal, clock=clock, rng=random.Random(7))


@pytest.fixture
def settings():
    return Settings.from_env()


@pytest.fixture
def client(settings, news_service):
    app = create_app(settings=settings, news_service=news_service)
    with TestClient(app) as test_client:
        yield test_client


def _create_user(db, email, role=UserRole.USER, password="secret123"):
    user = User(
        id=str(uuid.uuid4()),
        name=email.split("@")[0].title(),
        email=email,
        password_hash=auth_service.hash_password(password),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def user(db):
    return _create_user(db, "reader@example.com")


@pytest.fixture
def admin_user(db):
    return _create_user(db, "admin@example.com", role=UserRole.ADMIN)


@pytest.fixture
def auth_headers(user, settings):
    token = auth_service.create_access_token(user, settings.jwt_secret, settings.jwt_expire_days)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user, settings):
    token = auth_service.create_access_token(admin_user, settings.jwt_secret, settings.jwt_expire_days)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def article_factory():
    return make_article
