# api/main.py
from dotenv import load_dotenv
import os

env = os.getenv("APP_ENV", "local")
if env == "local":
    load_dotenv(".env.local")
else:
    load_dotenv(".env")

from fastapi import FastAPI
from contextlib import asynccontextmanager
import logging
import random
from typing import Optional
from database.db import SessionLocal, init_db
from fastapi.middleware.cors import CORSMiddleware

from api.middleware.rate_limit import RateLimitMiddleware
from api.routers import (
    health,
    auth,
    news,
    content,
    saved,
    collections,
    ai,
    admin,
    users,
)
from clients.currents_client import CurrentsClient
from services.ingestion_service import start_background_seed
from services.news_service import NewsService
from utils.settings import Settings

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)
logger.info(f"🔧 Loaded environment: {env}")


def build_news_service(settings: Settings) -> NewsService:
    upstream = CurrentsClient(settings.news_api_key, settings.news_api_url, settings.news_api_timeout)
    return NewsService(
        upstream=upstream,
        session_factory=SessionLocal,
        rng=random.Random(settings.news_random_seed),
        ttl_seconds=settings.news_cache_ttl_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info("🚀 Starting ReadStream Backend, initializing DB")
    try:
        init_db()
    except Exception as e:
        logger.error(f"❌ Failed to initialize database: {e}", exc_info=True)
        raise

    if settings.seed_on_startup:
        start_background_seed(SessionLocal, settings.newsapi_org_key)

    yield
    logger.info("🛑 Shutting down ReadStream Backend")


def create_app(settings: Optional[Settings] = None, news_service: Optional[NewsService] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="ReadStream API",
        version="1.0.0",
        description="Backend API for ReadStream: news, journals, books and reading tools.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.news_service = news_service or build_news_service(settings)

    if settings.rate_limit_per_minute > 0:
        app.middleware("http")(RateLimitMiddleware(settings.rate_limit_per_minute))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(news.router, prefix="/api/news", tags=["News"])
    app.include_router(content.router, prefix="/api", tags=["Content"])
    app.include_router(saved.router, prefix="/api/saved", tags=["Saved"])
    app.include_router(collections.router, prefix="/api/collections", tags=["Collections"])
    app.include_router(ai.router, prefix="/api", tags=["AI"])
    app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])
    app.include_router(users.router, prefix="/api", tags=["Users"])

    @app.get("/")
    async def root():
        return {"message": "ReadStream Backend Running Successfully 🚀"}

    return app


app = create_app()
