# File: api/routers/health.py
from fastapi import APIRouter, Depends

from api.dependencies.auth import get_news_service
from services.news_service import NewsService


router = APIRouter()


@router.get("/health")
async def health_check(news: NewsService = Depends(get_news_service)):
    return {
        "status": "ok",
        "cached_categories": len(news.cache.keys()),
        "stored_articles": len(news.store),
    }
