# File: api/routers/news.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
import logging

from api.dependencies.auth import get_current_user, get_news_service
from api.models.content_models import LikeResponse
from database.models.user_model import User
from services.errors import NotFoundError
from services.news_service import NewsService

router = APIRouter()
logger = logging.getLogger(__name__)


# Sync handlers: the upstream call blocks, so these run in the threadpool.

@router.get("/")
def get_news(category: Optional[str] = None, news: NewsService = Depends(get_news_service)):
    logger.info(f"Fetching News for category: {category or 'All'}")
    return news.fetch_category(category)


@router.get("/search")
def search_news(
    q: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
    news: NewsService = Depends(get_news_service),
):
    return news.search(q, limit)


@router.get("/recommendations")
def get_recommended_news(news: NewsService = Depends(get_news_service)):
    return news.recommended()


@router.get("/trending")
def get_trending_news(news: NewsService = Depends(get_news_service)):
    return news.trending()


@router.get("/latest")
def get_latest_news(
    page: int = Query(1, ge=1),
    limit: int = Query(15, ge=1, le=100),
    news: NewsService = Depends(get_news_service),
):
    return news.latest(page, limit)


@router.post("/{article_id}/view")
def increment_view(article_id: str, news: NewsService = Depends(get_news_service)):
    news.record_view(article_id)
    return {"message": "View counted"}


@router.post("/{article_id}/like", response_model=LikeResponse)
def like_news(
    article_id: str,
    current_user: User = Depends(get_current_user),
    news: NewsService = Depends(get_news_service),
):
    try:
        return news.toggle_like(article_id, current_user.id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Article not found")
    except SQLAlchemyError:
        logger.error("Like Error", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/{article_id}")
def get_news_by_id(article_id: str, news: NewsService = Depends(get_news_service)):
    try:
        return news.resolve_by_id(article_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Article not found.")
