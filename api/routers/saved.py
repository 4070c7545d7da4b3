# File: api/routers/saved.py
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from api.dependencies.auth import get_current_user, get_db, get_news_service
from api.models.content_models import PageResponse, SaveRequest
from database.models.user_model import User
from services import saved_service
from services.errors import ConflictError, NotFoundError, PermissionDeniedError
from services.news_service import NewsService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=PageResponse)
def get_saved_items(
    page: int = Query(1, ge=1),
    limit: int = Query(25, ge=1, le=100),
    type: Optional[Literal["news", "journal", "book"]] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return saved_service.list_saved(db, current_user, page, limit, type)


@router.post("/", status_code=201)
def save_content(
    payload: SaveRequest,
    current_user: User = Depends(get_current_user),
    news: NewsService = Depends(get_news_service),
):
    fallback = payload.article.model_dump() if payload.article else None
    try:
        return news.save(payload.content_id, current_user.id, fallback)
    except NotFoundError:
        raise HTTPException(
            status_code=404,
            detail="Content not found and no article data provided to create it.",
        )
    except ConflictError:
        raise HTTPException(status_code=400, detail="Content already saved")
    except SQLAlchemyError:
        logger.error("Save Content Error", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/content/{content_id}")
def remove_saved_item_by_content(
    content_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        saved_service.remove_saved_by_content(db, current_user, content_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Saved item removed"}


@router.delete("/{saved_id}")
def remove_saved_item(
    saved_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        saved_service.remove_saved(db, current_user, saved_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return {"message": "Saved item removed"}
