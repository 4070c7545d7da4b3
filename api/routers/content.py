# File: api/routers/content.py
from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from api.dependencies.auth import get_current_user, get_db
from api.models.content_models import CommentRequest, PageResponse
from database.models.content_model import ContentType
from database.models.user_model import User
from services import comment_service, content_service
from services.errors import NotFoundError, PermissionDeniedError, ValidationFailedError
from services.serializers import content_to_dict

router = APIRouter()
logger = logging.getLogger(__name__)

SortOption = Literal["newest", "oldest", "popularity", "readingTime"]


def _list(db: Session, content_type: ContentType, **filters):
    return content_service.list_contents(db, content_type, **filters)


@router.get("/content/news", response_model=PageResponse)
def get_persisted_news(
    page: int = Query(1, ge=1),
    limit: int = Query(25, ge=1, le=100),
    category: Optional[str] = None,
    source: Optional[str] = None,
    search: Optional[str] = None,
    sort: Optional[SortOption] = None,
    startDate: Optional[datetime] = None,
    endDate: Optional[datetime] = None,
    db: Session = Depends(get_db),
):
    return _list(
        db, ContentType.NEWS, page=page, limit=limit, category=category, source=source,
        search=search, sort=sort, start_date=startDate, end_date=endDate,
    )


@router.get("/journals", response_model=PageResponse)
def get_journals(
    page: int = Query(1, ge=1),
    limit: int = Query(25, ge=1, le=100),
    category: Optional[str] = None,
    search: Optional[str] = None,
    sort: Optional[SortOption] = None,
    db: Session = Depends(get_db),
):
    return _list(db, ContentType.JOURNAL, page=page, limit=limit, category=category, search=search, sort=sort)


@router.get("/books", response_model=PageResponse)
def get_books(
    page: int = Query(1, ge=1),
    limit: int = Query(25, ge=1, le=100),
    search: Optional[str] = None,
    sort: Optional[SortOption] = None,
    db: Session = Depends(get_db),
):
    return _list(db, ContentType.BOOK, page=page, limit=limit, search=search, sort=sort)


@router.get("/content/{content_id}")
def get_content_by_id(content_id: int, db: Session = Depends(get_db)):
    try:
        return content_to_dict(content_service.get_content(db, content_id))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Content not found")


@router.get("/content/{content_id}/summary")
def get_content_summary(content_id: int, db: Session = Depends(get_db)):
    try:
        return {"summary": content_service.get_or_create_summary(db, content_id)}
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Content not found")
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Internal server error")


# ------------------------------------------------------------
# COMMENTS
# ------------------------------------------------------------
@router.get("/content/{content_id}/comments", response_model=PageResponse)
def get_comments(
    content_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(25, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return comment_service.list_comments(db, content_id, page, limit)


@router.post("/content/{content_id}/comments", status_code=201)
def add_comment(
    content_id: int,
    payload: CommentRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return comment_service.add_comment(db, current_user, content_id, payload.text)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailedError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/content/{content_id}/comments/{comment_id}")
def delete_comment(
    content_id: int,
    comment_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        comment_service.delete_comment(db, current_user, content_id, comment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return {"message": "Comment deleted"}
