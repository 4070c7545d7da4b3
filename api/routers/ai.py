# File: api/routers/ai.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.dependencies.auth import get_current_user, get_db
from api.models.content_models import (
    ReadingPreferencesRequest,
    SummarizeRequest,
    TopicsRequest,
    TranslateRequest,
)
from database.models.user_model import User
from services import ai_service, content_service, user_service

router = APIRouter()


@router.get("/recommendations")
def get_recommendations(
    limit: int = Query(10, ge=1, le=50),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return content_service.recommendations_for(db, current_user, limit)


@router.get("/daily-brief")
def get_daily_brief(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return content_service.daily_brief_for(db, current_user)


@router.get("/preferences")
def get_preferences(current_user: User = Depends(get_current_user)):
    return user_service.get_preferences(current_user)


@router.put("/preferences")
def update_preferences(
    payload: ReadingPreferencesRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return user_service.update_reading_preferences(
        db, current_user, payload.categories, payload.sources, payload.reading_time
    )


@router.post("/extract-topics")
def extract_topics(payload: TopicsRequest, _user: User = Depends(get_current_user)):
    return {"topics": ai_service.extract_topics(payload.title, payload.description)}


@router.post("/summarize")
def summarize(payload: SummarizeRequest):
    return {"summary": ai_service.summarize_text(payload.text)}


@router.post("/translate")
def translate(payload: TranslateRequest):
    return {"translation": ai_service.translate_text(payload.text, payload.target_lang)}
