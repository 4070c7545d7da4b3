# File: api/routers/users.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from api.dependencies.auth import get_current_user, get_db
from api.models.auth_models import HistoryRequest, ProfilePreferencesRequest, SubscriptionRequest
from database.models.user_model import User
from services import user_service
from services.errors import ValidationFailedError

router = APIRouter()


@router.get("/user/dashboard")
def get_dashboard(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return user_service.get_dashboard(db, current_user)


@router.put("/user/preferences")
def update_preferences(
    payload: ProfilePreferencesRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return user_service.update_profile_preferences(db, current_user, payload.language, payload.categories)
    except ValidationFailedError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/user/history")
def add_history(
    payload: HistoryRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return user_service.add_to_history(db, current_user, payload.article_id, payload.title, payload.url)


@router.post("/subscription")
def update_subscription(
    payload: SubscriptionRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        subscription = user_service.update_subscription(db, current_user, payload.plan)
    except ValidationFailedError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Subscription updated", "subscription": subscription}
