# File: api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
import logging

from api.dependencies.auth import AUTH_COOKIE, get_current_user, get_db, get_settings
from api.models.auth_models import GoogleLoginRequest, LoginRequest, SignupRequest
from database.models.user_model import User
from services import auth_service
from services.errors import AuthenticationError, ConflictError
from services.serializers import user_to_dict
from utils.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _issue_session(response: Response, user: User, settings: Settings) -> dict:
    token = auth_service.create_access_token(user, settings.jwt_secret, settings.jwt_expire_days)
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=settings.jwt_expire_days * 24 * 60 * 60,
        path="/",
    )
    return auth_service.auth_payload(user, token)


@router.post("/signup", status_code=201)
def signup(
    payload: SignupRequest,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    try:
        user = auth_service.signup(db, payload.name, payload.email, payload.password)
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _issue_session(response, user, settings)


@router.post("/login")
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    try:
        user = auth_service.login(db, payload.email, payload.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    logger.info(f"USER_LOGIN user_id={user.id}")
    return _issue_session(response, user, settings)


@router.post("/google")
def google_login(
    payload: GoogleLoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    name = payload.name or payload.email.split("@")[0]
    user = auth_service.google_login(db, payload.email, name, payload.google_id, payload.avatar)
    return _issue_session(response, user, settings)


@router.post("/logout")
def logout(
    response: Response,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    response.delete_cookie(AUTH_COOKIE, path="/", httponly=True, secure=settings.is_production)
    logger.info(f"USER_LOGOUT user_id={current_user.id}")
    return {"message": "Logged out successfully"}


@router.get("/me")
def read_users_me(current_user: User = Depends(get_current_user)):
    return user_to_dict(current_user)
