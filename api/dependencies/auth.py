from fastapi import Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
from database.db import SessionLocal
from database.models.user_model import User, UserRole
from services.auth_service import decode_access_token
from services.errors import AuthenticationError
from services.news_service import NewsService
from utils.settings import Settings

AUTH_COOKIE = "readstream_token"


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_news_service(request: Request) -> NewsService:
    return request.app.state.news_service


def _extract_token(request: Request):
    token = request.cookies.get(AUTH_COOKIE)
    if token:
        return token
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip()
    return None


async def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token = _extract_token(request)
    if not token:
        raise credentials_exception

    try:
        user_id = decode_access_token(token, settings.jwt_secret)
    except AuthenticationError:
        raise credentials_exception

    user = db.get(User, user_id)
    if user is None:
        raise credentials_exception

    return user


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="Not authorized as an admin")
    return current_user
