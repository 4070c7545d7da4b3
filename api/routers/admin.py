# File: api/routers/admin.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import logging

from api.dependencies.auth import get_db, require_admin
from api.models.content_models import AdminContentRequest
from database.models.user_model import User
from services import admin_service, content_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/users")
def get_users(
    page: int = Query(1, ge=1),
    limit: int = Query(25, ge=1, le=100),
    search: Optional[str] = None,
    _admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return admin_service.list_users(db, page, limit, search)


@router.post("/content", status_code=201)
def add_content(
    payload: AdminContentRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    logger.info(f"ADMIN_ADD_CONTENT admin_id={admin.id} type={payload.type}")
    return content_service.create_content(db, payload.model_dump())


@router.get("/analytics")
def get_analytics(_admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return admin_service.get_analytics(db)
