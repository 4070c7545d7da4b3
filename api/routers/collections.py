# File: api/routers/collections.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from api.dependencies.auth import get_current_user, get_db
from api.models.content_models import CollectionCreateRequest, CollectionUpdateRequest
from database.models.user_model import User
from services import collection_service
from services.errors import NotFoundError, PermissionDeniedError, ValidationFailedError

router = APIRouter()


def _translate(e: Exception) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, PermissionDeniedError):
        return HTTPException(status_code=403, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


@router.get("/")
def get_collections(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return collection_service.list_collections(db, current_user)


@router.post("/", status_code=201)
def create_collection(
    payload: CollectionCreateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return collection_service.create_collection(
            db, current_user, payload.name, payload.description, payload.contents
        )
    except ValidationFailedError as e:
        raise _translate(e)


@router.put("/{collection_id}")
def update_collection(
    collection_id: int,
    payload: CollectionUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return collection_service.update_collection(
            db, current_user, collection_id, payload.name, payload.description, payload.contents
        )
    except (NotFoundError, PermissionDeniedError, ValidationFailedError) as e:
        raise _translate(e)


@router.delete("/{collection_id}")
def delete_collection(
    collection_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        collection_service.delete_collection(db, current_user, collection_id)
    except (NotFoundError, PermissionDeniedError) as e:
        raise _translate(e)
    return {"message": "Collection deleted"}
