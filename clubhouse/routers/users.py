"""User API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from clubhouse.database import get_db
from clubhouse.schemas.user import UserOut
from clubhouse.stores.interfaces import StoreError
from clubhouse.stores.sqlalchemy_store import SqlAlchemyUserRepository

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[UserOut])
def list_users(db: Session = Depends(get_db)):
    """List all users without their secrets or password hashes."""
    try:
        return SqlAlchemyUserRepository(db).list_all()
    except StoreError as exc:
        logger.error("Failed to list users: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": "storage_error", "message": "Could not list users"},
        )
