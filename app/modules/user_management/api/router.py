from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.exceptions import UserNotFoundException
from app.db.session import get_db
from app.deps import get_current_user
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import User as UserSchema
from app.modules.user_management.services.user import get_user

router = APIRouter()

@router.get("/me", response_model=UserSchema)
def read_current_user(current_user: User = Depends(get_current_user)) -> Any:
    return current_user

@router.get("/{user_id}", response_model=UserSchema)
def read_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    user = get_user(db, user_id=user_id)
    if not user:
        raise UserNotFoundException()
    return user
