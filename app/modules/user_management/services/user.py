from typing import Optional
import uuid
from sqlalchemy.orm import Session

from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserCreate

def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()

def user_exists(db: Session, user_id: str) -> bool:
    return db.query(User.id).filter(User.id == user_id).first() is not None

def create_user(db: Session, user_in: UserCreate) -> User:
    """
    Seed a user profile. Profiles are owned by the identity service, so no
    endpoint calls this; it is a seeding helper used by the test fixtures.
    """
    user = User(
        id=user_in.id or str(uuid.uuid4()),
        full_name=user_in.full_name,
        phone_number=user_in.phone_number,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
