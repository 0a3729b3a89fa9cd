from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

class UserBase(BaseModel):
    full_name: str = Field(min_length=1)
    phone_number: str = Field(min_length=1)

class UserCreate(UserBase):
    id: Optional[str] = None

class User(UserBase):
    """User model returned to client"""
    id: str
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
