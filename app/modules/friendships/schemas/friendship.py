from typing import Optional
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

class FriendshipStatus(str, Enum):
    REQUESTED = "requested"
    ACCEPTED = "accepted"
    DECLINED = "declined"

class FriendshipRelation(str, Enum):
    """How the caller relates to another user, seen from the caller's side"""
    SELF = "self"
    FRIENDS = "friends"
    REQUEST_SENT = "request_sent"
    REQUEST_RECEIVED = "request_received"
    DECLINED = "declined"
    NONE = "none"

class FriendshipRequestCreate(BaseModel):
    friend_user_id: str = Field(min_length=1)

class FriendshipRequestAnswer(BaseModel):
    """Accept/decline payload; friend_user_id is the requester"""
    friend_user_id: str = Field(min_length=1)

class Friendship(BaseModel):
    """Directed friendship edge returned to client"""
    id: str
    user_id: str
    friend_user_id: str
    status: FriendshipStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class FriendProfile(BaseModel):
    id: str
    full_name: str
    phone_number: str
    total_friend_count: int = Field(ge=0)
    mutual_friend_count: int = Field(ge=0)

class FriendListItem(BaseModel):
    user_id: str
    friend_user_id: str
    full_name: str
    phone_number: str
    total_friend_count: int = Field(ge=0)
    mutual_friend_count: int = Field(ge=0)

class FriendshipStatusResponse(BaseModel):
    status: FriendshipRelation
