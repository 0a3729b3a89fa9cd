from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import logging

from app.core.exceptions import (
    FriendshipRequestNotFoundException,
    NotAuthorizedException,
    SelfFriendshipRequestException,
    UserNotFoundException,
)
from app.db.session import get_db
from app.deps import get_current_user
from app.modules.user_management.models.user import User
from app.modules.user_management.services.user import user_exists
from app.modules.friendships.schemas.friendship import (
    FriendListItem,
    FriendProfile,
    Friendship as FriendshipSchema,
    FriendshipRequestAnswer,
    FriendshipRequestCreate,
    FriendshipStatus,
    FriendshipStatusResponse,
)
from app.modules.friendships.services.edges import has_edge
from app.modules.friendships.services.friendship import (
    accept_friendship_request,
    decline_friendship_request,
    get_friendship_relation,
    get_received_friendship_requests,
    get_sent_friendship_requests,
    send_friendship_request,
)
from app.modules.friendships.services.social_graph import get_friend_profile, list_friends

router = APIRouter()
logger = logging.getLogger(__name__)

def _check_can_send(db: Session, current_user_id: str, friend_user_id: str) -> None:
    """Validate the target exists and is not the caller"""
    if current_user_id == friend_user_id:
        raise SelfFriendshipRequestException()
    if not user_exists(db, friend_user_id):
        raise UserNotFoundException()

def _check_can_answer(db: Session, current_user_id: str, requester_id: str) -> None:
    """Validate a pending request from ``requester_id`` is addressed to the caller"""
    if has_edge(db, requester_id, current_user_id, FriendshipStatus.REQUESTED):
        return
    if has_edge(db, current_user_id, requester_id, FriendshipStatus.REQUESTED):
        # The caller is trying to answer their own request
        logger.warning(f"User {current_user_id} tried to answer their own request to {requester_id}")
        raise NotAuthorizedException()
    raise FriendshipRequestNotFoundException()

@router.post("/requests/send", status_code=status.HTTP_204_NO_CONTENT)
def send_request(
    *,
    db: Session = Depends(get_db),
    request_in: FriendshipRequestCreate,
    current_user: User = Depends(get_current_user),
) -> Response:
    _check_can_send(db, current_user.id, request_in.friend_user_id)
    send_friendship_request(db, current_user.id, request_in.friend_user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/requests/accept", status_code=status.HTTP_204_NO_CONTENT)
def accept_request(
    *,
    db: Session = Depends(get_db),
    request_in: FriendshipRequestAnswer,
    current_user: User = Depends(get_current_user),
) -> Response:
    _check_can_answer(db, current_user.id, request_in.friend_user_id)
    accept_friendship_request(db, current_user.id, request_in.friend_user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/requests/decline", status_code=status.HTTP_204_NO_CONTENT)
def decline_request(
    *,
    db: Session = Depends(get_db),
    request_in: FriendshipRequestAnswer,
    current_user: User = Depends(get_current_user),
) -> Response:
    _check_can_answer(db, current_user.id, request_in.friend_user_id)
    decline_friendship_request(db, current_user.id, request_in.friend_user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/requests/received", response_model=List[FriendshipSchema])
def get_my_received_requests(
    *,
    db: Session = Depends(get_db),
    status: Optional[FriendshipStatus] = FriendshipStatus.REQUESTED,
    current_user: User = Depends(get_current_user),
) -> Any:
    return get_received_friendship_requests(db, current_user.id, status)

@router.get("/requests/sent", response_model=List[FriendshipSchema])
def get_my_sent_requests(
    *,
    db: Session = Depends(get_db),
    status: Optional[FriendshipStatus] = None,
    current_user: User = Depends(get_current_user),
) -> Any:
    return get_sent_friendship_requests(db, current_user.id, status)

@router.get("/status/{user_id}", response_model=FriendshipStatusResponse)
def get_friendship_status(
    *,
    db: Session = Depends(get_db),
    user_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    if user_id != current_user.id and not user_exists(db, user_id):
        raise UserNotFoundException()
    return {"status": get_friendship_relation(db, current_user.id, user_id)}

@router.get("", response_model=List[FriendListItem])
def get_my_friends(
    *,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    return list_friends(db, current_user.id)

@router.get("/{friend_user_id}", response_model=FriendProfile)
def get_friend(
    *,
    db: Session = Depends(get_db),
    friend_user_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    return get_friend_profile(db, current_user.id, friend_user_id)
