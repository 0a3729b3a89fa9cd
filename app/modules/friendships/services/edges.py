"""
Edge lookups shared by the lifecycle service and the social graph queries.

An edge is one ``friendships`` row, keyed by the ordered pair
(user_id, friend_user_id).
"""
from typing import List, Optional

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from app.modules.friendships.models.friendship import Friendship
from app.modules.friendships.schemas.friendship import FriendshipStatus


def get_edge(db: Session, user_id: str, friend_user_id: str, for_update: bool = False) -> Optional[Friendship]:
    """Get the edge for an ordered pair, optionally row-locked for the rest of the transaction"""
    query = db.query(Friendship).filter(
        Friendship.user_id == user_id,
        Friendship.friend_user_id == friend_user_id,
    )
    if for_update:
        query = query.with_for_update()
    return query.first()


def has_edge(db: Session, user_id: str, friend_user_id: str, status: FriendshipStatus) -> bool:
    edge = get_edge(db, user_id, friend_user_id)
    return edge is not None and edge.status == status


def get_edges(
    db: Session,
    user_id: str,
    direction: str = "outgoing",
    status: Optional[FriendshipStatus] = None,
) -> List[Friendship]:
    """Edges leaving (``outgoing``) or pointing at (``incoming``) a user"""
    if direction not in ("outgoing", "incoming"):
        raise ValueError(f"Invalid edge direction: {direction}")

    field = Friendship.user_id if direction == "outgoing" else Friendship.friend_user_id
    query = db.query(Friendship).filter(field == user_id)
    if status is not None:
        query = query.filter(Friendship.status == status)
    return query.order_by(Friendship.created_at, Friendship.id).all()


def accepted_friend_ids(user_id: str) -> Select:
    """IDs C with an accepted edge (user_id, C)"""
    return select(Friendship.friend_user_id.label("user_id")).where(
        Friendship.user_id == user_id,
        Friendship.status == FriendshipStatus.ACCEPTED,
    )


def accepted_requester_ids(user_id: str) -> Select:
    """IDs C with an accepted edge (C, user_id)"""
    return select(Friendship.user_id.label("user_id")).where(
        Friendship.friend_user_id == user_id,
        Friendship.status == FriendshipStatus.ACCEPTED,
    )
