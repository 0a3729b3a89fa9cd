"""
Read-only queries over the accepted edges written by the lifecycle service.

Two aggregations back everything here:

* total friend count: a count of accepted edges grouped by ``user_id``
* mutual friend count: the intersection of the viewer's accepted friends
  ``{C : (viewer, C, accepted)}`` with the users holding an accepted edge
  towards the target ``{C : (C, target, accepted)}``
"""
from typing import Dict, Iterable, List
import logging

from sqlalchemy import Select, distinct, func, intersect, select
from sqlalchemy.orm import Session, aliased

from app.core.exceptions import FriendshipNotFoundException, UserNotFoundException
from app.modules.friendships.models.friendship import Friendship
from app.modules.friendships.schemas.friendship import FriendListItem, FriendProfile, FriendshipStatus
from app.modules.friendships.services.edges import accepted_friend_ids, accepted_requester_ids, has_edge
from app.modules.user_management.models.user import User
from app.modules.user_management.services.user import get_user

logger = logging.getLogger(__name__)


def total_friend_counts_query() -> Select:
    return (
        select(
            Friendship.user_id,
            func.count(Friendship.friend_user_id).label("total_friend_count"),
        )
        .where(Friendship.status == FriendshipStatus.ACCEPTED)
        .group_by(Friendship.user_id)
    )


def total_friend_counts(db: Session, user_ids: Iterable[str]) -> Dict[str, int]:
    """Accepted friend count for each of ``user_ids`` (0 for users without friends)"""
    user_ids = set(user_ids)
    if not user_ids:
        return {}

    counts = total_friend_counts_query().subquery("user_total_friend_count")
    rows = db.execute(
        select(counts.c.user_id, counts.c.total_friend_count).where(counts.c.user_id.in_(user_ids))
    ).all()

    result = dict.fromkeys(user_ids, 0)
    result.update({row.user_id: row.total_friend_count for row in rows})
    return result


def total_friend_count(db: Session, user_id: str) -> int:
    return total_friend_counts(db, [user_id])[user_id]


def mutual_friend_count(db: Session, viewer_id: str, target_id: str) -> int:
    excluded = (viewer_id, target_id)
    shared = intersect(
        accepted_friend_ids(viewer_id).where(Friendship.friend_user_id.not_in(excluded)),
        accepted_requester_ids(target_id).where(Friendship.user_id.not_in(excluded)),
    ).subquery("mutual_friends")
    return db.execute(select(func.count()).select_from(shared)).scalar_one()


def mutual_friend_counts(db: Session, viewer_id: str, target_ids: Iterable[str]) -> Dict[str, int]:
    """Mutual friend count between the viewer and each of ``target_ids`` in one grouped query"""
    target_ids = set(target_ids)
    if not target_ids:
        return {}

    viewer_edge = aliased(Friendship)
    shared_edge = aliased(Friendship)
    stmt = (
        select(
            shared_edge.friend_user_id.label("target_id"),
            func.count(distinct(viewer_edge.friend_user_id)).label("mutual_friend_count"),
        )
        .select_from(viewer_edge)
        .join(shared_edge, shared_edge.user_id == viewer_edge.friend_user_id)
        .where(
            viewer_edge.user_id == viewer_id,
            viewer_edge.status == FriendshipStatus.ACCEPTED,
            shared_edge.status == FriendshipStatus.ACCEPTED,
            shared_edge.friend_user_id.in_(target_ids),
            # the target is never its own mutual friend
            viewer_edge.friend_user_id != shared_edge.friend_user_id,
        )
        .group_by(shared_edge.friend_user_id)
    )

    result = dict.fromkeys(target_ids, 0)
    result.update({row.target_id: row.mutual_friend_count for row in db.execute(stmt)})
    return result


def get_friend_profile(db: Session, viewer_id: str, target_id: str) -> FriendProfile:
    """Profile of a confirmed friend, with their friend count and the friends shared with the viewer"""
    if not has_edge(db, viewer_id, target_id, FriendshipStatus.ACCEPTED):
        raise FriendshipNotFoundException()

    friend = get_user(db, target_id)
    if friend is None:
        logger.warning(f"Accepted friendship {viewer_id} -> {target_id} points at a missing user")
        raise UserNotFoundException()

    return FriendProfile(
        id=friend.id,
        full_name=friend.full_name,
        phone_number=friend.phone_number,
        total_friend_count=total_friend_count(db, target_id),
        mutual_friend_count=mutual_friend_count(db, viewer_id, target_id),
    )


def list_friends(db: Session, viewer_id: str) -> List[FriendListItem]:
    """All confirmed friends of the viewer, ordered by user id"""
    friends = db.execute(
        select(User.id, User.full_name, User.phone_number)
        .join(Friendship, Friendship.friend_user_id == User.id)
        .where(
            Friendship.user_id == viewer_id,
            Friendship.status == FriendshipStatus.ACCEPTED,
        )
        .order_by(User.id)
    ).all()

    friend_ids = [friend.id for friend in friends]
    totals = total_friend_counts(db, friend_ids)
    mutuals = mutual_friend_counts(db, viewer_id, friend_ids)

    return [
        FriendListItem(
            user_id=viewer_id,
            friend_user_id=friend.id,
            full_name=friend.full_name,
            phone_number=friend.phone_number,
            total_friend_count=totals[friend.id],
            mutual_friend_count=mutuals[friend.id],
        )
        for friend in friends
    ]
