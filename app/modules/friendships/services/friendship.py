from typing import List, Optional
import logging
from sqlalchemy.orm import Session

from app.core.exceptions import FriendshipRequestNotFoundException
from app.db.transaction import atomic
from app.modules.friendships.models.friendship import Friendship
from app.modules.friendships.schemas.friendship import FriendshipRelation, FriendshipStatus
from app.modules.friendships.services.edges import get_edge, get_edges

logger = logging.getLogger(__name__)

# Request lifecycle: NONE -> REQUESTED -> ACCEPTED | DECLINED, DECLINED -> REQUESTED

@atomic()
def send_friendship_request(db: Session, requester_id: str, target_id: str) -> Friendship:
    """
    Ask ``target_id`` for a friendship.

    A missing edge is created as requested and a declined one is revived in
    place. A pending or accepted edge is left as it is, so re-sending is a
    no-op. The edge pointing the other way is never touched.
    """
    edge = get_edge(db, requester_id, target_id, for_update=True)

    if edge is None:
        edge = Friendship(
            user_id=requester_id,
            friend_user_id=target_id,
            status=FriendshipStatus.REQUESTED,
        )
        db.add(edge)
        db.flush()
        logger.info(f"Friendship request sent: {requester_id} -> {target_id}")
    elif edge.status == FriendshipStatus.DECLINED:
        edge.status = FriendshipStatus.REQUESTED
        logger.info(f"Declined friendship request re-sent: {requester_id} -> {target_id}")
    else:
        logger.debug(f"Friendship request {requester_id} -> {target_id} already {edge.status.value}, nothing to do")

    return edge

@atomic()
def accept_friendship_request(db: Session, accepter_id: str, requester_id: str) -> Friendship:
    """
    Accept the pending request (requester_id -> accepter_id).

    Flips the request to accepted and makes sure the mirror edge
    (accepter_id -> requester_id) exists as accepted, updating it when the
    accepter had sent a crossing request and inserting it otherwise. Returns
    the mirror edge.
    """
    request = get_edge(db, requester_id, accepter_id, for_update=True)
    if request is None or request.status != FriendshipStatus.REQUESTED:
        raise FriendshipRequestNotFoundException()

    request.status = FriendshipStatus.ACCEPTED

    mirror = get_edge(db, accepter_id, requester_id, for_update=True)
    if mirror is None:
        mirror = Friendship(
            user_id=accepter_id,
            friend_user_id=requester_id,
            status=FriendshipStatus.ACCEPTED,
        )
        db.add(mirror)
    else:
        mirror.status = FriendshipStatus.ACCEPTED
    db.flush()

    logger.info(f"Friendship accepted: {requester_id} <-> {accepter_id}")
    return mirror

@atomic()
def decline_friendship_request(db: Session, decliner_id: str, requester_id: str) -> Friendship:
    """Decline the pending request (requester_id -> decliner_id); the mirror edge is left alone"""
    request = get_edge(db, requester_id, decliner_id, for_update=True)
    if request is None or request.status != FriendshipStatus.REQUESTED:
        raise FriendshipRequestNotFoundException()

    request.status = FriendshipStatus.DECLINED
    logger.info(f"Friendship request declined: {requester_id} -> {decliner_id}")
    return request

def get_received_friendship_requests(db: Session, user_id: str, status: Optional[FriendshipStatus] = FriendshipStatus.REQUESTED) -> List[Friendship]:
    """Get requests addressed to a user"""
    return get_edges(db, user_id, "incoming", status)

def get_sent_friendship_requests(db: Session, user_id: str, status: Optional[FriendshipStatus] = None) -> List[Friendship]:
    """Get requests sent by a user"""
    return get_edges(db, user_id, "outgoing", status)

def get_friendship_relation(db: Session, viewer_id: str, other_id: str) -> FriendshipRelation:
    """Describe how ``viewer_id`` currently relates to ``other_id``"""
    if viewer_id == other_id:
        return FriendshipRelation.SELF

    outgoing = get_edge(db, viewer_id, other_id)
    incoming = get_edge(db, other_id, viewer_id)

    if outgoing is not None and outgoing.status == FriendshipStatus.ACCEPTED:
        return FriendshipRelation.FRIENDS
    if outgoing is not None and outgoing.status == FriendshipStatus.REQUESTED:
        return FriendshipRelation.REQUEST_SENT
    if incoming is not None and incoming.status == FriendshipStatus.REQUESTED:
        return FriendshipRelation.REQUEST_RECEIVED
    if outgoing is not None and outgoing.status == FriendshipStatus.DECLINED:
        return FriendshipRelation.DECLINED
    return FriendshipRelation.NONE
