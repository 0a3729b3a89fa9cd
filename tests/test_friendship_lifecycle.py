import pytest

from app.core.exceptions import FriendshipRequestNotFoundException
from app.modules.friendships.schemas.friendship import FriendshipRelation, FriendshipStatus
from app.modules.friendships.services import friendship as friendship_service
from app.modules.friendships.services.friendship import (
    accept_friendship_request,
    decline_friendship_request,
    get_friendship_relation,
    get_received_friendship_requests,
    get_sent_friendship_requests,
    send_friendship_request,
)


def statuses(rows):
    return [row.status for row in rows]


def test_send_creates_requested_edge(db, users, edges):
    send_friendship_request(db, "a", "b")

    assert statuses(edges("a", "b")) == [FriendshipStatus.REQUESTED]
    assert edges("b", "a") == []


def test_send_twice_keeps_single_row(db, users, edges):
    send_friendship_request(db, "a", "b")
    send_friendship_request(db, "a", "b")

    assert statuses(edges("a", "b")) == [FriendshipStatus.REQUESTED]


def test_send_after_decline_revives_the_same_row(db, users, edges):
    send_friendship_request(db, "a", "b")
    original_id = edges("a", "b")[0].id
    decline_friendship_request(db, "b", "a")
    assert statuses(edges("a", "b")) == [FriendshipStatus.DECLINED]

    send_friendship_request(db, "a", "b")

    rows = edges("a", "b")
    assert statuses(rows) == [FriendshipStatus.REQUESTED]
    assert rows[0].id == original_id


def test_send_never_downgrades_accepted(db, users, edges):
    send_friendship_request(db, "a", "b")
    accept_friendship_request(db, "b", "a")

    send_friendship_request(db, "a", "b")
    send_friendship_request(db, "b", "a")

    assert statuses(edges("a", "b")) == [FriendshipStatus.ACCEPTED]
    assert statuses(edges("b", "a")) == [FriendshipStatus.ACCEPTED]


def test_send_leaves_opposite_direction_alone(db, users, edges):
    send_friendship_request(db, "b", "a")
    decline_friendship_request(db, "a", "b")

    send_friendship_request(db, "a", "b")

    assert statuses(edges("b", "a")) == [FriendshipStatus.DECLINED]
    assert statuses(edges("a", "b")) == [FriendshipStatus.REQUESTED]


def test_accept_creates_mirror_edge(db, users, edges):
    send_friendship_request(db, "a", "b")

    mirror = accept_friendship_request(db, "b", "a")

    assert (mirror.user_id, mirror.friend_user_id) == ("b", "a")
    assert statuses(edges("a", "b")) == [FriendshipStatus.ACCEPTED]
    assert statuses(edges("b", "a")) == [FriendshipStatus.ACCEPTED]


def test_accept_without_pending_request_fails(db, users, edges):
    with pytest.raises(FriendshipRequestNotFoundException):
        accept_friendship_request(db, "b", "a")

    assert edges("a", "b") == []
    assert edges("b", "a") == []


def test_requester_cannot_accept_own_request(db, users, edges):
    send_friendship_request(db, "a", "b")

    with pytest.raises(FriendshipRequestNotFoundException):
        accept_friendship_request(db, "a", "b")

    assert statuses(edges("a", "b")) == [FriendshipStatus.REQUESTED]
    assert edges("b", "a") == []


def test_accept_declined_request_fails(db, users, edges):
    send_friendship_request(db, "a", "b")
    decline_friendship_request(db, "b", "a")

    with pytest.raises(FriendshipRequestNotFoundException):
        accept_friendship_request(db, "b", "a")

    assert statuses(edges("a", "b")) == [FriendshipStatus.DECLINED]
    assert edges("b", "a") == []


@pytest.mark.parametrize("first, second", [(("b", "a"), ("a", "b")), (("a", "b"), ("b", "a"))])
def test_crossing_requests_converge_to_two_accepted_edges(db, users, edges, first, second):
    send_friendship_request(db, "a", "b")
    send_friendship_request(db, "b", "a")

    accept_friendship_request(db, *first)
    # The crossing request was settled by the first accept, nothing is pending any more
    with pytest.raises(FriendshipRequestNotFoundException):
        accept_friendship_request(db, *second)

    assert statuses(edges("a", "b")) == [FriendshipStatus.ACCEPTED]
    assert statuses(edges("b", "a")) == [FriendshipStatus.ACCEPTED]


def test_accept_retries_when_mirror_insert_races(db, users, edges, monkeypatch):
    send_friendship_request(db, "a", "b")
    send_friendship_request(db, "b", "a")

    real_get_edge = friendship_service.get_edge
    stale_reads = []

    def racy_get_edge(session, user_id, friend_user_id, for_update=False):
        # First mirror lookup misses the row, as if it was committed just after our read
        if (user_id, friend_user_id) == ("b", "a") and not stale_reads:
            stale_reads.append((user_id, friend_user_id))
            return None
        return real_get_edge(session, user_id, friend_user_id, for_update=for_update)

    monkeypatch.setattr(friendship_service, "get_edge", racy_get_edge)

    accept_friendship_request(db, "b", "a")

    assert stale_reads == [("b", "a")]
    assert statuses(edges("a", "b")) == [FriendshipStatus.ACCEPTED]
    assert statuses(edges("b", "a")) == [FriendshipStatus.ACCEPTED]


def test_decline_does_not_create_mirror(db, users, edges):
    send_friendship_request(db, "a", "b")

    decline_friendship_request(db, "b", "a")

    assert statuses(edges("a", "b")) == [FriendshipStatus.DECLINED]
    assert edges("b", "a") == []


def test_decline_leaves_existing_mirror_untouched(db, users, edges):
    send_friendship_request(db, "a", "b")
    send_friendship_request(db, "b", "a")

    decline_friendship_request(db, "b", "a")

    assert statuses(edges("a", "b")) == [FriendshipStatus.DECLINED]
    assert statuses(edges("b", "a")) == [FriendshipStatus.REQUESTED]


def test_decline_twice_fails(db, users):
    send_friendship_request(db, "a", "b")
    decline_friendship_request(db, "b", "a")

    with pytest.raises(FriendshipRequestNotFoundException):
        decline_friendship_request(db, "b", "a")


def test_received_and_sent_requests(db, users):
    send_friendship_request(db, "a", "b")
    send_friendship_request(db, "c", "b")
    decline_friendship_request(db, "b", "c")

    received = get_received_friendship_requests(db, "b")
    assert [(r.user_id, r.status) for r in received] == [("a", FriendshipStatus.REQUESTED)]

    all_received = get_received_friendship_requests(db, "b", status=None)
    assert sorted(r.user_id for r in all_received) == ["a", "c"]

    sent = get_sent_friendship_requests(db, "c")
    assert [(r.friend_user_id, r.status) for r in sent] == [("b", FriendshipStatus.DECLINED)]


def test_friendship_relation(db, users):
    assert get_friendship_relation(db, "a", "a") == FriendshipRelation.SELF
    assert get_friendship_relation(db, "a", "b") == FriendshipRelation.NONE

    send_friendship_request(db, "a", "b")
    assert get_friendship_relation(db, "a", "b") == FriendshipRelation.REQUEST_SENT
    assert get_friendship_relation(db, "b", "a") == FriendshipRelation.REQUEST_RECEIVED

    decline_friendship_request(db, "b", "a")
    assert get_friendship_relation(db, "a", "b") == FriendshipRelation.DECLINED
    assert get_friendship_relation(db, "b", "a") == FriendshipRelation.NONE

    send_friendship_request(db, "a", "b")
    accept_friendship_request(db, "b", "a")
    assert get_friendship_relation(db, "a", "b") == FriendshipRelation.FRIENDS
    assert get_friendship_relation(db, "b", "a") == FriendshipRelation.FRIENDS
