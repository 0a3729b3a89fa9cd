import uuid

from sqlalchemy import Column, String, DateTime, Enum, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.sql import func

from app.db.session import Base
from app.modules.friendships.schemas.friendship import FriendshipStatus

# One directed edge: user_id's stance towards friend_user_id.
# An accepted friendship is stored as two mirrored accepted edges.
class Friendship(Base):
    __tablename__ = "friendships"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    friend_user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(
        Enum(
            FriendshipStatus,
            name="friendship_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=FriendshipStatus.REQUESTED,
    )
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("user_id", "friend_user_id", name="unique_friendship"),
        CheckConstraint("user_id != friend_user_id", name="no_self_friendship"),
    )

    def __repr__(self) -> str:
        return f"<Friendship {self.user_id} -> {self.friend_user_id} ({self.status.value})>"
