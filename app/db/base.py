# Import all models here so Alembic and create_all can detect them
from app.db.session import Base

from app.modules.user_management.models.user import User
from app.modules.friendships.models.friendship import Friendship
