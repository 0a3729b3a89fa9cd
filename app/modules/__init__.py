"""
Feature modules, each laid out as models / schemas / services / api.

friendships owns the request lifecycle and the social graph queries;
user_management and auth only expose what the friendship module needs
from its external collaborators (profiles and token payloads).
"""

from app.modules import auth
from app.modules import user_management
from app.modules import friendships
