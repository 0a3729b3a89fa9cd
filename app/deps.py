from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core import security
from app.core.exceptions import CredentialsException, NotAuthorizedException, UserNotFoundException
from app.db.session import get_db
from app.modules.auth.schemas.auth import TokenPayload
from app.modules.user_management.models.user import User
from app.modules.user_management.services.user import get_user

# Tokens are issued by the identity service; this API only verifies them
bearer_scheme = HTTPBearer(auto_error=False)

def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> User:
    """
    Dependency for getting the current authenticated user
    """
    if credentials is None:
        raise CredentialsException()

    token_data = TokenPayload(sub=security.verify_access_token(credentials.credentials))
    if token_data.sub is None:
        raise CredentialsException()

    user = get_user(db, user_id=token_data.sub)
    if not user:
        raise UserNotFoundException()

    if not user.is_active:
        raise NotAuthorizedException("Inactive user")

    return user
