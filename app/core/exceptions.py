from fastapi import HTTPException, status


class FriendshipAPIException(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = ""

    headers = None

    def __init__(self, detail: str = None):
        super().__init__(status_code=self.status_code, detail=detail or self.detail, headers=self.headers)


class CredentialsException(FriendshipAPIException):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Could not validate credentials"


class NotAuthorizedException(FriendshipAPIException):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Not enough permissions"


class UserNotFoundException(FriendshipAPIException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "User not found"


class FriendshipRequestNotFoundException(FriendshipAPIException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Friendship request not found"


class FriendshipNotFoundException(FriendshipAPIException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Friendship not found"


class SelfFriendshipRequestException(FriendshipAPIException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Cannot send friend request to yourself"


class TransactionConflictException(FriendshipAPIException):
    """Raised when a write keeps colliding with a concurrent transaction; safe to retry"""
    status_code = status.HTTP_409_CONFLICT
    detail = "Concurrent update detected, please retry"
    headers = {"Retry-After": "1"}
