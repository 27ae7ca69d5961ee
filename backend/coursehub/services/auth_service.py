"""
Basic Auth credential verification.

authenticate() turns a (possibly missing) pair of Basic credentials into a
User or an AuthenticationError naming the exact failure. The reason is for
logs only; the API layer answers every failure with the same 401.
"""

import logging
from enum import Enum
from typing import Optional
from fastapi.security import HTTPBasicCredentials
from sqlalchemy.orm import Session
from coursehub.core.security import verify_password
from coursehub.models.user import User
from coursehub.services.user_service import user_service

logger = logging.getLogger(__name__)


class AuthFailure(str, Enum):
    MISSING_CREDENTIALS = "missing_credentials"
    UNKNOWN_USER = "unknown_user"
    BAD_PASSWORD = "bad_password"


class AuthenticationError(Exception):
    def __init__(self, reason: AuthFailure, username: Optional[str] = None):
        self.reason = reason
        self.username = username
        super().__init__(reason.value)


def authenticate(db: Session, credentials: Optional[HTTPBasicCredentials]) -> User:
    """Resolve Basic credentials to the user they belong to."""
    if credentials is None:
        raise AuthenticationError(AuthFailure.MISSING_CREDENTIALS)

    user = user_service.get_by_email(db, credentials.username)
    if user is None:
        raise AuthenticationError(AuthFailure.UNKNOWN_USER, credentials.username)

    if not verify_password(credentials.password, user.hashed_password):
        raise AuthenticationError(AuthFailure.BAD_PASSWORD, credentials.username)

    logger.info(f"Authentication successful for user: {user.email_address}")
    return user
