import logging
from base64 import b64decode
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBasicCredentials
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.orm import Session
from coursehub.core.database import get_db
from coursehub.core.errors import AccessDenied
from coursehub.models.user import User
from coursehub.services.auth_service import AuthenticationError, authenticate

logger = logging.getLogger(__name__)


def get_basic_credentials(request: Request) -> Optional[HTTPBasicCredentials]:
    """
    Extract Basic credentials, or None when absent or malformed.

    Parses "Authorization: Basic base64(email:password)" itself instead of
    using fastapi's HTTPBasic, which decodes as ASCII and would lock out
    users whose password has non-ASCII characters.
    """
    scheme, param = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() != "basic" or not param:
        return None

    try:
        # binascii.Error and UnicodeDecodeError are both ValueErrors
        decoded = b64decode(param).decode("utf-8")
    except ValueError:
        return None

    # Split on the first colon only - passwords may contain colons
    username, separator, password = decoded.partition(":")
    if not separator:
        return None
    return HTTPBasicCredentials(username=username, password=password)


def get_current_user(
    credentials: Optional[HTTPBasicCredentials] = Depends(get_basic_credentials),
    db: Session = Depends(get_db)
) -> User:
    """
    Get the authenticated user for this request.

    Used in route handlers to require authentication: the resolved User is
    passed to the handler as an argument. Every request re-authenticates,
    there is no session.
    """
    try:
        return authenticate(db, credentials)
    except AuthenticationError as e:
        # The specific reason only goes to the log; the caller sees one generic 401
        if e.username:
            logger.warning(f"Authentication failure ({e.reason.value}) for user: {e.username}")
        else:
            logger.warning(f"Authentication failure ({e.reason.value})")
        raise AccessDenied() from e
