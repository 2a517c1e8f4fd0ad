import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .core import decode_token
from .database import get_user_by_token
from .models import User

logger = logging.getLogger(__name__)

# auto_error=False so a missing header reaches us and gets our own 401 body,
# and so /cart can serve its HTML shell without credentials.
bearer_scheme = HTTPBearer(auto_error=False)


def resolve_user(credentials: Optional[HTTPAuthorizationCredentials]) -> User:
    """
    Map bearer credentials to a registered user.

    Raises:
        HTTPException(401): header missing, not a Bearer header, or the
        token is not held by any user (e.g. superseded by a later login).
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: Missing or invalid token",
        )

    user = get_user_by_token(credentials.credentials)
    if user is None:
        decoded = decode_token(credentials.credentials)
        if decoded:
            logger.warning("Rejected stale or unknown token issued for %s", decoded[0])
        else:
            logger.warning("Rejected malformed bearer token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: Invalid token",
        )
    return user


def require_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    """Route dependency enforcing a valid bearer token."""
    return resolve_user(credentials)
