"""
Bearer token resolution for user-facing endpoints
"""

import logging
from typing import Optional

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from config import settings
from listings.errors import AuthError

logger = logging.getLogger(__name__)


def resolve_user_id(authorization: Optional[str]) -> str:
    """
    Decode `Authorization: Bearer <jwt>` and return the principal (`sub` claim).

    Raises:
        AuthError: header missing, wrong scheme, expired or invalid token
    """
    if not authorization:
        raise AuthError("Missing authorization header", step="authenticate")

    if not authorization.startswith("Bearer "):
        raise AuthError("Invalid user token", step="authenticate")

    token = authorization.replace("Bearer ", "", 1).strip()

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": False}
        )
    except ExpiredSignatureError:
        raise AuthError("Access token has expired", step="authenticate")
    except InvalidTokenError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise AuthError("Invalid user token", step="authenticate")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthError("Invalid user token", step="authenticate")

    return str(user_id)
