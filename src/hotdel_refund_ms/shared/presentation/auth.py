"""Bearer token authentication.

Tokens are issued by the marketplace API; this service only decodes them.
"""

from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from hotdel_refund_ms.features.orders.domain.entities import ActorIdentity
from hotdel_refund_ms.shared.core.logging import get_logger
from hotdel_refund_ms.shared.core.settings import get_settings
from hotdel_refund_ms.shared.domain.exceptions import AuthenticationError

logger = get_logger(__name__)

http_bearer = HTTPBearer(
    scheme_name="Bearer",
    description="JWT Bearer token issued by the marketplace API",
    auto_error=False,
)


def decode_actor(token: str) -> ActorIdentity:
    """Decode a bearer token into the calling actor."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired") from None
    except jwt.PyJWTError as e:
        logger.info("token_rejected", error=str(e))
        raise AuthenticationError("Invalid token") from None

    subject = payload.get("sub") or payload.get("id")
    role = payload.get("role")
    if not subject or not role:
        raise AuthenticationError("Token is missing subject or role")

    return ActorIdentity(id=str(subject), role=str(role), email=payload.get("email"))


async def get_current_actor(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(http_bearer)],
) -> ActorIdentity:
    """Dependency resolving the authenticated actor."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authorized, no token")
    return decode_actor(credentials.credentials)
