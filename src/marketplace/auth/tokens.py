"""Bearer token issue and verification (HS256 JWT).

Claims: ``sub`` (user id), ``email``, ``role`` and ``exp``.
"""

from datetime import UTC, datetime, timedelta

import jwt
import structlog

from marketplace.auth.actor import Actor
from marketplace.config import int_setting, secret_setting, setting
from marketplace.exceptions import Unauthorized

logger = structlog.get_logger(__name__)


def _secret() -> str:
    return secret_setting("JWT_SECRET")


def _algorithm() -> str:
    return setting("JWT_ALGORITHM", "HS256")


def issue_token(user_id: str, email: str, role: str) -> str:
    expires = datetime.now(UTC) + timedelta(minutes=int_setting("JWT_EXPIRES_MINUTES", 1440))
    claims = {"sub": str(user_id), "email": email, "role": role, "exp": expires}
    return jwt.encode(claims, _secret(), algorithm=_algorithm())


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, _secret(), algorithms=[_algorithm()])
    except jwt.ExpiredSignatureError as exc:
        raise Unauthorized("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        logger.info("Rejected bearer token", reason=str(exc))
        raise Unauthorized("Invalid token") from exc


def actor_from_token(token: str) -> Actor:
    claims = decode_token(token)
    if not claims.get("sub") or not claims.get("role"):
        raise Unauthorized("Invalid token")
    return Actor(user_id=claims["sub"], role=claims["role"], email=claims.get("email"))
