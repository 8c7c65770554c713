"""Bearer-token authentication for API routes."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from marketplace.auth.actor import Actor
from marketplace.auth.tokens import actor_from_token
from marketplace.exceptions import Unauthorized

bearer_scheme = HTTPBearer(auto_error=False)


async def current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Actor:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthorized("Missing bearer token")
    return actor_from_token(credentials.credentials)


def actor_fields(actor: Actor) -> dict:
    """Command fields identifying the caller."""
    return {"actor_id": actor.user_id, "actor_role": actor.role}
