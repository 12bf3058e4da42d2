"""API dependencies for identifying the calling actor.

The upstream gateway authenticates users with the identity provider and
forwards the actor as trusted headers.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header

from bookdesk.core.exceptions import AuthenticationError, AuthorizationError
from bookdesk.core.permissions import UserRole, coerce_role


@dataclass(frozen=True)
class Actor:
    """Role and identity on whose behalf a request is made."""

    role: UserRole
    id: str


async def get_current_actor(
    x_actor_role: Annotated[str | None, Header()] = None,
    x_actor_id: Annotated[str | None, Header()] = None,
) -> Actor:
    """Get the current actor from the gateway headers."""
    if not x_actor_role or not x_actor_id:
        raise AuthenticationError("Actor headers are missing")

    role = coerce_role(x_actor_role)
    if role is None:
        raise AuthorizationError(f"Role '{x_actor_role}' is not recognised")

    return Actor(role=role, id=x_actor_id.strip())


CurrentActor = Annotated[Actor, Depends(get_current_actor)]
