"""Caller authentication as an injected capability.

The identity service validates bearer tokens; this module only asks it and
exposes the answer as a :class:`UserContext`. The active authenticator lives on
``app.state.authenticator`` so tests and deployments can swap it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx
from fastapi import Request

from app.core.exceptions import ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserContext:
    user_id: str
    entity_id: str


class Authenticator(Protocol):
    async def authenticate(self, token: str) -> UserContext:
        """Resolve a bearer token to the caller, or raise UnauthorizedError."""
        ...


class IdentityServiceAuthenticator:
    """Validates tokens against the identity service over HTTP."""

    def __init__(self, base_url: str, timeout: float = 5.0):
        self._validate_url = f"{base_url.rstrip('/')}/api/v1/auth/validate"
        self._timeout = timeout

    async def authenticate(self, token: str) -> UserContext:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    self._validate_url,
                    headers={"Authorization": f"Bearer {token}"},
                )
        except httpx.HTTPError as exc:
            logger.warning("Identity service unreachable: %s", exc)
            raise UnauthorizedError("authentication service unavailable") from exc

        if response.status_code in (401, 403):
            raise UnauthorizedError("invalid or expired token")
        if response.is_error:
            logger.warning("Identity service returned %s", response.status_code)
            raise UnauthorizedError("authentication failed")

        payload = response.json()
        user_id = payload.get("user_id")
        entity_id = payload.get("entity_id")
        if not user_id or not entity_id:
            raise UnauthorizedError("token carries no user or entity")
        return UserContext(user_id=str(user_id), entity_id=str(entity_id))


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------

async def get_current_user(request: Request) -> UserContext:
    """Require an authenticated caller."""
    token = _bearer_token(request)
    if not token:
        raise UnauthorizedError("authentication required")
    authenticator: Authenticator = request.app.state.authenticator
    return await authenticator.authenticate(token)


async def get_optional_user(request: Request) -> UserContext | None:
    """Resolve the caller when a token is present; anonymous otherwise."""
    if not _bearer_token(request):
        return None
    return await get_current_user(request)


def require_entity(user: UserContext, entity_id: str) -> None:
    """Reject callers acting outside their own entity."""
    if user.entity_id != entity_id:
        logger.warning(
            "Entity mismatch user_id=%s user_entity_id=%s req_entity_id=%s",
            user.user_id, user.entity_id, entity_id,
        )
        raise ForbiddenError("access denied: entity mismatch")
