"""FastAPI dependencies for workspace resolution."""

from __future__ import annotations

import hmac

from fastapi import Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..database import get_db
from ..errors import AuthorizationError
from ..models.workspace import Workspace


def _bearer_token(request: Request) -> str:
    header = request.headers.get("authorization", "").strip()
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def _workspace_id_for_token(token: str) -> str | None:
    for expected, workspace_id in settings.workspace_tokens_map.items():
        if hmac.compare_digest(token, expected):
            return workspace_id
    return None


async def get_current_workspace(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Workspace:
    """Resolve the bearer token to its Workspace. Raises 401 otherwise."""
    token = _bearer_token(request)
    if not token:
        raise AuthorizationError("Missing API key.")

    workspace_id = _workspace_id_for_token(token)
    if not workspace_id:
        raise AuthorizationError("Invalid API key.")

    result = await db.execute(select(Workspace).where(Workspace.id == workspace_id))
    workspace = result.scalar_one_or_none()
    if not workspace:
        raise AuthorizationError("Invalid API key.")

    request.state.workspace_id = workspace.id
    return workspace
