"""Bearer token gate for authenticated routes."""
from __future__ import annotations

import logging

from fastapi import Depends, Request

from research_node.api.dependencies import get_pipeline_context, get_user_store
from research_node.core.exceptions import UnauthorizedError
from research_node.core.request_context import PipelineContext
from research_node.services.user_store import UserStore

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def _extract_token(request: Request) -> str:
    auth_header = request.headers.get("authorization", "")
    if not auth_header.startswith(BEARER_PREFIX):
        raise UnauthorizedError()
    return auth_header[len(BEARER_PREFIX):]


async def require_user(
    request: Request,
    users: UserStore = Depends(get_user_store),
    context: PipelineContext = Depends(get_pipeline_context),
) -> str:
    """Resolve the bearer token to a username and bind it to the request."""

    token = _extract_token(request)
    username = await users.resolve_token(token)
    if username is None:
        raise UnauthorizedError()
    context.username = username
    logger.debug("Authenticated %s", username)
    return username
