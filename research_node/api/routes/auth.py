"""Login endpoint issuing the stored bearer token."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from research_node.api.dependencies import get_user_store, instrument
from research_node.core.exceptions import InvalidCredentialsError
from research_node.schemas import LoginRequest, LoginResponse
from research_node.services.user_store import UserStore

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Exchange credentials for the user's bearer token",
    dependencies=[Depends(instrument("/login"))],
)
async def login(
    payload: LoginRequest,
    users: UserStore = Depends(get_user_store),
) -> LoginResponse:
    # Unknown user and wrong password are reported identically.
    token = await users.find_token(payload.username, payload.password)
    if token is None:
        raise InvalidCredentialsError()
    return LoginResponse(token=token)
