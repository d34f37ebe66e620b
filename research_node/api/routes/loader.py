"""Load-testing service ownership verification."""
import re

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from research_node.core.exceptions import NotFoundError

router = APIRouter()

_TOKEN_RE = re.compile(r"[a-zA-Z0-9]{32}")


@router.get("/loaderio-{token}.txt", response_class=PlainTextResponse, include_in_schema=False)
async def loaderio_verification(token: str) -> PlainTextResponse:
    if not _TOKEN_RE.fullmatch(token):
        raise NotFoundError("Not Found")
    return PlainTextResponse(f"loaderio-{token}")
