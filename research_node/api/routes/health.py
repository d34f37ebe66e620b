"""Health check endpoint."""
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from research_node.api.dependencies import get_health_service
from research_node.services.health_service import HealthService

router = APIRouter()


@router.get("/health", response_class=PlainTextResponse, summary="Database health probe")
async def health_check(
    health_service: HealthService = Depends(get_health_service),
) -> PlainTextResponse:
    if await health_service.check():
        return PlainTextResponse("OK")
    return PlainTextResponse("Database not OK", status_code=500)
