"""Performance and container metrics log endpoints."""
from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse

from research_node.api.dependencies import get_performance_log, get_service_registry, instrument
from research_node.core.exceptions import NotFoundError
from research_node.schemas import PerformanceRecord, SimpleMessage
from research_node.services.performance_log import PerformanceLog, read_text_log
from research_node.services.registry import ServiceRegistry

router = APIRouter()


@router.get(
    "/metrics",
    summary="Return the raw performance log (one JSON record per line)",
    dependencies=[Depends(instrument("/metrics"))],
)
async def read_metrics(log: PerformanceLog = Depends(get_performance_log)) -> Response:
    content = await log.read_raw()
    if content is None:
        return PlainTextResponse("No performance metrics available", status_code=404)
    return Response(content=content, media_type="application/json")


@router.get(
    "/metrics/delete",
    response_model=SimpleMessage,
    summary="Purge the performance log",
    dependencies=[Depends(instrument("/metrics/delete"))],
)
async def delete_metrics(log: PerformanceLog = Depends(get_performance_log)) -> SimpleMessage:
    await log.purge()
    return SimpleMessage(message="Performance metrics deleted")


@router.get(
    "/performance/last",
    response_model=PerformanceRecord,
    summary="Return the most recent performance record",
    dependencies=[Depends(instrument("/performance/last"))],
)
async def read_last_performance(log: PerformanceLog = Depends(get_performance_log)) -> dict:
    record = await log.read_last()
    if record is None:
        raise NotFoundError("No performance metrics available")
    return record


@router.get("/docker_metrics", summary="Return the raw container metrics log")
async def read_docker_metrics(
    registry: ServiceRegistry = Depends(get_service_registry),
) -> Response:
    content = await read_text_log(registry.settings.docker_metrics_path)
    if content is None:
        return PlainTextResponse("No docker metrics available", status_code=404)
    return Response(content=content, media_type="application/json")
