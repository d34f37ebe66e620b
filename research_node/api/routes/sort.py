"""Sorting benchmark endpoint."""
import asyncio

from fastapi import APIRouter, Depends

from research_node.api.auth_gate import require_user
from research_node.api.dependencies import instrument
from research_node.schemas import SortBenchmarkResponse, SortRequest
from research_node.services.sort_engine import run_benchmark

router = APIRouter()


@router.post(
    "/sort",
    response_model=SortBenchmarkResponse,
    summary="Sort a list with bubble, quick and binary insertion sort",
    dependencies=[Depends(require_user), Depends(instrument("/sort"))],
)
async def sort_benchmark(payload: SortRequest) -> dict:
    # Sorting is CPU bound; keep it off the event loop.
    return await asyncio.to_thread(run_benchmark, payload.values)
