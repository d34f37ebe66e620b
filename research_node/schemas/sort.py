"""Schemas for the sorting benchmark endpoint."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SortRequest(BaseModel):
    """Benchmark payload; ``list`` is validated by the sort engine itself."""

    model_config = ConfigDict(populate_by_name=True)

    values: Any = Field(default=None, alias="list")


class SortResult(BaseModel):
    sortedList: list[Any]
    elapsedTime: str
    memoryUsage: str
    cpuUsage: str


class SortBenchmarkResponse(BaseModel):
    bubbleSort: SortResult
    quickSort: SortResult
    binarySort: SortResult
