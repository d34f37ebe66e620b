"""Schemas for performance log endpoints."""
from pydantic import BaseModel


class PerformanceRecord(BaseModel):
    """One line of the performance log."""

    timestamp: str
    endpoint: str
    rss: int
    heapTotal: int
    heapUsed: int
    elapsedTime: str
    cpuUsage: str
    memoryUsage: str
