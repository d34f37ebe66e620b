"""Pydantic schemas exposed by the application API."""
from .auth import LoginRequest, LoginResponse
from .common import SimpleMessage
from .items import CreateItemRequest, CreateItemResponse, Item, UpdateItemRequest
from .metrics import PerformanceRecord
from .sort import SortBenchmarkResponse, SortRequest, SortResult

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "SimpleMessage",
    "CreateItemRequest",
    "CreateItemResponse",
    "Item",
    "UpdateItemRequest",
    "PerformanceRecord",
    "SortBenchmarkResponse",
    "SortRequest",
    "SortResult",
]
