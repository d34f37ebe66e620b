"""FastAPI dependency providers."""
from typing import Callable

from fastapi import Depends, Request

from research_node.core.request_context import PipelineContext
from research_node.services.health_service import HealthService
from research_node.services.item_store import ItemStore
from research_node.services.performance_log import PerformanceLog
from research_node.services.registry import ServiceRegistry
from research_node.services.user_store import UserStore


def get_service_registry(request: Request) -> ServiceRegistry:
    """Return the service registry stored on the FastAPI application state."""

    registry = request.app.state.services
    if not isinstance(registry, ServiceRegistry):
        raise RuntimeError("Service registry not initialised")
    return registry


def get_pipeline_context(request: Request) -> PipelineContext:
    """Return the per-request context created by the pipeline middleware."""

    context = getattr(request.state, "pipeline", None)
    if context is None:
        raise RuntimeError("Request pipeline middleware not installed")
    return context


def get_item_store(registry: ServiceRegistry = Depends(get_service_registry)) -> ItemStore:
    return registry.item_store


def get_user_store(registry: ServiceRegistry = Depends(get_service_registry)) -> UserStore:
    return registry.user_store


def get_performance_log(registry: ServiceRegistry = Depends(get_service_registry)) -> PerformanceLog:
    return registry.performance_log


def get_health_service(registry: ServiceRegistry = Depends(get_service_registry)) -> HealthService:
    return registry.health_service


def instrument(endpoint: str) -> Callable[[PipelineContext], None]:
    """Mark the route for performance logging and start its timer.

    List it after the auth gate so rejected requests are not recorded.
    """

    def _start(context: PipelineContext = Depends(get_pipeline_context)) -> None:
        context.start_timing(endpoint)

    return _start
