"""FastAPI application entrypoint."""
from __future__ import annotations

from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI
from starlette.datastructures import MutableHeaders
from starlette.requests import Request

from research_node.api.error_handlers import register_exception_handlers
from research_node.api.router import api_router
from research_node.core.config import Settings, get_settings
from research_node.core.logging import configure_logging
from research_node.core.request_context import PipelineContext, clear_request_id, set_request_id
from research_node.services.registry import ServiceRegistry


class RequestPipelineMiddleware:
    """Outermost interceptor of every HTTP request.

    Creates the shared ``PipelineContext``, tags the request id and, once the
    complete response has been sent, appends one performance record when a route
    dependency marked the request as instrumented.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive=receive)
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        set_request_id(request_id)
        context = PipelineContext(request_id=request_id)
        scope.setdefault("state", {})["pipeline"] = context

        recorded = False

        async def send_wrapper(message):
            nonlocal recorded
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers["X-Request-ID"] = request_id
            await send(message)
            if (
                message["type"] == "http.response.body"
                and not message.get("more_body", False)
                and context.instrumented
                and not recorded
            ):
                recorded = True
                await self._record(scope, context)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            # An unhandled error escapes before any body reaches this layer; the
            # 500 is rendered further out, so record here instead.
            if context.instrumented and not recorded:
                recorded = True
                await self._record(scope, context)
            clear_request_id()

    @staticmethod
    async def _record(scope, context: PipelineContext) -> None:
        registry = getattr(scope["app"].state, "services", None)
        if not isinstance(registry, ServiceRegistry):
            return
        await registry.performance_log.record(context.endpoint, context.started)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an injected or environment-derived config."""

    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Connect to the store before serving; a failed connection aborts startup."""

        registry = ServiceRegistry(settings)
        app.state.services = registry

        await registry.startup()
        try:
            yield
        finally:
            await registry.shutdown()

    app = FastAPI(
        title="Research Node API",
        description="Item CRUD, sorting benchmark and performance logging service",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(RequestPipelineMiddleware)
    app.include_router(api_router)
    register_exception_handlers(app)
    return app


app = create_app()
