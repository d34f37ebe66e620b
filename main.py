"""CLI entry-point for running the FastAPI application."""
from __future__ import annotations

import uvicorn

from research_node.core.config import get_settings


def main() -> None:
    """Run the ASGI application using uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "research_node.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=2,
        reload=False,
        access_log=False,
    )


if __name__ == "__main__":
    main()
