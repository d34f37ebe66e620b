"""Service registry that wires all application services together."""
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from research_node.core.config import Settings
from research_node.core.exceptions import InternalError, StoreUnavailable
from research_node.core.request_context import request_context
from research_node.db import create_engine_from_settings, create_sessionmaker
from research_node.services.health_service import HealthService
from research_node.services.item_store import ItemStore
from research_node.services.performance_log import PerformanceLog
from research_node.services.user_store import UserStore

logger = logging.getLogger(__name__)


class ServiceRegistry:
    """Container object for dependency injection."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.performance_log = PerformanceLog(settings.performance_log_path)
        self.engine: AsyncEngine | None = None
        self._startup_lock = asyncio.Lock()
        self._shutdown_lock = asyncio.Lock()

    def _build_stores(self) -> None:
        self.engine = create_engine_from_settings(self.settings)
        sessionmaker = create_sessionmaker(self.engine)
        self.item_store = ItemStore(sessionmaker)
        self.user_store = UserStore(
            sessionmaker,
            password_scheme=self.settings.password_scheme,
        )
        self.health_service = HealthService(self.item_store)

    async def startup(self) -> None:
        async with self._startup_lock:
            with request_context("bg:registry"):
                logger.info("Connecting to database")
                self._build_stores()
                try:
                    await self.item_store.ping()
                except InternalError as exc:
                    logger.error("Database connection failed: %s", exc.__cause__ or exc)
                    await self.engine.dispose()
                    raise StoreUnavailable() from exc
                logger.info("Connected to database")

    async def shutdown(self) -> None:
        async with self._shutdown_lock:
            with request_context("bg:registry"):
                if self.engine is None:
                    return
                logger.info("Closing database connections")
                await self.engine.dispose()
                self.engine = None
