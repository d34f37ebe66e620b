"""Health check service."""
import logging

from research_node.core.exceptions import InternalError
from research_node.services.item_store import ItemStore

logger = logging.getLogger(__name__)


class HealthService:
    """Encapsulates health probe logic for the API layer."""

    def __init__(self, item_store: ItemStore) -> None:
        self._item_store = item_store

    async def check(self) -> bool:
        try:
            await self._item_store.ping()
        except InternalError as exc:
            logger.error("Database health check failed: %s", exc.__cause__ or exc)
            return False
        return True
