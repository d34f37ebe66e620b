"""Append-only NDJSON log of per-request performance records."""
from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from research_node.core.exceptions import InternalError
from research_node.core.metrics import build_performance_record

logger = logging.getLogger(__name__)


class PerformanceLog:
    """Record one line per completed request and serve the log back.

    Each record is written as a single newline-terminated JSON line in append
    mode while holding the log lock, so overlapping requests never interleave
    partial lines.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def append(self, record: dict[str, Any]) -> bool:
        """Append ``record``; failures are logged and reported as False."""

        line = json.dumps(record, separators=(",", ":")) + "\n"
        try:
            async with self._lock:
                async with aiofiles.open(self._path, "a", encoding="utf-8") as f:
                    await f.write(line)
        except OSError as exc:
            logger.error("Error writing to performance log %s: %s", self._path, exc)
            return False
        return True

    async def record(self, endpoint: str, started: float) -> bool:
        return await self.append(build_performance_record(endpoint, started))

    async def read_raw(self) -> str | None:
        try:
            async with aiofiles.open(self._path, "r", encoding="utf-8") as f:
                return await f.read()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise InternalError("Failed to read performance metrics") from exc

    async def read_last(self) -> dict[str, Any] | None:
        content = await self.read_raw()
        lines = [line for line in (content or "").splitlines() if line.strip()]
        if not lines:
            return None
        try:
            return json.loads(lines[-1])
        except json.JSONDecodeError as exc:
            raise InternalError("Failed to parse performance metrics") from exc

    async def purge(self) -> None:
        """Remove the whole log; a log that does not exist counts as purged."""

        async with self._lock:
            try:
                await aiofiles.os.remove(self._path)
            except FileNotFoundError:
                logger.info("Performance log %s already absent", self._path)
            except OSError as exc:
                raise InternalError("Failed to delete performance metrics") from exc


async def read_text_log(path: Path | str) -> str | None:
    """Return the raw contents of a log written by an external collector."""

    try:
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            return await f.read()
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise InternalError("Failed to read metrics") from exc
