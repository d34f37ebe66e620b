"""Request context helpers for logging and the request pipeline."""
from __future__ import annotations

import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Iterator

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str) -> None:
    _request_id.set(request_id)


def get_request_id() -> str | None:
    return _request_id.get()


def clear_request_id() -> None:
    _request_id.set(None)


@contextmanager
def request_context(request_id: str) -> Iterator[None]:
    token = _request_id.set(request_id)
    try:
        yield
    finally:
        _request_id.reset(token)


@dataclass
class PipelineContext:
    """State shared by the interceptors wrapping a single request."""

    request_id: str
    username: str | None = None
    endpoint: str | None = None
    started: float = field(default_factory=time.perf_counter)

    @property
    def instrumented(self) -> bool:
        return self.endpoint is not None

    def start_timing(self, endpoint: str) -> None:
        self.endpoint = endpoint
        self.started = time.perf_counter()
