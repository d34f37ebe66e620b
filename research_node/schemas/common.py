"""Shared response schemas."""
from pydantic import BaseModel


class SimpleMessage(BaseModel):
    """Generic success wrapper."""

    message: str
