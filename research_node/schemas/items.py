"""Schemas for item endpoints."""
from typing import Optional

from pydantic import BaseModel


class Item(BaseModel):
    id: int
    name: Optional[str] = None
    value: Optional[str] = None


class CreateItemRequest(BaseModel):
    """Payload for item creation; neither field is required to be non-empty."""

    name: Optional[str] = None
    value: Optional[str] = None


class CreateItemResponse(BaseModel):
    message: str
    id: int


class UpdateItemRequest(BaseModel):
    """Payload for item updates; presence of every field is checked by the route."""

    id: Optional[int] = None
    name: Optional[str] = None
    value: Optional[str] = None
