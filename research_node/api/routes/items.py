"""Item CRUD endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from research_node.api.auth_gate import require_user
from research_node.api.dependencies import get_item_store, instrument
from research_node.core.exceptions import (
    BadRequestError,
    InvalidParameterError,
    MissingParameterError,
    NotFoundError,
)
from research_node.schemas import (
    CreateItemRequest,
    CreateItemResponse,
    Item,
    SimpleMessage,
    UpdateItemRequest,
)
from research_node.services.item_store import ItemStore

router = APIRouter(dependencies=[Depends(require_user)])


# Signed 64-bit range of the items.id column; larger ids cannot exist.
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


def _parse_id(raw: str | None) -> int:
    if raw is None or raw == "":
        raise MissingParameterError("Missing ID parameter")
    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidParameterError("ID must be a number") from exc


def _storable(item_id: int) -> bool:
    return _MIN_ID <= item_id <= _MAX_ID


@router.get(
    "/items",
    response_model=list[Item],
    summary="List every item",
    dependencies=[Depends(instrument("/items"))],
)
async def list_items(store: ItemStore = Depends(get_item_store)) -> list[dict]:
    return await store.list_items()


@router.get(
    "/item",
    response_model=Item,
    summary="Fetch an item by id",
    dependencies=[Depends(instrument("/item"))],
)
async def get_item(
    item_id: str | None = Query(default=None, alias="id"),
    store: ItemStore = Depends(get_item_store),
) -> dict:
    parsed = _parse_id(item_id)
    item = await store.get_item(parsed) if _storable(parsed) else None
    if item is None:
        raise NotFoundError("Item not found")
    return item


@router.get(
    "/item/last",
    response_model=Item,
    summary="Fetch the item with the highest id",
    dependencies=[Depends(instrument("/item/last"))],
)
async def get_last_item(store: ItemStore = Depends(get_item_store)) -> dict:
    item = await store.get_last_item()
    if item is None:
        raise NotFoundError("Item not found")
    return item


@router.post(
    "/items/create",
    response_model=CreateItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an item",
    dependencies=[Depends(instrument("/items/create"))],
)
async def create_item(
    payload: CreateItemRequest,
    store: ItemStore = Depends(get_item_store),
) -> CreateItemResponse:
    item_id = await store.create_item(payload.name, payload.value)
    return CreateItemResponse(message="Item created", id=item_id)


@router.put(
    "/item/update",
    response_model=SimpleMessage,
    summary="Update an item; a missing id is not reported",
    dependencies=[Depends(instrument("/item/update"))],
)
async def update_item(
    payload: UpdateItemRequest,
    store: ItemStore = Depends(get_item_store),
) -> SimpleMessage:
    if not payload.id or not payload.name or not payload.value:
        raise BadRequestError("Missing parameters")
    if _storable(payload.id):
        await store.update_item(payload.id, payload.name, payload.value)
    return SimpleMessage(message="Item updated")


@router.delete(
    "/item/delete",
    response_model=SimpleMessage,
    summary="Delete an item by id; a missing id is not reported",
    dependencies=[Depends(instrument("/item/delete"))],
)
async def delete_item(
    item_id: str | None = Query(default=None, alias="id"),
    store: ItemStore = Depends(get_item_store),
) -> SimpleMessage:
    try:
        parsed = _parse_id(item_id)
    except BadRequestError as exc:
        raise InvalidParameterError("Invalid ID") from exc
    if _storable(parsed):
        await store.delete_item(parsed)
    return SimpleMessage(message="Item deleted")


@router.delete(
    "/item/last/delete",
    response_model=SimpleMessage,
    summary="Delete the item with the highest id",
    dependencies=[Depends(instrument("/item/last/delete"))],
)
async def delete_last_item(store: ItemStore = Depends(get_item_store)) -> SimpleMessage:
    deleted = await store.delete_last_item()
    if deleted is None:
        raise NotFoundError("No items found")
    return SimpleMessage(message="Last item deleted")
