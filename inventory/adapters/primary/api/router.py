"""
REST endpoints over the inventory view-model.

Mutations are fire-and-forget: they answer 202 once the action is launched.
Clients that need the result follow the WebSocket streams.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from typing import List

from inventory.application.view_model import InventoryViewModel
from inventory.core.domain.models import Item
from inventory.adapters.primary.api.schemas import (
    AcceptedResponse,
    ItemEntry,
    ItemResponse,
    StockAvailability,
)

router = APIRouter(prefix="/items", tags=["items"])


# Dependency Injection Helper
def get_view_model(request: Request) -> InventoryViewModel:
    return request.app.state.view_model


async def _get_existing_item(view_model: InventoryViewModel, item_id: int) -> Item:
    item = await view_model.retrieve_item(item_id).snapshot()
    if item is None:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")
    return item


def _check_entry(view_model: InventoryViewModel, entry: ItemEntry):
    if not view_model.is_entry_valid(entry.name, entry.price, entry.quantity):
        raise HTTPException(status_code=422, detail="Name, price and quantity are required")


@router.get("/", response_model=List[ItemResponse])
async def list_items(view_model: InventoryViewModel = Depends(get_view_model)):
    """All items ordered by name."""
    items = await view_model.all_items.snapshot()
    return [ItemResponse.from_item(item) for item in items]


@router.get("/{item_id}", response_model=ItemResponse)
async def read_item(item_id: int, view_model: InventoryViewModel = Depends(get_view_model)):
    item = await _get_existing_item(view_model, item_id)
    return ItemResponse.from_item(item)


@router.post("/", response_model=AcceptedResponse, status_code=status.HTTP_202_ACCEPTED)
async def add_item(entry: ItemEntry, view_model: InventoryViewModel = Depends(get_view_model)):
    _check_entry(view_model, entry)
    try:
        view_model.add_new_item(entry.name, entry.price, entry.quantity)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid number: {e}")
    return AcceptedResponse()


@router.put("/{item_id}", response_model=AcceptedResponse, status_code=status.HTTP_202_ACCEPTED)
async def update_item(
    item_id: int,
    entry: ItemEntry,
    view_model: InventoryViewModel = Depends(get_view_model)
):
    _check_entry(view_model, entry)
    await _get_existing_item(view_model, item_id)
    try:
        view_model.update_item(item_id, entry.name, entry.price, entry.quantity)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid number: {e}")
    return AcceptedResponse()


@router.post("/{item_id}/sell", response_model=AcceptedResponse, status_code=status.HTTP_202_ACCEPTED)
async def sell_item(item_id: int, view_model: InventoryViewModel = Depends(get_view_model)):
    """
    Sells one unit.

    **Returns:**
    - 404 if the item does not exist
    - 409 if it is out of stock
    """
    item = await _get_existing_item(view_model, item_id)
    if not view_model.is_stock_available(item):
        raise HTTPException(status_code=409, detail=f"Item {item_id} is out of stock")
    view_model.sell_item(item)
    return AcceptedResponse()


@router.get("/{item_id}/stock", response_model=StockAvailability)
async def stock_availability(item_id: int, view_model: InventoryViewModel = Depends(get_view_model)):
    item = await _get_existing_item(view_model, item_id)
    return StockAvailability(available=view_model.is_stock_available(item))


@router.delete("/{item_id}", response_model=AcceptedResponse, status_code=status.HTTP_202_ACCEPTED)
async def delete_item(item_id: int, view_model: InventoryViewModel = Depends(get_view_model)):
    # Delete matches on id only; unknown ids are a no-op
    item = await view_model.retrieve_item(item_id).snapshot()
    if item is not None:
        view_model.delete_item(item)
    return AcceptedResponse()
