"""
Pydantic schemas for the item API.
"""
from pydantic import BaseModel, Field

from inventory.core.domain.models import Item


class ItemEntry(BaseModel):
    """Raw form input; price and quantity arrive as typed by the user."""
    name: str
    price: str
    quantity: str


class ItemResponse(BaseModel):
    id: int
    name: str
    price: float
    quantity_in_stock: int = Field(..., description="Units on hand")
    formatted_price: str

    @classmethod
    def from_item(cls, item: Item) -> "ItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            price=item.price,
            quantity_in_stock=item.quantity_in_stock,
            formatted_price=item.formatted_price(),
        )


class StockAvailability(BaseModel):
    available: bool


class AcceptedResponse(BaseModel):
    status: str = "accepted"
