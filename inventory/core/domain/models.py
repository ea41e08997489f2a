import locale

from pydantic import BaseModel, ConfigDict


class Item(BaseModel):
    """One stock-keeping unit. ``id == 0`` means the store has not assigned one yet."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int = 0
    name: str
    price: float
    quantity_in_stock: int

    def formatted_price(self) -> str:
        try:
            return locale.currency(self.price, grouping=True)
        except ValueError:
            # C/POSIX locale carries no currency conventions
            return f"${self.price:,.2f}"
