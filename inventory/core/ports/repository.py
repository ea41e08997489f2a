from abc import ABC, abstractmethod
from typing import List
from inventory.core.domain.models import Item
from inventory.core.live_query import LiveQuery

class ItemRepositoryPort(ABC):
    """
    Persistence contract for items.

    Mutations are coroutines; reads are live queries that re-emit on change.
    """

    @abstractmethod
    async def insert(self, item: Item) -> None:
        """Persist a new item; a primary-key conflict is ignored."""

    @abstractmethod
    async def update(self, item: Item) -> None:
        """Overwrite the row with ``item.id``; no effect if it does not exist."""

    @abstractmethod
    async def delete(self, item: Item) -> None:
        """Remove the row with ``item.id``; no effect if it does not exist."""

    @abstractmethod
    def get_item(self, item_id: int) -> LiveQuery[Item]:
        pass

    @abstractmethod
    def get_items(self) -> LiveQuery[List[Item]]:
        pass
