"""
View-model between the presentation layer and the item store.

Mutations are launched as background tasks owned by the view-model and return
nothing; callers observe their effect through ``all_items`` or
``retrieve_item``. ``close()`` cancels whatever is still pending.
"""

import asyncio
import logging
from typing import Coroutine, List, Optional, Set

from inventory.core.domain.models import Item
from inventory.core.live_query import LiveQuery
from inventory.core.ports.repository import ItemRepositoryPort

logger = logging.getLogger(__name__)


class InventoryViewModel:
    def __init__(self, repository: ItemRepositoryPort):
        self.repository = repository
        self.all_items: LiveQuery[List[Item]] = repository.get_items()
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    # ------------------------------------------------------------------
    # Scope
    # ------------------------------------------------------------------

    def _launch(self, coro: Coroutine, description: str):
        if self._closed:
            coro.close()
            logger.warning("View-model closed, dropping %s", description)
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise
        task = loop.create_task(coro, name=description)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task):
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug("%s cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.error("%s failed", task.get_name(), exc_info=exc)

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    def close(self):
        """Cancel every task not yet finished. The store itself is untouched."""
        self._closed = True
        for task in list(self._tasks):
            task.cancel()

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def is_entry_valid(self, item_name: str, item_price: str, item_count: str) -> bool:
        if not item_name.strip() or not item_price.strip() or not item_count.strip():
            return False
        return True

    def _get_new_item_entry(self, item_name: str, item_price: str, item_count: str) -> Item:
        return Item(name=item_name, price=float(item_price), quantity_in_stock=int(item_count))

    def _get_updated_item_entry(self, item_id: int, item_name: str, item_price: str, item_count: str) -> Item:
        return Item(id=item_id, name=item_name, price=float(item_price), quantity_in_stock=int(item_count))

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def add_new_item(self, item_name: str, item_price: str, item_count: str):
        """Raises ValueError if price or count is not a number."""
        new_item = self._get_new_item_entry(item_name, item_price, item_count)
        self._launch(self.repository.insert(new_item), f"insert {item_name!r}")

    def retrieve_item(self, item_id: int) -> LiveQuery[Item]:
        return self.repository.get_item(item_id)

    def update_item(self, item_id: int, item_name: str, item_price: str, item_count: str):
        """Raises ValueError if price or count is not a number."""
        updated_item = self._get_updated_item_entry(item_id, item_name, item_price, item_count)
        self._update(updated_item)

    def _update(self, item: Item):
        self._launch(self.repository.update(item), f"update item {item.id}")

    def sell_item(self, item: Item):
        if item.quantity_in_stock > 0:
            self._update(item.model_copy(update={"quantity_in_stock": item.quantity_in_stock - 1}))

    def is_stock_available(self, item: Item) -> bool:
        return item.quantity_in_stock > 0

    def delete_item(self, item: Item):
        self._launch(self.repository.delete(item), f"delete item {item.id}")


def create_view_model(repository: Optional[ItemRepositoryPort] = None) -> InventoryViewModel:
    """Builds a view-model over ``repository``, defaulting to the shared database's store."""
    if repository is None:
        from inventory.adapters.secondary.database.database import InventoryDatabase
        repository = InventoryDatabase.get_database().item_dao()
    return InventoryViewModel(repository)
