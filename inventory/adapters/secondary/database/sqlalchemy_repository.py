import asyncio
import logging
from typing import List, Optional
from sqlalchemy import delete, select, update
from sqlalchemy.dialects.sqlite import insert
from inventory.core.domain.models import Item
from inventory.core.live_query import LiveQuery
from inventory.core.ports.repository import ItemRepositoryPort
from inventory.adapters.secondary.database.orm import ItemModel

logger = logging.getLogger(__name__)

item_table = ItemModel.__table__
ITEM_TABLE = item_table.name


class SQLAlchemyItemRepository(ItemRepositoryPort):
    """Item store over an ``InventoryDatabase``; statements run on a worker thread."""

    def __init__(self, database):
        self.database = database

    async def insert(self, item: Item) -> None:
        await asyncio.to_thread(self._insert, item)

    async def update(self, item: Item) -> None:
        await asyncio.to_thread(self._update, item)

    async def delete(self, item: Item) -> None:
        await asyncio.to_thread(self._delete, item)

    def get_item(self, item_id: int) -> LiveQuery[Item]:
        return LiveQuery(
            self.database.invalidation_tracker,
            (ITEM_TABLE,),
            lambda: self._fetch_item(item_id),
            skip_missing=True,
            distinct=True,
        )

    def get_items(self) -> LiveQuery[List[Item]]:
        return LiveQuery(self.database.invalidation_tracker, (ITEM_TABLE,), self._fetch_items)

    def _insert(self, item: Item):
        values = {"name": item.name, "price": item.price, "quantity": item.quantity_in_stock}
        if item.id:
            values["id"] = item.id
        stmt = insert(item_table).values(**values).on_conflict_do_nothing(index_elements=["id"])
        self._write(stmt, "insert", item)

    def _update(self, item: Item):
        stmt = (
            update(item_table)
            .where(item_table.c.id == item.id)
            .values(name=item.name, price=item.price, quantity=item.quantity_in_stock)
        )
        self._write(stmt, "update", item)

    def _delete(self, item: Item):
        self._write(delete(item_table).where(item_table.c.id == item.id), "delete", item, deleted=True)

    def _write(self, stmt, operation: str, item: Item, deleted: bool = False):
        with self.database.session() as db:
            changed = db.execute(stmt).rowcount
        if changed:
            logger.info("%s item id=%s name=%r", operation, item.id or "new", item.name)
            self.database.invalidation_tracker.notify(ITEM_TABLE, deleted=deleted)
        else:
            logger.debug("%s item id=%s changed no rows", operation, item.id)

    def _fetch_item(self, item_id: int) -> Optional[Item]:
        with self.database.session() as db:
            db_item = db.query(ItemModel).filter(ItemModel.id == item_id).first()
            if db_item:
                return Item.model_validate(db_item)
            return None

    def _fetch_items(self) -> List[Item]:
        with self.database.session() as db:
            items = db.execute(select(ItemModel).order_by(ItemModel.name.asc())).scalars().all()
            return [Item.model_validate(item) for item in items]
