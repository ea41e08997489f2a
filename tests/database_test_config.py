"""
In-memory SQLite database for tests.
Reuses the production InventoryDatabase; the engine keeps one shared connection (StaticPool).
"""

import asyncio
from typing import Callable, List

from inventory.adapters.secondary.database.database import InventoryDatabase
from inventory.adapters.secondary.database.orm import ItemModel
from inventory.core.domain.models import Item
from inventory.core.live_query import LiveQuery


TEST_DATABASE_URL = "sqlite:///:memory:"


def create_test_database() -> InventoryDatabase:
    """Fresh, empty database with the item schema at the current version"""
    return InventoryDatabase(TEST_DATABASE_URL, echo=False)


def add_items(database: InventoryDatabase, *rows) -> List[Item]:
    """
    Writes (name, price, quantity) rows straight through a session.
    Bypasses the store, so no live query is notified.
    """
    items = []
    with database.session() as db:
        for name, price, quantity in rows:
            db_item = ItemModel(name=name, price=price, quantity_in_stock=quantity)
            db.add(db_item)
            db.flush()
            items.append(Item.model_validate(db_item))
    return items


async def next_matching(live_query: LiveQuery, predicate: Callable, timeout: float = 2.0):
    """First emission of ``live_query`` that satisfies ``predicate``"""
    stream = live_query.__aiter__()

    async def _wait():
        async for value in stream:
            if predicate(value):
                return value

    try:
        return await asyncio.wait_for(_wait(), timeout)
    finally:
        await stream.aclose()
