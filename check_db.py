import asyncio

from inventory.adapters.secondary.database.database import InventoryDatabase
from inventory.core.locale_config import setup_locale
from inventory.core.logging_config import setup_logging


async def check_db():
    database = InventoryDatabase.get_database()
    items = await database.item_dao().get_items().snapshot()
    print(f"Found {len(items)} items in {database.url}.")
    for item in items[:5]: # Show first 5
        print(f"ID: {item.id}, Name: {item.name}, Price: {item.formatted_price()}, Quantity: {item.quantity_in_stock}")

if __name__ == "__main__":
    setup_logging()
    setup_locale()
    asyncio.run(check_db())
