"""
WebSocket client that prints the live item list.

Usage:
    python watch_items_client.py              # whole inventory
    python watch_items_client.py <item_id>    # a single item

Example:
    python watch_items_client.py 3
"""

import asyncio
import json
import os
import sys
import websockets


BASE_URI = os.getenv("INVENTORY_WS_URI", "ws://localhost:8000")


def print_item(item: dict):
    print(f"  #{item['id']:<4} {item['name']:<30} {item['formatted_price']:>12}  x{item['quantity_in_stock']}")


async def watch(path: str):
    """
    Connects to the stream at ``path`` and prints every update until interrupted.

    Args:
        path: Either /ws/items or /ws/items/<item_id>
    """
    uri = f"{BASE_URI}{path}"
    print(f"Connecting to {uri}")

    try:
        async with websockets.connect(uri) as websocket:
            print("Connected, waiting for updates (Ctrl+C to quit)\n")
            async for response in websocket:
                data = json.loads(response)
                if data.get("action") == "items":
                    print(f"{len(data['data'])} items:")
                    for item in data["data"]:
                        print_item(item)
                elif data.get("action") == "item":
                    print_item(data["data"])
                print()

    except websockets.exceptions.ConnectionClosed as e:
        print(f"Connection closed: {e}")


def main():
    if len(sys.argv) > 2:
        print("Usage: python watch_items_client.py [item_id]")
        sys.exit(1)

    path = f"/ws/items/{int(sys.argv[1])}" if len(sys.argv) == 2 else "/ws/items"
    try:
        asyncio.run(watch(path))
    except KeyboardInterrupt:
        print("\nDisconnected")


if __name__ == "__main__":
    main()
