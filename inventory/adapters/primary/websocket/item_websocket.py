"""
WebSocket endpoints that push the live item streams to clients.

Messages:
    {"action": "items", "data": [ {item}, ... ]}   on /ws/items
    {"action": "item", "data": {item}}             on /ws/items/{item_id}

A client gets the current state right after connecting and a new message on
every change. Nothing is expected from the client.
"""

import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from inventory.adapters.primary.api.schemas import ItemResponse
from inventory.core.live_query import LiveQuery
from .manager import manager

logger = logging.getLogger(__name__)

router = APIRouter()


async def _pump(websocket: WebSocket, channel: str, live_query: LiveQuery, render):
    async for value in live_query:
        if not await manager.send_message(websocket, channel, render(value)):
            return


async def _serve(websocket: WebSocket, channel: str, live_query: LiveQuery, render):
    await manager.connect(websocket, channel)
    pump = asyncio.create_task(_pump(websocket, channel, live_query, render))
    try:
        # incoming text and binary frames are ignored
        while True:
            receive = asyncio.create_task(websocket.receive())
            done, _ = await asyncio.wait({receive, pump}, return_when=asyncio.FIRST_COMPLETED)
            if pump in done:
                receive.cancel()
                pump.result()
                break
            if receive.result()["type"] == "websocket.disconnect":
                break
    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error("Error on WebSocket channel %s: %s", channel, e)
        await websocket.close(code=1011, reason="Internal server error")
    finally:
        pump.cancel()
        manager.disconnect(websocket, channel)


@router.websocket("/ws/items")
async def items_websocket_endpoint(websocket: WebSocket):
    view_model = websocket.app.state.view_model
    await _serve(
        websocket,
        "items",
        view_model.all_items,
        lambda items: {
            "action": "items",
            "data": [ItemResponse.from_item(item).model_dump() for item in items],
        },
    )


@router.websocket("/ws/items/{item_id}")
async def item_websocket_endpoint(websocket: WebSocket, item_id: int):
    view_model = websocket.app.state.view_model
    await _serve(
        websocket,
        f"item:{item_id}",
        view_model.retrieve_item(item_id),
        lambda item: {"action": "item", "data": ItemResponse.from_item(item).model_dump()},
    )
