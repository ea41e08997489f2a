from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import os

from inventory.adapters.primary.api.router import router as item_router
from inventory.adapters.primary.websocket.item_websocket import router as ws_router
from inventory.adapters.secondary.database.database import InventoryDatabase
from inventory.application.view_model import create_view_model
from inventory.core.locale_config import setup_locale
from inventory.core.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    setup_locale()
    database = InventoryDatabase.get_database()
    app.state.view_model = create_view_model(database.item_dao())
    yield
    app.state.view_model.close()

app = FastAPI(title="Inventory Tracker", lifespan=lifespan)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(item_router, prefix="/api/v1")
app.include_router(ws_router)

@app.get("/health")
def health_check():
    return {"status": "ok"}
