"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from draft_counter.config import settings
from draft_counter.api.routes.counters import router as counters_router
from draft_counter.api.routes.draft import router as draft_router
from draft_counter.api.websockets.room_ws import room_websocket
from draft_counter.services.counter_store import CounterStore
from draft_counter.services.data_loader import TableLoader
from draft_counter.services.room_broadcaster import create_broadcaster
from draft_counter.services.room_manager import RoomManager
from draft_counter.services.win_estimator import WinEstimator

logger = logging.getLogger(__name__)

# Relative data sources resolve from the repo root
REPO_ROOT = Path(__file__).parent.parent.parent


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    if not hasattr(app.state, "loader"):
        app.state.loader = TableLoader(base_dir=REPO_ROOT, timeout=settings.http_timeout)
    if not hasattr(app.state, "store"):
        app.state.store = CounterStore(
            WinEstimator(
                slope=settings.win_slope,
                midpoint=settings.win_midpoint,
                display_min=settings.win_display_min,
                display_max=settings.win_display_max,
            )
        )
        await app.state.store.refresh(
            app.state.loader, settings.counters_source, settings.lanes_source
        )
    if not hasattr(app.state, "rooms"):
        app.state.rooms = RoomManager(
            default_max_picks=settings.default_max_picks, max_rooms=settings.max_rooms
        )
    if not hasattr(app.state, "broadcaster"):
        app.state.broadcaster = create_broadcaster(settings.sync_enabled)
    yield
    # Shutdown: close the live counter client if one was opened
    live_client = getattr(app.state, "live_client", None)
    if live_client is not None:
        await live_client.close()


app = FastAPI(
    title="Draft Counter",
    description="Hero draft assistant - counter suggestions and win estimates",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "draft-counter"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Draft Counter API",
        "version": "0.1.0",
        "docs": "/docs",
        "default_room": settings.default_room,
    }


# Register routers
app.include_router(draft_router)
app.include_router(counters_router)


# WebSocket endpoint for live room sync
@app.websocket("/ws/rooms/{room}")
async def websocket_room(websocket: WebSocket, room: str):
    """WebSocket endpoint for draft room sync."""
    await room_websocket(
        websocket,
        room,
        app.state.rooms,
        app.state.store,
        app.state.broadcaster,
    )


def run():
    """Run the API with uvicorn."""
    import uvicorn

    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
    uvicorn.run("draft_counter.main:app", host=settings.host, port=settings.port, reload=settings.debug)
