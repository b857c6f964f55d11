"""REST endpoints for counter data status, refresh and live harvesting."""

import logging

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from draft_counter.config import settings
from draft_counter.services.counter_store import CounterStore
from draft_counter.services.live_counters import LiveCounterClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["counters"])


def _get_store(request: Request) -> CounterStore:
    return request.app.state.store


def _get_live_client(request: Request) -> LiveCounterClient:
    """Get or create the live counter client from app state."""
    if not hasattr(request.app.state, "live_client"):
        request.app.state.live_client = LiveCounterClient(
            settings.live_counters_url, timeout=settings.http_timeout
        )
    return request.app.state.live_client


@router.get("/counters/status")
async def counters_status(request: Request):
    return _get_store(request).status()


@router.post("/counters/refresh")
async def refresh_counters(request: Request):
    """Reload the counter and lane tables from their configured sources."""
    return await _get_store(request).refresh(
        request.app.state.loader,
        settings.counters_source,
        settings.lanes_source,
    )


@router.get("/live-counters")
async def live_counters(request: Request):
    """Harvest counter pairs from the public ranking page (best effort)."""
    try:
        rows = await _get_live_client(request).fetch_counters()
    except httpx.HTTPError as e:
        logger.error(f"Live counter fetch failed: {e}")
        return JSONResponse(status_code=500, content={"ok": False, "error": str(e)})
    return {"ok": True, "rows": [row.to_dict() for row in rows]}


@router.post("/live-counters/apply")
async def apply_live_counters(request: Request):
    """Harvest live counter pairs and load them as the current dataset."""
    try:
        rows = await _get_live_client(request).fetch_counters()
    except httpx.HTTPError as e:
        logger.error(f"Live counter fetch failed: {e}")
        return JSONResponse(status_code=500, content={"ok": False, "error": str(e)})
    loaded = _get_store(request).load_counter_rows(rows)
    return {"ok": True, "rows_loaded": loaded, **_get_store(request).status()}
