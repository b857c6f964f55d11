"""REST endpoints for counter suggestions, win estimates and draft rooms."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from draft_counter.models.draft import MAX_PICKS, MIN_PICKS, ROSTER_SIZE, RoomState
from draft_counter.services.counter_store import CounterStore
from draft_counter.services.room_broadcaster import RoomBroadcaster
from draft_counter.services.room_manager import RoomManager
from draft_counter.utils.lane_normalizer import sort_by_lane

router = APIRouter(prefix="/api/draft", tags=["draft"])


class SuggestRequest(BaseModel):
    enemies: list[str] = Field(default_factory=list, max_length=ROSTER_SIZE)
    k: int = Field(MAX_PICKS, ge=MIN_PICKS, le=MAX_PICKS)
    by_lane: bool = True


class WinRateRequest(BaseModel):
    team_a: list[str] = Field(default_factory=list, max_length=ROSTER_SIZE)
    team_b: list[str] = Field(default_factory=list, max_length=ROSTER_SIZE)


class ResolveRequest(BaseModel):
    name: str


class SlotRequest(BaseModel):
    value: str = ""


class MaxPicksRequest(BaseModel):
    k: int


def _get_store(request: Request) -> CounterStore:
    return request.app.state.store


def _get_rooms(request: Request) -> RoomManager:
    return request.app.state.rooms


def _get_broadcaster(request: Request) -> Optional[RoomBroadcaster]:
    return getattr(request.app.state, "broadcaster", None)


def build_room_view(store: CounterStore, state: RoomState) -> dict:
    """Room state plus suggestions against team B and the win estimate."""
    suggestions = store.suggest(state.team_b, state.k, by_lane=True)
    lane_picks = []
    for hero in sort_by_lane(suggestions.chosen, store.lanes):
        match = suggestions.counter_for(hero)
        lane_picks.append({
            "hero": hero,
            "lane": store.lanes.get(hero.lower()),
            "against": match[0] if match else None,
            "score": match[1].score if match else None,
        })
    win = store.estimate(state.team_a, state.team_b)
    return {
        "state": state.to_dict(),
        "suggestions": suggestions.to_dict(),
        "lane_picks": lane_picks,
        "win_rate": win.to_dict() if win else None,
        "all_picked": state.all_picked,
        "data": store.status(),
    }


async def _publish(request: Request, state: RoomState) -> dict:
    """Broadcast the recomputed room view and return it."""
    view = build_room_view(_get_store(request), state)
    broadcaster = _get_broadcaster(request)
    if broadcaster is not None:
        await broadcaster.broadcast(state.room, view)
    return view


@router.post("/suggest")
async def suggest(request: Request, body: SuggestRequest):
    """Suggest counter picks against an enemy roster."""
    store = _get_store(request)
    result = store.suggest(body.enemies, body.k, by_lane=body.by_lane)
    return result.to_dict()


@router.post("/win-rate")
async def win_rate(request: Request, body: WinRateRequest):
    """Estimate team A's win probability; null if either team is empty."""
    result = _get_store(request).estimate(body.team_a, body.team_b)
    return result.to_dict() if result else None


@router.post("/resolve")
async def resolve_name(request: Request, body: ResolveRequest):
    """Correct a typed hero name against the dataset vocabulary."""
    return {"input": body.name, "resolved": _get_store(request).resolve(body.name)}


@router.get("/heroes")
async def list_heroes(request: Request):
    store = _get_store(request)
    return {
        "heroes": store.dataset.heroes,
        "lanes": {hero: store.lanes.get(hero.lower()) for hero in store.dataset.heroes},
    }


@router.get("/rooms")
async def list_rooms(request: Request):
    return {"rooms": _get_rooms(request).list_rooms()}


@router.get("/rooms/{room}")
async def get_room(request: Request, room: str):
    """Current room view. Reading an unknown room does not create it."""
    state = _get_rooms(request).peek(room)
    return build_room_view(_get_store(request), state)


@router.put("/rooms/{room}/k")
async def set_max_picks(request: Request, room: str, body: MaxPicksRequest):
    state = _get_rooms(request).set_max_picks(room, body.k)
    return await _publish(request, state)


@router.post("/rooms/{room}/reset")
async def reset_room(request: Request, room: str):
    state = _get_rooms(request).reset(room)
    return await _publish(request, state)


@router.put("/rooms/{room}/{kind}/{side}/{index}")
async def set_slot(request: Request, room: str, kind: str, side: str, index: int, body: SlotRequest):
    """Write raw text into a pick or ban slot (no name correction)."""
    try:
        state = _get_rooms(request).set_slot(room, kind, side, index, body.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return await _publish(request, state)


@router.post("/rooms/{room}/{kind}/{side}/{index}/finalize")
async def finalize_slot(request: Request, room: str, kind: str, side: str, index: int):
    """Commit a slot: resolve its text to the closest known hero name."""
    store = _get_store(request)
    try:
        state, changed = _get_rooms(request).finalize_slot(room, kind, side, index, store.resolve)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not changed:
        return build_room_view(store, state)
    return await _publish(request, state)
