"""FastAPI route definitions."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from worldclock.core.conversion import ConversionRequestHandler
from worldclock.core.errors import InvalidDateError, InvalidZoneError
from worldclock.core.schemas import (
    ClockView,
    ConversionResult,
    Location,
    PinnedClock,
    ThemeState,
    ThemeUpdate,
    TimezoneMatch,
)
from worldclock.core.state import BoardState, get_board_state
from worldclock.core.time_utils import Disambiguation
from worldclock.core.zones import validate_zone_id

router = APIRouter()

WHEREAMI = Location(country="Kenya", city="Nairobi", timezone="Africa/Nairobi")

TIMEZONES = [
    TimezoneMatch(city="Nairobi", timezone="Africa/Nairobi"),
    TimezoneMatch(city="Kigali", timezone="Africa/Kigali"),
    TimezoneMatch(city="Kigoma", timezone="Africa/Dar_es_Salaam"),
]


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "Server is running"


@router.get("/api/whereami", response_model=Location)
async def where_am_i() -> Location:
    """Static location guess. Not geolocation."""
    return WHEREAMI


@router.get("/api/timezones", response_model=List[TimezoneMatch])
async def lookup_timezones(q: str = "") -> List[TimezoneMatch]:
    """Stub zones whose city starts with `q` (case-insensitive)."""
    query = q.lower()
    return [tz for tz in TIMEZONES if tz.city.lower().startswith(query)]


@router.get("/api/zones", response_model=List[str])
async def search_zones(
    q: str = "",
    state: BoardState = Depends(get_board_state),
) -> List[str]:
    """Catalog zones whose id or friendly name contains `q`."""
    catalog = await state.ensure_catalog()
    return catalog.search(q)


@router.get("/api/clocks", response_model=List[ClockView])
async def list_clocks(state: BoardState = Depends(get_board_state)) -> List[ClockView]:
    """Current time and day label of every pinned clock."""
    return state.registry.tick()


@router.post("/api/clocks")
async def add_clock(
    clock: PinnedClock,
    state: BoardState = Depends(get_board_state),
):
    """
    Pin a zone to the board.

    The zone must be a well-formed IANA id present in the zone catalog.
    Pinning a zone twice is not an error.
    """
    try:
        validate_zone_id(clock.zone)
    except InvalidZoneError as e:
        raise HTTPException(status_code=400, detail=str(e))

    catalog = await state.ensure_catalog()
    if clock.zone not in catalog:
        raise HTTPException(status_code=400, detail=f"Unknown time zone: {clock.zone}")

    added = state.registry.add(clock.zone)

    return {"added": added, "zones": list(state.registry.zones)}


@router.delete("/api/clocks/{zone:path}")
async def remove_clock(zone: str, state: BoardState = Depends(get_board_state)):
    """Unpin a zone. Removing a zone that is not pinned is not an error."""
    removed = state.registry.remove(zone)
    return {"removed": removed, "zones": list(state.registry.zones)}


@router.get("/api/theme", response_model=ThemeState)
async def get_theme(state: BoardState = Depends(get_board_state)) -> ThemeState:
    return ThemeState(theme=state.theme.theme)


@router.post("/api/theme", response_model=ThemeState)
async def update_theme(
    update: Optional[ThemeUpdate] = None,
    state: BoardState = Depends(get_board_state),
) -> ThemeState:
    """Set the theme, or toggle it when no theme is given."""
    if update is None or update.theme is None:
        theme = state.theme.toggle()
    else:
        theme = state.theme.set(update.theme)
    return ThemeState(theme=theme)


@router.get("/api/convert", response_model=ConversionResult)
async def convert_time(
    date: Optional[str] = None,
    time: Optional[str] = None,
    from_zone: Optional[str] = None,
    to_zone: Optional[str] = None,
    disambiguation: Disambiguation = Disambiguation.EARLIER,
) -> ConversionResult:
    """
    Convert a wall-clock time from one zone to another.

    Args:
        date: YYYY-MM-DD
        time: HH:MM
        from_zone: IANA zone the reading was taken in
        to_zone: IANA zone to render it in
        disambiguation: earlier, later or raise, for wall times a DST change
            skips or repeats

    Returns:
        ConversionResult with the instant and its rendering in to_zone
    """
    handler = ConversionRequestHandler()

    try:
        result = handler.convert(date, time, from_zone, to_zone, disambiguation)
    except (InvalidZoneError, InvalidDateError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    if result is None:
        raise HTTPException(status_code=422, detail="form incomplete")
    return result


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        Simple status message
    """
    return {
        "status": "healthy",
        "service": "worldclock",
        "version": "0.1.0",
    }
