# school_scheduler/routers/events.py

from fastapi import APIRouter, Depends, status

from ..clock import Clock
from ..dependencies import get_catalog, get_clock
from ..schemas.events import CalendarEvent, CalendarEventCreate, EventCancelRequest
from ..services.catalog import EventCatalog

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/", response_model=list[CalendarEvent])
async def list_events(catalog: EventCatalog = Depends(get_catalog)):
    return await catalog.list_events()


@router.get("/today", response_model=list[CalendarEvent])
async def list_today_events(
    catalog: EventCatalog = Depends(get_catalog),
    clock: Clock = Depends(get_clock),
):
    return await catalog.events_on(clock.today())


@router.post("/", response_model=list[CalendarEvent], status_code=status.HTTP_201_CREATED)
async def add_event(data: CalendarEventCreate, catalog: EventCatalog = Depends(get_catalog)):
    return await catalog.add_event(data)


@router.delete("/{id}", response_model=list[CalendarEvent])
async def remove_event(id: str, catalog: EventCatalog = Depends(get_catalog)):
    return await catalog.remove_event(id)


@router.post("/{id}/cancel", response_model=CalendarEvent)
async def cancel_event(
    id: str,
    data: EventCancelRequest,
    catalog: EventCatalog = Depends(get_catalog),
):
    """Mark a class as cancelled; absence reports for it are unnecessary."""
    return await catalog.cancel_event(id, data.reason)
