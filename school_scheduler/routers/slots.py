# school_scheduler/routers/slots.py
"""
Interview slot endpoints.

Staff: POST /slots/toggle, GET /slots/dates
Parents: GET /slots/open-dates, GET /slots/times
"""

from datetime import date
from fastapi import APIRouter, Depends, Query

from ..clock import Clock
from ..dependencies import get_clock, get_scheduler
from ..schemas.slots import Slot, SlotDatesResponse, SlotTimesResponse, SlotToggleRequest
from ..services.scheduler import SchedulerCore

router = APIRouter(prefix="/slots", tags=["slots"])


@router.get("/", response_model=list[Slot])
async def list_slots(scheduler: SchedulerCore = Depends(get_scheduler)):
    return await scheduler.list_slots()


@router.post("/toggle", response_model=list[Slot])
async def toggle_slot(
    data: SlotToggleRequest,
    scheduler: SchedulerCore = Depends(get_scheduler),
):
    """Open a slot, close an open one, or leave a booked one alone."""
    return await scheduler.toggle_slot(data.date, data.time)


@router.get("/open-dates", response_model=SlotDatesResponse)
async def get_open_dates(
    include_past: bool = False,
    scheduler: SchedulerCore = Depends(get_scheduler),
    clock: Clock = Depends(get_clock),
):
    """Dates a parent can pick (at least one unbooked slot)."""
    not_before = None if include_past else clock.today()
    dates = await scheduler.open_dates(not_before=not_before)
    return SlotDatesResponse(dates=sorted(dates))


@router.get("/dates", response_model=SlotDatesResponse)
async def get_slot_dates(scheduler: SchedulerCore = Depends(get_scheduler)):
    """Dates with any slot, for the staff calendar."""
    return SlotDatesResponse(dates=sorted(await scheduler.any_slot_dates()))


@router.get("/times", response_model=SlotTimesResponse)
async def get_open_times(
    target_date: date = Query(..., alias="date"),
    scheduler: SchedulerCore = Depends(get_scheduler),
):
    return SlotTimesResponse(
        date=target_date,
        times=await scheduler.times_for_date(target_date),
    )
