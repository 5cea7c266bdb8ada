# school_scheduler/routers/bookings.py

from fastapi import APIRouter, Depends, status

from ..dependencies import get_identity, get_scheduler
from ..schemas.bookings import Booking, BookingDraft, BookingStatusUpdate
from ..services.identity import Identity
from ..services.scheduler import SchedulerCore

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("/", response_model=list[Booking])
async def list_bookings(scheduler: SchedulerCore = Depends(get_scheduler)):
    return await scheduler.list_bookings()


@router.post("/", response_model=Booking, status_code=status.HTTP_201_CREATED)
async def create_booking(
    data: BookingDraft,
    scheduler: SchedulerCore = Depends(get_scheduler),
    identity: Identity = Depends(get_identity),
):
    if not data.parent_name and not identity.is_anonymous:
        data = data.model_copy(update={"parent_name": identity.display_name})
    return await scheduler.submit_booking(data)


@router.post("/{id}/cancel", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_booking(id: str, scheduler: SchedulerCore = Depends(get_scheduler)):
    await scheduler.cancel_booking(id)


@router.patch("/{id}/status", response_model=list[Booking])
async def set_booking_status(
    id: str,
    data: BookingStatusUpdate,
    scheduler: SchedulerCore = Depends(get_scheduler),
):
    return await scheduler.set_booking_status(id, data.status)
