# school_scheduler/main.py

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from .config import settings
from .dependencies import get_store
from .errors import (
    EventNotFoundError,
    InvalidSlotError,
    SlotAlreadyBookedError,
    StoreUnavailableError,
)
from .routers import bookings, events, reports, slots
from .services.kv_store import EVENTS_KEY, KeyValueStore

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="School Scheduler API")

app.include_router(slots.router)
app.include_router(bookings.router)
app.include_router(events.router)
app.include_router(reports.router)


# ===== Error mapping =====

@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    logger.error(f"Store unavailable on {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Service temporarily unavailable"})


@app.exception_handler(InvalidSlotError)
async def invalid_slot_handler(request: Request, exc: InvalidSlotError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(SlotAlreadyBookedError)
async def slot_booked_handler(request: Request, exc: SlotAlreadyBookedError):
    return JSONResponse(status_code=409, content={"detail": "Slot already booked"})


@app.exception_handler(EventNotFoundError)
async def event_not_found_handler(request: Request, exc: EventNotFoundError):
    return JSONResponse(status_code=404, content={"detail": "Not found"})


@app.get("/health")
async def health(store: KeyValueStore = Depends(get_store)):
    # Store errors surface as 503 through the handler above.
    await store.get(EVENTS_KEY)
    return {"store": True}
