# school_scheduler/routers/reports.py
"""
Absence report endpoints.

POST /reports/draft-message never fails: drafting falls back to a fixed
message when the model is unavailable.
"""

from fastapi import APIRouter, Depends, status

from ..dependencies import get_attendance, get_catalog, get_drafter, get_identity
from ..schemas.reports import (
    AbsenceNoticeResponse,
    AttendanceReport,
    AttendanceReportDraft,
    DraftMessageRequest,
    DraftMessageResponse,
)
from ..services.attendance import AttendanceLedger, compose_absence_notice
from ..services.catalog import EventCatalog
from ..services.drafting import MessageDrafter
from ..services.identity import Identity

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/", response_model=list[AttendanceReport])
async def list_reports(attendance: AttendanceLedger = Depends(get_attendance)):
    return await attendance.list_reports()


@router.post("/", response_model=AbsenceNoticeResponse, status_code=status.HTTP_201_CREATED)
async def submit_report(
    data: AttendanceReportDraft,
    date_label: str = "",
    attendance: AttendanceLedger = Depends(get_attendance),
    catalog: EventCatalog = Depends(get_catalog),
    identity: Identity = Depends(get_identity),
):
    event_date = data.absence_date
    if data.calendar_event_id:
        # A class absence is dated by the class itself.
        event = await catalog.find_event(data.calendar_event_id)
        if event is not None:
            event_date = event.start_at.date()
            if not data.event_title:
                data = data.model_copy(update={"event_title": event.title})

    report = await attendance.submit_report(data, identity)
    label = date_label or (event_date.isoformat() if event_date else "")
    return AbsenceNoticeResponse(
        report=report,
        notice=compose_absence_notice(report, label),
    )


@router.post("/draft-message", response_model=DraftMessageResponse)
async def draft_message(
    data: DraftMessageRequest,
    drafter: MessageDrafter = Depends(get_drafter),
):
    message = await drafter.draft(data.reason, data.subject_title, data.date_label)
    return DraftMessageResponse(message=message)
