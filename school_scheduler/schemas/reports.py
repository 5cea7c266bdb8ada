# school_scheduler/schemas/reports.py

from datetime import date, datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel


class ReportStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class AttendanceReportDraft(BaseModel):
    calendar_event_id: Optional[str] = None  # None = full-day absence
    event_title: Optional[str] = None
    absence_date: Optional[date] = None

    student_id: str = ""
    student_name: Optional[str] = None

    reason: str
    message: str


class AttendanceReport(BaseModel):
    id: str

    calendar_event_id: Optional[str] = None
    event_title: Optional[str] = None
    absence_date: Optional[date] = None

    student_id: str
    student_name: Optional[str] = None

    reason: str
    message: str

    status: ReportStatus = ReportStatus.pending
    created_at: datetime

    model_config = {"from_attributes": True}


class DraftMessageRequest(BaseModel):
    reason: str
    subject_title: Optional[str] = None  # None = full day (all classes)
    date_label: str


class DraftMessageResponse(BaseModel):
    message: str


class AbsenceNoticeResponse(BaseModel):
    report: AttendanceReport
    notice: str
