# school_scheduler/services/attendance.py
"""
Absence reports: a sibling ledger of the booking ledger.

Status is stored as submitted (pending); nothing here approves or
rejects a report.
"""

import logging

from ..clock import Clock
from ..schemas.reports import AttendanceReport, AttendanceReportDraft, ReportStatus
from .identity import Identity
from .kv_store import REPORTS_KEY, KeyValueStore, writer_lock

logger = logging.getLogger(__name__)

FULL_DAY_LABEL = "終日"


class AttendanceLedger:

    def __init__(self, store: KeyValueStore, clock: Clock):
        self.store = store
        self.clock = clock
        self._lock = writer_lock(store)

    async def list_reports(self) -> list[AttendanceReport]:
        """Newest first (stored that way, new reports are prepended)."""
        raw = await self.store.get(REPORTS_KEY)
        return [AttendanceReport.model_validate(item) for item in (raw or [])]

    async def submit_report(
        self,
        draft: AttendanceReportDraft,
        identity: Identity | None = None,
    ) -> AttendanceReport:
        """
        Store a report with status=pending.

        Student fields left blank on the draft are filled from `identity`.
        """
        fields = draft.model_dump()
        if identity is not None:
            if not fields.get("student_id"):
                fields["student_id"] = identity.user_id
            if not fields.get("student_name"):
                fields["student_name"] = identity.display_name

        async with self._lock:
            reports = await self.list_reports()
            now = self.clock.now()
            report = AttendanceReport(
                id=str(int(now.timestamp() * 1000)),
                status=ReportStatus.pending,
                created_at=now,
                **fields,
            )
            if any(r.id == report.id for r in reports):
                report.id = f"{report.id}-{len(reports)}"

            await self.store.set(
                REPORTS_KEY,
                [r.model_dump(mode="json") for r in [report, *reports]],
            )
        logger.info("Attendance report %s stored (%s)", report.id, report.reason)
        return report


def compose_absence_notice(report: AttendanceReport, date_label: str) -> str:
    """
    Final text a parent sends to the teacher.

    A report tied to a class names the class; otherwise it is a full-day
    absence for `date_label`.
    """
    if report.calendar_event_id and report.event_title:
        subject = f"【授業名】{report.event_title}"
    else:
        subject = f"【欠席日】{date_label} ({FULL_DAY_LABEL})"

    return (
        "[欠席連絡]\n"
        f"{subject}\n"
        f"【日付】{date_label}\n"
        f"【理由】{report.reason}\n"
        "\n"
        f"{report.message}\n"
        "\n"
        "よろしくお願いいたします。"
    )
