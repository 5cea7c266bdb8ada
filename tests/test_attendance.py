import asyncio
import unittest
from datetime import date, datetime, timedelta

from school_scheduler.clock import FixedClock
from school_scheduler.schemas.reports import AttendanceReportDraft, ReportStatus
from school_scheduler.services.attendance import AttendanceLedger, compose_absence_notice
from school_scheduler.services.identity import (
    ANONYMOUS_DISPLAY_NAME,
    ANONYMOUS_USER_ID,
    Profile,
    resolve_identity,
)
from school_scheduler.services.kv_store import MemoryStore

from tests.helpers import YieldingStore


class IdentityTest(unittest.TestCase):
    def test_missing_profile_uses_placeholders(self):
        identity = resolve_identity(None)
        self.assertEqual(identity.user_id, "anonymous")
        self.assertEqual(identity.display_name, "匿名ユーザー")
        self.assertTrue(identity.is_anonymous)

    def test_blank_fields_use_placeholders(self):
        identity = resolve_identity(Profile(user_id="U123", display_name="  "))
        self.assertEqual(identity.user_id, "U123")
        self.assertEqual(identity.display_name, ANONYMOUS_DISPLAY_NAME)
        self.assertFalse(identity.is_anonymous)

    def test_full_profile(self):
        identity = resolve_identity(Profile(user_id="U1", display_name="山田"))
        self.assertEqual((identity.user_id, identity.display_name), ("U1", "山田"))


class AttendanceLedgerTest(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.clock = FixedClock(datetime(2026, 3, 10, 7, 30))
        self.ledger = AttendanceLedger(MemoryStore(), self.clock)

    async def test_empty(self):
        self.assertEqual(await self.ledger.list_reports(), [])

    async def test_submit_fills_identity_and_prepends(self):
        first = await self.ledger.submit_report(
            AttendanceReportDraft(reason="体調不良", message="発熱のため"),
            resolve_identity(None),
        )
        self.clock.advance(timedelta(minutes=1))
        second = await self.ledger.submit_report(
            AttendanceReportDraft(
                calendar_event_id="tue-1-5",
                event_title="探究アドバンス",
                student_id="U9",
                student_name="佐藤",
                reason="学校行事",
                message="文化祭準備のため",
            ),
            resolve_identity(Profile(user_id="U1", display_name="山田")),
        )

        self.assertEqual(first.student_id, ANONYMOUS_USER_ID)
        self.assertEqual(first.student_name, ANONYMOUS_DISPLAY_NAME)
        self.assertEqual(first.status, ReportStatus.pending)
        # explicit draft values win over the identity
        self.assertEqual((second.student_id, second.student_name), ("U9", "佐藤"))

        reports = await self.ledger.list_reports()
        self.assertEqual([r.id for r in reports], [second.id, first.id])

    async def test_ids_unique_at_same_instant(self):
        a = await self.ledger.submit_report(AttendanceReportDraft(reason="その他", message="a"))
        b = await self.ledger.submit_report(AttendanceReportDraft(reason="その他", message="b"))
        self.assertNotEqual(a.id, b.id)

    async def test_concurrent_submits_keep_every_report(self):
        store = YieldingStore()
        ledgers = [AttendanceLedger(store, self.clock) for _ in range(2)]

        await asyncio.gather(*(
            ledger.submit_report(AttendanceReportDraft(reason="その他", message=str(i)))
            for i, ledger in enumerate(ledgers)
        ))

        reports = await AttendanceLedger(store, self.clock).list_reports()
        self.assertEqual(sorted(r.message for r in reports), ["0", "1"])


class AbsenceNoticeTest(unittest.IsolatedAsyncioTestCase):
    async def test_class_notice(self):
        ledger = AttendanceLedger(MemoryStore(), FixedClock(datetime(2026, 3, 10, 7, 30)))
        report = await ledger.submit_report(AttendanceReportDraft(
            calendar_event_id="tue-1-5",
            event_title="探究アドバンス",
            reason="体調不良",
            message="本日は欠席いたします。",
        ))

        notice = compose_absence_notice(report, "3月10日(火)")

        self.assertTrue(notice.startswith("[欠席連絡]\n【授業名】探究アドバンス\n"))
        self.assertIn("【日付】3月10日(火)", notice)
        self.assertIn("【理由】体調不良", notice)
        self.assertIn("\n\n本日は欠席いたします。\n\n", notice)
        self.assertTrue(notice.endswith("よろしくお願いいたします。"))

    async def test_full_day_notice(self):
        ledger = AttendanceLedger(MemoryStore(), FixedClock(datetime(2026, 3, 10, 7, 30)))
        report = await ledger.submit_report(AttendanceReportDraft(
            absence_date=date(2026, 3, 11),
            reason="家庭の用事",
            message="終日欠席します。",
        ))

        notice = compose_absence_notice(report, "3月11日(水)")

        self.assertIn("【欠席日】3月11日(水) (終日)", notice)
        self.assertNotIn("【授業名】", notice)


if __name__ == "__main__":
    unittest.main()
