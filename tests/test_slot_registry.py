import unittest
from datetime import date

from school_scheduler.errors import InvalidSlotError
from school_scheduler.services.kv_store import SLOTS_KEY, MemoryStore
from school_scheduler.services.slots import SlotGridConfig, SlotRegistry


class SlotGridConfigTest(unittest.TestCase):
    def test_default_grid(self):
        config = SlotGridConfig()
        self.assertEqual(config.times[0], "11:00")
        self.assertEqual(config.times[-1], "20:30")
        self.assertEqual(len(config.times), 20)
        self.assertTrue(config.is_valid_time("15:30"))
        self.assertFalse(config.is_valid_time("15:15"))
        self.assertFalse(config.is_valid_time("21:00"))

    def test_rejects_bad_step(self):
        with self.assertRaises(ValueError):
            SlotGridConfig(slot_step_minutes=20)

    def test_rejects_inverted_range(self):
        with self.assertRaises(ValueError):
            SlotGridConfig(first_slot="18:00", last_slot="11:00")


class SlotRegistryTest(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.store = MemoryStore()
        self.registry = SlotRegistry(self.store)

    async def test_toggle_creates_open_slot(self):
        slots = await self.registry.toggle_slot("2026-03-10", "15:00")
        self.assertEqual(len(slots), 1)
        self.assertEqual(slots[0].date, date(2026, 3, 10))
        self.assertEqual(slots[0].time, "15:00")
        self.assertFalse(slots[0].is_booked)
        self.assertIsNone(slots[0].booking_id)
        self.assertEqual(len(await self.registry.list_slots()), 1)

    async def test_toggle_twice_restores_original_state(self):
        await self.registry.toggle_slot("2026-03-11", "11:00")
        before = await self.store.get(SLOTS_KEY)

        await self.registry.toggle_slot("2026-03-10", "15:00")
        slots = await self.registry.toggle_slot("2026-03-10", "15:00")

        self.assertEqual([s.model_dump(mode="json") for s in slots], before)
        self.assertEqual(await self.store.get(SLOTS_KEY), before)

    async def test_toggle_on_booked_slot_is_noop(self):
        await self.registry.toggle_slot("2026-03-10", "15:00")
        await self.registry.bind(date(2026, 3, 10), "15:00", "b-1")
        before = await self.store.get(SLOTS_KEY)

        slots = await self.registry.toggle_slot("2026-03-10", "15:00")

        self.assertEqual(len(slots), 1)
        self.assertTrue(slots[0].is_booked)
        self.assertEqual(slots[0].booking_id, "b-1")
        self.assertEqual(await self.store.get(SLOTS_KEY), before)

    async def test_toggle_rejects_off_grid_time(self):
        with self.assertRaises(InvalidSlotError):
            await self.registry.toggle_slot("2026-03-10", "15:10")
        self.assertIsNone(await self.store.get(SLOTS_KEY))

    async def test_toggle_rejects_bad_date(self):
        with self.assertRaises(InvalidSlotError):
            await self.registry.toggle_slot("2026-13-40", "15:00")

    async def test_bind_missing_slot_writes_nothing(self):
        self.assertIsNone(await self.registry.bind(date(2026, 3, 10), "15:00", "b-1"))
        self.assertIsNone(await self.store.get(SLOTS_KEY))

    async def test_release_clears_only_matching_slots(self):
        await self.registry.toggle_slot("2026-03-10", "15:00")
        await self.registry.toggle_slot("2026-03-10", "16:00")
        await self.registry.bind(date(2026, 3, 10), "15:00", "b-1")
        await self.registry.bind(date(2026, 3, 10), "16:00", "b-2")

        released = await self.registry.release("b-1")

        self.assertEqual([s.time for s in released], ["15:00"])
        by_time = {s.time: s for s in await self.registry.list_slots()}
        self.assertFalse(by_time["15:00"].is_booked)
        self.assertIsNone(by_time["15:00"].booking_id)
        self.assertTrue(by_time["16:00"].is_booked)

    async def test_release_unknown_booking(self):
        await self.registry.toggle_slot("2026-03-10", "15:00")
        self.assertEqual(await self.registry.release("nope"), [])


if __name__ == "__main__":
    unittest.main()
