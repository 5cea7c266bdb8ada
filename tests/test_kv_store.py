import unittest

from redis.exceptions import ConnectionError as RedisConnectionError

from school_scheduler.errors import StoreUnavailableError
from school_scheduler.services.kv_store import MemoryStore, RedisJSONStore


class FakeRedis:
    """Async get/set over a dict, the subset RedisJSONStore uses."""

    def __init__(self):
        self.data = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value):
        self.data[key] = value


class DownRedis:
    async def get(self, key):
        raise RedisConnectionError("connection refused")

    async def set(self, key, value):
        raise RedisConnectionError("connection refused")


class RedisJSONStoreTest(unittest.IsolatedAsyncioTestCase):
    async def test_missing_key_is_none(self):
        store = RedisJSONStore(FakeRedis(), prefix="school:")
        self.assertIsNone(await store.get("interview_slots"))

    async def test_write_then_read(self):
        redis = FakeRedis()
        store = RedisJSONStore(redis, prefix="school:")

        await store.set("interview_slots", [{"time": "15:00", "title": "面談"}])

        self.assertIn("school:interview_slots", redis.data)
        self.assertIn("面談", redis.data["school:interview_slots"])
        self.assertEqual(await store.get("interview_slots"), [{"time": "15:00", "title": "面談"}])

    async def test_bytes_payload(self):
        redis = FakeRedis()
        redis.data["calendar_events"] = b"[]"
        self.assertEqual(await RedisJSONStore(redis).get("calendar_events"), [])

    async def test_corrupt_payload(self):
        redis = FakeRedis()
        redis.data["calendar_events"] = "{not json"
        with self.assertRaises(StoreUnavailableError):
            await RedisJSONStore(redis).get("calendar_events")

    async def test_redis_errors_are_wrapped(self):
        store = RedisJSONStore(DownRedis())
        with self.assertRaises(StoreUnavailableError):
            await store.get("interview_bookings")
        with self.assertRaises(StoreUnavailableError):
            await store.set("interview_bookings", [])


class MemoryStoreTest(unittest.IsolatedAsyncioTestCase):
    async def test_values_are_copied(self):
        store = MemoryStore()
        value = [{"id": "a"}]
        await store.set("k", value)
        value.append({"id": "b"})

        loaded = await store.get("k")
        loaded.append({"id": "c"})

        self.assertEqual(await store.get("k"), [{"id": "a"}])
        self.assertEqual(store.keys(), ["k"])

    async def test_initial_data(self):
        store = MemoryStore({"calendar_events": []})
        self.assertEqual(await store.get("calendar_events"), [])
        self.assertIsNone(await store.get("interview_slots"))


if __name__ == "__main__":
    unittest.main()
