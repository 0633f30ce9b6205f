import unittest

from college_scorecard.cache import MAX_CACHE_KEY_LENGTH, ResponseCache, cache_key_for_url
from college_scorecard.cache_store.memory import InMemoryCacheStore


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class BrokenStore:
    def get(self, key):
        raise ConnectionError("cache down")

    def put(self, key, value, ttl_seconds):
        raise ConnectionError("cache down")

    def clear(self):
        raise ConnectionError("cache down")


class TestCacheKey(unittest.TestCase):
    def test_key_is_stable_and_alphanumeric(self):
        url = "https://api.data.gov/ed/collegescorecard/v1/schools?school.name=Yale&per_page=5"
        key = cache_key_for_url(url)
        self.assertEqual(key, cache_key_for_url(url))
        self.assertTrue(key.startswith("scorecard_"))
        self.assertTrue(key[len("scorecard_"):].isalnum())
        self.assertLessEqual(len(key), MAX_CACHE_KEY_LENGTH)

    def test_query_parameters_change_the_key(self):
        base = "https://api.data.gov/ed/collegescorecard/v1/schools?school.name="
        self.assertNotEqual(cache_key_for_url(base + "Yale"), cache_key_for_url(base + "Brown"))


class TestResponseCache(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.cache = ResponseCache(InMemoryCacheStore(clock=self.clock), ttl_seconds=600)

    def test_round_trip_then_expiry(self):
        self.cache.put("k", {"a": 1}, 600)
        self.assertEqual(self.cache.get("k"), {"a": 1})

        self.clock.now += 599
        self.assertEqual(self.cache.get("k"), {"a": 1})
        self.clock.now += 1
        self.assertIsNone(self.cache.get("k"))

    def test_default_ttl_applies(self):
        self.cache.put("k", [1, 2, 3])
        self.clock.now += 600
        self.assertIsNone(self.cache.get("k"))

    def test_overwrite_replaces_value(self):
        self.cache.put("k", {"v": 1})
        self.cache.put("k", {"v": 2})
        self.assertEqual(self.cache.get("k"), {"v": 2})

    def test_missing_key_is_none(self):
        self.assertIsNone(self.cache.get("absent"))

    def test_corrupt_entry_is_a_miss(self):
        self.cache.store.put("k", "{not json", 600)
        self.assertIsNone(self.cache.get("k"))

    def test_unserializable_value_is_dropped(self):
        self.cache.put("k", {"bad": object()})
        self.assertIsNone(self.cache.get("k"))

    def test_clear(self):
        self.cache.put("a", 1)
        self.cache.put("b", 2)
        self.assertTrue(self.cache.clear())
        self.assertIsNone(self.cache.get("a"))
        self.assertEqual(len(self.cache.store), 0)


class TestBrokenBackend(unittest.TestCase):
    def test_store_errors_never_propagate(self):
        cache = ResponseCache(BrokenStore())
        self.assertIsNone(cache.get("k"))
        cache.put("k", {"a": 1})
        self.assertFalse(cache.clear())


if __name__ == "__main__":
    unittest.main()
