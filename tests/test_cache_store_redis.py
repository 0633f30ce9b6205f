import unittest

from college_scorecard.cache import ResponseCache
from college_scorecard.cache_store.redis import RedisCacheStore


class FakeRedis:
    def __init__(self):
        self.store = {}
        self.expires = {}

    def setex(self, key, ttl, value):
        self.store[key] = value
        self.expires[key] = ttl

    def get(self, key):
        return self.store.get(key)

    def delete(self, key):
        self.store.pop(key, None)
        self.expires.pop(key, None)

    def scan_iter(self, pattern):
        prefix = pattern.rstrip("*")
        return [k for k in list(self.store.keys()) if k.startswith(prefix)]


class FailingRedis(FakeRedis):
    def get(self, key):
        raise ConnectionError("redis down")

    def setex(self, key, ttl, value):
        raise ConnectionError("redis down")


class TestRedisCacheStore(unittest.TestCase):
    def test_put_uses_setex_with_prefix_and_ttl(self):
        client = FakeRedis()
        store = RedisCacheStore(client, prefix="t:")
        store.put("abc", '{"a": 1}', 600)
        self.assertEqual(client.store["t:abc"], b'{"a": 1}')
        self.assertEqual(client.expires["t:abc"], 600)
        self.assertEqual(store.get("abc"), '{"a": 1}')

    def test_missing_key_returns_none(self):
        store = RedisCacheStore(FakeRedis())
        self.assertIsNone(store.get("nope"))

    def test_clear_only_touches_prefix(self):
        client = FakeRedis()
        client.store["other:key"] = b"x"
        store = RedisCacheStore(client, prefix="t:")
        store.put("a", "1", 10)
        store.put("b", "2", 10)
        store.clear()
        self.assertEqual(list(client.store), ["other:key"])

    def test_response_cache_absorbs_redis_failures(self):
        cache = ResponseCache(RedisCacheStore(FailingRedis()))
        cache.put("k", {"a": 1})
        self.assertIsNone(cache.get("k"))


if __name__ == "__main__":
    unittest.main()
