"""Tests for the in-memory response cache."""

from postnl.adapters.response_cache import MemoryResponseCache, dump_response, load_response
from support import json_response, xml_response


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestMemoryResponseCache:
    def test_get_and_set(self):
        cache = MemoryResponseCache()
        assert cache.get("missing") is None
        cache.set("a", "blob")
        assert cache.get("a") == "blob"
        assert len(cache) == 1

    def test_deferred_writes_wait_for_commit(self):
        cache = MemoryResponseCache()
        cache.save_deferred("a", "blob-a")
        cache.save_deferred("b", "blob-b")
        assert cache.get("a") is None
        cache.commit()
        assert cache.get("a") == "blob-a"
        assert cache.get("b") == "blob-b"

    def test_commit_twice_is_harmless(self):
        cache = MemoryResponseCache()
        cache.save_deferred("a", "blob")
        cache.commit()
        cache.commit()
        assert len(cache) == 1

    def test_entries_expire(self):
        clock = FakeClock()
        cache = MemoryResponseCache(ttl_seconds=10, timer=clock)
        cache.set("a", "blob")
        clock.now = 9
        assert cache.get("a") == "blob"
        clock.now = 11
        assert cache.get("a") is None

    def test_size_is_bounded(self):
        cache = MemoryResponseCache(max_items=2)
        for key in ("a", "b", "c"):
            cache.set(key, key)
        assert len(cache) == 2


class TestResponseBlobs:
    def test_json_response(self):
        restored = load_response(dump_response(json_response({"Barcode": "3S1"}, status=200)))
        assert restored.status_code == 200
        assert restored.json() == {"Barcode": "3S1"}

    def test_xml_response_keeps_headers(self):
        restored = load_response(dump_response(xml_response("<a>é</a>")))
        assert restored.text == "<a>é</a>"
        assert restored.headers["Content-Type"].startswith("text/xml")

    def test_unreadable_blob_is_a_miss(self):
        assert load_response(None) is None
        assert load_response("") is None
        assert load_response("{not json") is None
        assert load_response('{"body": "no status"}') is None
        assert load_response("[1, 2]") is None
