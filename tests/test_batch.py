"""Tests for batch dispatch and the httpx transport."""

import httpx
import pytest

from postnl.adapters.http_client import HttpxClient
from postnl.adapters.response_cache import MemoryResponseCache, dump_response
from postnl.core.errors import HttpClientError
from postnl.core.services.batch import dispatch_batch
from support import Recorder, json_response


class FakeHttpClient:
    """HttpClient double: answers from a dict and counts what it was asked."""

    def __init__(self, outcomes):
        self.outcomes = outcomes
        self.batches = []

    def execute(self, request):
        raise AssertionError("batches never use execute")

    def execute_all(self, requests):
        self.batches.append(list(requests))
        return {key: self.outcomes[key] for key in requests}


class CountingCache(MemoryResponseCache):
    def __init__(self):
        super().__init__(ttl_seconds=300)
        self.commits = 0

    def commit(self):
        self.commits += 1
        super().commit()


def _request(path):
    return httpx.Request("GET", f"https://api-sandbox.postnl.nl/{path}")


class TestDispatchBatch:
    def test_transport_failure_is_isolated(self):
        failure = HttpClientError("connection reset")
        client = FakeHttpClient(
            {
                "a": json_response({"Barcode": "A"}),
                "b": failure,
                "c": json_response({"Barcode": "C"}),
            }
        )
        results = dispatch_batch({k: _request(k) for k in "abc"}, http_client=client)
        assert list(results) == ["a", "b", "c"]
        assert results["a"].json() == {"Barcode": "A"}
        assert results["b"] is failure
        assert results["c"].json() == {"Barcode": "C"}

    def test_cached_ids_skip_the_transport(self):
        cache = CountingCache()
        cache.set("a", dump_response(json_response({"Barcode": "cached"})))
        client = FakeHttpClient({"b": json_response({"Barcode": "fresh"})})

        results = dispatch_batch({"a": _request("a"), "b": _request("b")}, http_client=client, cache=cache)

        assert client.batches == [["b"]]
        assert results["a"].json() == {"Barcode": "cached"}
        assert results["b"].json() == {"Barcode": "fresh"}
        assert "b" in cache
        assert cache.commits == 1

    def test_fully_cached_batch_never_hits_the_transport(self):
        cache = CountingCache()
        cache.set("a", dump_response(json_response({"Barcode": "cached"})))
        client = FakeHttpClient({})
        results = dispatch_batch({"a": _request("a")}, http_client=client, cache=cache)
        assert client.batches == []
        assert results["a"].status_code == 200

    def test_error_responses_are_not_cached(self):
        cache = CountingCache()
        client = FakeHttpClient(
            {
                "ok": json_response({"Barcode": "A"}),
                "bad": json_response({"Errors": [{"Code": "1"}]}, status=400),
                "down": HttpClientError("timeout"),
            }
        )
        dispatch_batch({k: _request(k) for k in ("ok", "bad", "down")}, http_client=client, cache=cache)
        assert "ok" in cache
        assert "bad" not in cache
        assert "down" not in cache

    def test_without_cache(self):
        client = FakeHttpClient({"a": json_response({})})
        assert dispatch_batch({"a": _request("a")}, http_client=client)["a"].status_code == 200

    def test_empty_batch(self):
        client = FakeHttpClient({})
        assert dispatch_batch({}, http_client=client) == {}
        assert client.batches == []


class TestHttpxClient:
    @pytest.fixture
    def router(self):
        def route(request):
            if request.url.path.endswith("/broken"):
                raise httpx.ConnectError("connection refused", request=request)
            if request.url.path.endswith("/exploding"):
                raise RuntimeError("transport bug")
            return json_response({"path": request.url.path})

        return Recorder(route)

    def test_execute(self, settings, router):
        with HttpxClient(settings, transport=httpx.MockTransport(router)) as client:
            response = client.execute(_request("one"))
        assert response.json() == {"path": "/one"}
        assert router.requests[0].headers["User-Agent"] == settings.user_agent

    def test_execute_wraps_transport_errors(self, settings, router):
        with HttpxClient(settings, transport=httpx.MockTransport(router)) as client:
            with pytest.raises(HttpClientError) as excinfo:
                client.execute(_request("broken"))
        assert excinfo.value.request is not None

    def test_execute_all_keeps_order_and_isolates_failures(self, settings, router):
        requests = {"first": _request("one"), "second": _request("broken"), "third": _request("three")}
        with HttpxClient(settings, transport=httpx.MockTransport(router)) as client:
            results = client.execute_all(requests)
        assert list(results) == ["first", "second", "third"]
        assert results["first"].json() == {"path": "/one"}
        assert isinstance(results["second"], HttpClientError)
        assert results["third"].json() == {"path": "/three"}
        assert len(router.requests) == 3

    def test_execute_all_empty(self, settings, router):
        with HttpxClient(settings, transport=httpx.MockTransport(router)) as client:
            assert client.execute_all({}) == {}

    def test_execute_all_isolates_non_httpx_errors(self, settings, router):
        requests = {"first": _request("one"), "second": _request("exploding"), "third": _request("three")}
        with HttpxClient(settings, transport=httpx.MockTransport(router)) as client:
            results = client.execute_all(requests)
        assert isinstance(results["second"], HttpClientError)
        assert "transport bug" in str(results["second"])
        assert results["first"].json() == {"path": "/one"}
        assert results["third"].json() == {"path": "/three"}
