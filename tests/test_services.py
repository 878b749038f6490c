"""Tests for the per-area services (strategy switching, caching, batches)."""

import httpx
import pytest

from postnl.adapters.http_client import HttpxClient
from postnl.adapters.response_cache import MemoryResponseCache
from postnl.adapters.rest.location import LocationRestRequestBuilder, LocationRestResponseProcessor
from postnl.adapters.soap.location import LocationSoapRequestBuilder, LocationSoapResponseProcessor
from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.entities import Address, BarcodeSpec, Location, Shipment
from postnl.core.domain.requests import Checkout, CurrentStatus, GenerateBarcode, GetNearestLocations
from postnl.core.errors import InvalidArgumentError, NotSupportedError, ResponseError
from postnl.core.services.barcode import BarcodeService
from postnl.core.services.checkout import CheckoutService
from postnl.core.services.location import LocationService
from postnl.core.services.shipping_status import ShippingStatusService
from support import (
    BARCODE_PAYLOAD,
    CURRENT_STATUS_PAYLOAD,
    NEAREST_LOCATIONS_PAYLOAD,
    Recorder,
    json_response,
)


@pytest.fixture
def make_service(settings):
    clients = []

    def factory(service_cls, router, *, mode=ApiMode.REST, cache=None):
        recorder = Recorder(router)
        http_client = HttpxClient(settings, transport=httpx.MockTransport(recorder))
        clients.append(http_client)
        service = service_cls(
            api_key="test-api-key",
            sandbox=True,
            http_client=http_client,
            api_mode=mode,
            cache=cache,
        )
        return service, recorder

    yield factory

    for client in clients:
        client.close()


def _nearest():
    return GetNearestLocations(countrycode="NL", location=Location(postalcode="2132WT", delivery_options=["PG"]))


class TestStrategy:
    def test_pair_matches_the_mode(self, make_service):
        service, _ = make_service(LocationService, lambda r: json_response({}))
        builder, processor = service.strategy
        assert isinstance(builder, LocationRestRequestBuilder)
        assert isinstance(processor, LocationRestResponseProcessor)

        service.set_api_mode(ApiMode.LEGACY)
        builder, processor = service.strategy
        assert isinstance(builder, LocationSoapRequestBuilder)
        assert isinstance(processor, LocationSoapResponseProcessor)
        assert service.api_mode is ApiMode.LEGACY

    def test_switching_back_behaves_like_a_fresh_service(self, make_service):
        fresh, fresh_calls = make_service(LocationService, lambda r: json_response(NEAREST_LOCATIONS_PAYLOAD))
        switched, switched_calls = make_service(LocationService, lambda r: json_response(NEAREST_LOCATIONS_PAYLOAD))
        switched.set_api_mode(ApiMode.LEGACY)
        switched.set_api_mode(ApiMode.REST)

        request = _nearest()
        assert switched.get_nearest_locations(request) == fresh.get_nearest_locations(request)
        assert str(switched_calls.requests[0].url) == str(fresh_calls.requests[0].url)
        assert switched_calls.requests[0].headers["apikey"] == "test-api-key"

    def test_unsupported_mode(self, make_service):
        service, recorder = make_service(CheckoutService, lambda r: json_response({}), mode=ApiMode.LEGACY)
        checkout = Checkout(order_date="29-06-2016 12:00:00", addresses=[Address(zipcode="2132WT")])
        with pytest.raises(NotSupportedError):
            service.checkout(checkout)
        assert recorder.requests == []

        service.set_api_mode(ApiMode.REST)
        builder, _ = service.strategy
        assert builder.build_checkout_request(checkout).url.path == "/shipment/v1/checkout"


class TestSingleRequestCache:
    def test_reads_are_served_from_the_cache(self, make_service):
        cache = MemoryResponseCache()
        service, recorder = make_service(
            LocationService, lambda r: json_response(NEAREST_LOCATIONS_PAYLOAD), cache=cache
        )
        request = _nearest()
        first = service.get_nearest_locations(request)
        second = service.get_nearest_locations(request)
        assert first == second
        assert len(recorder.requests) == 1

    def test_barcodes_are_never_cached(self, make_service, customer):
        cache = MemoryResponseCache()
        service, recorder = make_service(BarcodeService, lambda r: json_response(BARCODE_PAYLOAD), cache=cache)
        request = GenerateBarcode(barcode=BarcodeSpec(type="3S", serie="987000000-987600000"), customer=customer)
        service.generate_barcode(request)
        service.generate_barcode(request)
        assert len(recorder.requests) == 2
        assert len(cache) == 0

    def test_failed_responses_are_not_cached(self, make_service):
        cache = MemoryResponseCache()
        service, recorder = make_service(LocationService, lambda r: httpx.Response(500), cache=cache)
        request = _nearest()
        for _ in range(2):
            with pytest.raises(ResponseError):
                service.get_nearest_locations(request)
        assert len(recorder.requests) == 2
        assert request.id not in cache

    def test_unreadable_blob_falls_back_to_the_transport(self, make_service):
        cache = MemoryResponseCache()
        service, recorder = make_service(
            LocationService, lambda r: json_response(NEAREST_LOCATIONS_PAYLOAD), cache=cache
        )
        request = _nearest()
        cache.set(request.id, "garbage")
        result = service.get_nearest_locations(request)
        assert result.get_locations_result is not None
        assert len(recorder.requests) == 1


class TestBatches:
    @staticmethod
    def _router(request):
        if request.url.path.endswith("/3S-BROKEN"):
            return httpx.Response(500)
        return json_response(CURRENT_STATUS_PAYLOAD)

    def _requests(self):
        return [
            CurrentStatus(id="one", shipment=Shipment(barcode="3S-ONE")),
            CurrentStatus(id="broken", shipment=Shipment(barcode="3S-BROKEN")),
            CurrentStatus(id="two", shipment=Shipment(barcode="3S-TWO")),
        ]

    def test_errors_stay_with_their_id(self, make_service):
        service, recorder = make_service(ShippingStatusService, self._router)
        results = service.current_statuses(self._requests())
        assert list(results) == ["one", "broken", "two"]
        assert results["one"].shipments[0].barcode == "3SDEVC201611210"
        assert isinstance(results["broken"], ResponseError)
        assert results["two"].shipments
        assert len(recorder.requests) == 3

    def test_strict_raises(self, make_service):
        service, _ = make_service(ShippingStatusService, self._router)
        with pytest.raises(ResponseError):
            service.current_statuses(self._requests(), strict=True)

    def test_cached_ids_skip_the_transport(self, make_service):
        cache = MemoryResponseCache()
        service, recorder = make_service(ShippingStatusService, self._router, cache=cache)
        first = CurrentStatus(id="one", shipment=Shipment(barcode="3S-ONE"))
        service.current_status(first)
        assert len(recorder.requests) == 1

        second = CurrentStatus(id="two", shipment=Shipment(barcode="3S-TWO"))
        results = service.current_statuses([first, second])
        assert set(results) == {"one", "two"}
        assert [r.url.path.rsplit("/", 1)[-1] for r in recorder.requests] == ["3S-ONE", "3S-TWO"]

    def test_duplicate_ids_are_rejected_before_sending(self, make_service):
        service, recorder = make_service(ShippingStatusService, self._router)
        requests = [
            CurrentStatus(id="same", shipment=Shipment(barcode="3S-ONE")),
            CurrentStatus(id="same", shipment=Shipment(barcode="3S-TWO")),
        ]
        with pytest.raises(InvalidArgumentError):
            service.current_statuses(requests)
        assert recorder.requests == []

    def test_mapping_keys_become_the_ids(self, make_service):
        cache = MemoryResponseCache()
        service, recorder = make_service(ShippingStatusService, self._router, cache=cache)
        shared = CurrentStatus(id="same", shipment=Shipment(barcode="3S-ONE"))
        results = service.current_statuses(
            {"one": shared, "two": CurrentStatus(id="same", shipment=Shipment(barcode="3S-TWO"))}
        )
        assert list(results) == ["one", "two"]
        assert len(recorder.requests) == 2
        assert "one" in cache and "two" in cache
        assert shared.id == "same"
