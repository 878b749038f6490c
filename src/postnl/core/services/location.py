"""Servicio de puntos de recogida."""

from __future__ import annotations

from postnl.adapters.rest.location import LocationRestRequestBuilder, LocationRestResponseProcessor
from postnl.adapters.soap.location import LocationSoapRequestBuilder, LocationSoapResponseProcessor
from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.requests import GetLocation, GetLocationsInArea, GetNearestLocations
from postnl.core.domain.responses import (
    GetLocationResponse,
    GetLocationsInAreaResponse,
    GetNearestLocationsResponse,
)
from postnl.core.services.base import BaseService


class LocationService(BaseService):
    AREA = "Location"
    DEFAULT_VERSION = "2_1"
    STRATEGIES = {
        ApiMode.REST: (LocationRestRequestBuilder, LocationRestResponseProcessor),
        ApiMode.LEGACY: (LocationSoapRequestBuilder, LocationSoapResponseProcessor),
    }

    def get_nearest_locations(self, get_nearest: GetNearestLocations) -> GetNearestLocationsResponse:
        builder, processor = self.strategy
        return self._send(
            get_nearest,
            lambda: builder.build_get_nearest_locations_request(get_nearest),
            processor.process_get_nearest_locations_response,
        )

    def get_locations_in_area(self, get_in_area: GetLocationsInArea) -> GetLocationsInAreaResponse:
        builder, processor = self.strategy
        return self._send(
            get_in_area,
            lambda: builder.build_get_locations_in_area_request(get_in_area),
            processor.process_get_locations_in_area_response,
        )

    def get_location(self, get_location: GetLocation) -> GetLocationResponse:
        builder, processor = self.strategy
        return self._send(
            get_location,
            lambda: builder.build_get_location_request(get_location),
            processor.process_get_location_response,
        )
