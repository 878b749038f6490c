"""Location (SOAP): `LocationWebService`."""

from __future__ import annotations

import httpx

from postnl.adapters.soap.base import SoapRequestBuilder, read_entity
from postnl.core.domain.requests import GetLocation, GetLocationsInArea, GetNearestLocations
from postnl.core.domain.responses import (
    GetLocationResponse,
    GetLocationsInAreaResponse,
    GetNearestLocationsResponse,
)
from postnl.core.errors import InvalidArgumentError


class LocationSoapRequestBuilder(SoapRequestBuilder):
    service = "LocationWebService"
    endpoint = "locations"

    def build_get_nearest_locations_request(self, get_nearest: GetNearestLocations) -> httpx.Request:
        location = get_nearest.location
        if location is None or not (location.postalcode or location.city):
            raise InvalidArgumentError("GetNearestLocations needs a Location with a Postalcode or City")
        return self.post("GetNearestLocations", get_nearest)

    def build_get_locations_in_area_request(self, get_in_area: GetLocationsInArea) -> httpx.Request:
        location = get_in_area.location
        if location is None or not (location.coordinates_north_west and location.coordinates_south_east):
            raise InvalidArgumentError("GetLocationsInArea needs CoordinatesNorthWest and CoordinatesSouthEast")
        return self.post("GetLocationsInArea", get_in_area)

    def build_get_location_request(self, get_location: GetLocation) -> httpx.Request:
        if not get_location.location_code:
            raise InvalidArgumentError("GetLocation needs a LocationCode")
        return self.post("GetLocation", get_location)


class LocationSoapResponseProcessor:
    def process_get_nearest_locations_response(self, response: httpx.Response) -> GetNearestLocationsResponse:
        return read_entity(response, "GetNearestLocationsResponse", GetNearestLocationsResponse)

    def process_get_locations_in_area_response(self, response: httpx.Response) -> GetLocationsInAreaResponse:
        return read_entity(response, "GetLocationsInAreaResponse", GetLocationsInAreaResponse)

    def process_get_location_response(self, response: httpx.Response) -> GetLocationResponse:
        return read_entity(response, "GetLocationResponse", GetLocationResponse)
