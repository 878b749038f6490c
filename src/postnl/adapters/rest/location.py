"""Location (REST).

Rutas `locations/nearest`, `locations/area` y `locations/lookup`. Los
criterios viajan como query string; las listas (`DeliveryOptions`) se repiten.
"""

from __future__ import annotations

from typing import Any

import httpx

from postnl.adapters.rest.base import RestRequestBuilder, query_bool, read_entity
from postnl.core.domain.entities import Location
from postnl.core.domain.requests import GetLocation, GetLocationsInArea, GetNearestLocations
from postnl.core.domain.responses import (
    GetLocationResponse,
    GetLocationsInAreaResponse,
    GetNearestLocationsResponse,
)
from postnl.core.errors import InvalidArgumentError


def _common_params(location: Location, countrycode: str | None) -> dict[str, Any]:
    params: dict[str, Any] = {
        "CountryCode": countrycode,
        "DeliveryDate": location.delivery_date,
        "OpeningTime": location.opening_time,
        "DeliveryOptions": list(location.delivery_options or []),
    }
    if location.allow_sunday_sorting is not None:
        params["AllowSundaySorting"] = query_bool(location.allow_sunday_sorting)
    return params


class LocationRestRequestBuilder(RestRequestBuilder):
    def build_get_nearest_locations_request(self, get_nearest: GetNearestLocations) -> httpx.Request:
        location = get_nearest.location
        if location is None or not (location.postalcode or location.city):
            raise InvalidArgumentError("GetNearestLocations needs a Location with a Postalcode or City")
        params = _common_params(location, get_nearest.countrycode)
        params.update(
            {
                "PostalCode": location.postalcode,
                "City": location.city,
                "Street": location.street,
                "HouseNumber": location.house_nr,
                "HouseNumberExtension": location.house_nr_ext,
            }
        )
        return self.get("locations/nearest", params)

    def build_get_locations_in_area_request(self, get_in_area: GetLocationsInArea) -> httpx.Request:
        location = get_in_area.location
        north_west = location.coordinates_north_west if location else None
        south_east = location.coordinates_south_east if location else None
        if north_west is None or south_east is None:
            raise InvalidArgumentError("GetLocationsInArea needs CoordinatesNorthWest and CoordinatesSouthEast")
        params = _common_params(location, get_in_area.countrycode)
        params.update(
            {
                "LatitudeNorth": north_west.latitude,
                "LongitudeWest": north_west.longitude,
                "LatitudeSouth": south_east.latitude,
                "LongitudeEast": south_east.longitude,
            }
        )
        return self.get("locations/area", params)

    def build_get_location_request(self, get_location: GetLocation) -> httpx.Request:
        if not get_location.location_code:
            raise InvalidArgumentError("GetLocation needs a LocationCode")
        return self.get(
            "locations/lookup",
            {
                "LocationCode": get_location.location_code,
                "RetailNetworkID": get_location.retail_network_id,
            },
        )


class LocationRestResponseProcessor:
    def process_get_nearest_locations_response(self, response: httpx.Response) -> GetNearestLocationsResponse:
        return read_entity(response, GetNearestLocationsResponse, "GetLocationsResult")

    def process_get_locations_in_area_response(self, response: httpx.Response) -> GetLocationsInAreaResponse:
        return read_entity(response, GetLocationsInAreaResponse, "GetLocationsResult")

    def process_get_location_response(self, response: httpx.Response) -> GetLocationResponse:
        return read_entity(response, GetLocationResponse, "GetLocationsResult")
