"""DeliveryDate (REST): `calculate/date/delivery` y `calculate/date/shipping`.

Los `CutOffTimes` viajan como parámetros sueltos: el día `00` es
`CutOffTime`; el resto, `CutOffTime{Día}` + `Available{Día}`.
"""

from __future__ import annotations

from typing import Any

import httpx

from postnl.adapters.rest.base import RestRequestBuilder, query_bool, read_entity
from postnl.core.domain.entities import CutOffTime
from postnl.core.domain.requests import GetDeliveryDate, GetSentDateRequest
from postnl.core.domain.responses import GetDeliveryDateResponse, GetSentDateResponse
from postnl.core.errors import InvalidArgumentError


def cut_off_params(cut_off_times: list[CutOffTime] | None) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for cut_off in cut_off_times or []:
        day = cut_off.day.day_name() if cut_off.day else None
        if day is None:
            params["CutOffTime"] = cut_off.time
            continue
        params[f"CutOffTime{day}"] = cut_off.time
        if cut_off.available is not None:
            params[f"Available{day}"] = query_bool(cut_off.available)
    return params


class DeliveryDateRestRequestBuilder(RestRequestBuilder):
    def build_get_delivery_date_request(self, get_delivery_date: GetDeliveryDate) -> httpx.Request:
        query = get_delivery_date.get_delivery_date
        if query is None or not query.shipping_date:
            raise InvalidArgumentError("GetDeliveryDate needs a ShippingDate")
        params: dict[str, Any] = {
            "ShippingDate": query.shipping_date,
            "ShippingDuration": query.shipping_duration,
            "PostalCode": query.postal_code,
            "CountryCode": query.country_code,
            "OriginCountryCode": query.origin_country_code,
            "City": query.city,
            "Street": query.street,
            "HouseNumber": query.house_nr,
            "HouseNrExt": query.house_nr_ext,
            "Options": list(query.options or []),
        }
        if query.allow_sunday_sorting is not None:
            params["AllowSundaySorting"] = query_bool(query.allow_sunday_sorting)
        params.update(cut_off_params(query.cut_off_times))
        return self.get("calculate/date/delivery", params)

    def build_get_sent_date_request(self, get_sent_date: GetSentDateRequest) -> httpx.Request:
        query = get_sent_date.get_sent_date
        if query is None or not query.delivery_date:
            raise InvalidArgumentError("GetSentDate needs a DeliveryDate")
        params: dict[str, Any] = {
            "DeliveryDate": query.delivery_date,
            "ShippingDuration": query.shipping_duration,
            "PostalCode": query.postal_code,
            "CountryCode": query.country_code,
            "City": query.city,
            "Street": query.street,
            "HouseNumber": query.house_nr,
            "HouseNrExt": query.house_nr_ext,
            "Options": list(query.options or []),
        }
        if query.allow_sunday_sorting is not None:
            params["AllowSundaySorting"] = query_bool(query.allow_sunday_sorting)
        return self.get("calculate/date/shipping", params)


class DeliveryDateRestResponseProcessor:
    def process_get_delivery_date_response(self, response: httpx.Response) -> GetDeliveryDateResponse:
        return read_entity(response, GetDeliveryDateResponse, "DeliveryDate")

    def process_get_sent_date_response(self, response: httpx.Response) -> GetSentDateResponse:
        return read_entity(response, GetSentDateResponse, "SentDate")
