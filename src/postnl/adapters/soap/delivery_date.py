"""DeliveryDate (SOAP): `GetDeliveryDate` / `GetSentDate`."""

from __future__ import annotations

import httpx

from postnl.adapters.soap.base import SoapRequestBuilder, read_entity
from postnl.core.domain.requests import GetDeliveryDate, GetSentDateRequest
from postnl.core.domain.responses import GetDeliveryDateResponse, GetSentDateResponse
from postnl.core.errors import InvalidArgumentError


class DeliveryDateSoapRequestBuilder(SoapRequestBuilder):
    service = "DeliveryDateWebService"
    endpoint = "calculate/date"

    def build_get_delivery_date_request(self, get_delivery_date: GetDeliveryDate) -> httpx.Request:
        query = get_delivery_date.get_delivery_date
        if query is None or not query.shipping_date:
            raise InvalidArgumentError("GetDeliveryDate needs a ShippingDate")
        return self.post("GetDeliveryDate", get_delivery_date)

    def build_get_sent_date_request(self, get_sent_date: GetSentDateRequest) -> httpx.Request:
        query = get_sent_date.get_sent_date
        if query is None or not query.delivery_date:
            raise InvalidArgumentError("GetSentDate needs a DeliveryDate")
        return self.post("GetSentDate", get_sent_date)


class DeliveryDateSoapResponseProcessor:
    def process_get_delivery_date_response(self, response: httpx.Response) -> GetDeliveryDateResponse:
        return read_entity(response, "GetDeliveryDateResponse", GetDeliveryDateResponse)

    def process_get_sent_date_response(self, response: httpx.Response) -> GetSentDateResponse:
        return read_entity(response, "GetSentDateResponse", GetSentDateResponse)
