"""Confirming (SOAP): `ConfirmingWebService.Confirming`."""

from __future__ import annotations

import httpx

from postnl.adapters.rest.confirming import confirmed_shipments, validate_confirming
from postnl.adapters.soap.base import SoapRequestBuilder, response_element
from postnl.core.domain.requests import Confirming
from postnl.core.domain.responses import ConfirmingResponseShipment


class ConfirmingSoapRequestBuilder(SoapRequestBuilder):
    service = "ConfirmingWebService"
    endpoint = "confirm"

    def build_confirm_request(self, confirming: Confirming) -> httpx.Request:
        validate_confirming(confirming)
        return self.post("Confirming", confirming)


class ConfirmingSoapResponseProcessor:
    def process_confirm_response(self, response: httpx.Response) -> list[ConfirmingResponseShipment]:
        return confirmed_shipments(response_element(response, "ConfirmingResponseShipments"))
