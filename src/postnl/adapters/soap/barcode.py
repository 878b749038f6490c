"""Barcode (SOAP): `BarcodeWebService.GenerateBarcode`."""

from __future__ import annotations

import httpx

from postnl.adapters.rest.barcode import validate_generate_barcode
from postnl.adapters.soap.base import SoapRequestBuilder, read_entity
from postnl.core.domain.requests import GenerateBarcode
from postnl.core.domain.responses import GenerateBarcodeResponse
from postnl.core.errors import NotFoundError


class BarcodeSoapRequestBuilder(SoapRequestBuilder):
    service = "BarcodeWebService"
    endpoint = "barcode"

    def build_generate_barcode_request(self, generate_barcode: GenerateBarcode) -> httpx.Request:
        validate_generate_barcode(generate_barcode)
        spec = generate_barcode.barcode
        if not spec.range and generate_barcode.customer.customer_code:
            generate_barcode = generate_barcode.model_copy(
                update={"barcode": spec.model_copy(update={"range": generate_barcode.customer.customer_code})}
            )
        return self.post("GenerateBarcode", generate_barcode)


class BarcodeSoapResponseProcessor:
    def process_generate_barcode_response(self, response: httpx.Response) -> str:
        result: GenerateBarcodeResponse = read_entity(response, "GenerateBarcodeResponse", GenerateBarcodeResponse)
        if not result.barcode:
            raise NotFoundError("Response holds no barcode")
        return result.barcode
