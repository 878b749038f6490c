"""Barcode (REST)."""

from __future__ import annotations

import httpx

from postnl.adapters.rest.base import RestRequestBuilder, read_entity
from postnl.core.domain.requests import GenerateBarcode
from postnl.core.domain.responses import GenerateBarcodeResponse
from postnl.core.errors import InvalidArgumentError, NotFoundError


def validate_generate_barcode(generate_barcode: GenerateBarcode) -> None:
    spec = generate_barcode.barcode
    customer = generate_barcode.customer
    if spec is None or not spec.type:
        raise InvalidArgumentError("GenerateBarcode needs a Barcode with a Type")
    if customer is None or not customer.customer_number:
        raise InvalidArgumentError("GenerateBarcode needs a Customer with a CustomerNumber")


class BarcodeRestRequestBuilder(RestRequestBuilder):
    def build_generate_barcode_request(self, generate_barcode: GenerateBarcode) -> httpx.Request:
        validate_generate_barcode(generate_barcode)
        spec = generate_barcode.barcode
        customer = generate_barcode.customer
        return self.get(
            "barcode",
            {
                "CustomerCode": customer.customer_code,
                "CustomerNumber": customer.customer_number,
                "Type": spec.type,
                "Serie": spec.serie,
                "Range": spec.range or customer.customer_code,
            },
        )


class BarcodeRestResponseProcessor:
    def process_generate_barcode_response(self, response: httpx.Response) -> str:
        result: GenerateBarcodeResponse = read_entity(response, GenerateBarcodeResponse, "Barcode")
        if not result.barcode:
            raise NotFoundError("Response holds no barcode")
        return result.barcode
