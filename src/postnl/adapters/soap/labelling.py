"""Labelling (SOAP): `GenerateLabel` / `GenerateLabelWithoutConfirm`."""

from __future__ import annotations

import httpx

from postnl.adapters.rest.labelling import validate_generate_label
from postnl.adapters.soap.base import SoapRequestBuilder, read_entity
from postnl.core.domain.requests import GenerateLabel
from postnl.core.domain.responses import GenerateLabelResponse


class LabellingSoapRequestBuilder(SoapRequestBuilder):
    service = "LabellingWebService"
    endpoint = "label"

    def build_generate_label_request(self, generate_label: GenerateLabel, confirm: bool = True) -> httpx.Request:
        validate_generate_label(generate_label)
        operation = "GenerateLabel" if confirm else "GenerateLabelWithoutConfirm"
        return self.post(operation, generate_label)


class LabellingSoapResponseProcessor:
    def process_generate_label_response(self, response: httpx.Response) -> GenerateLabelResponse:
        return read_entity(response, "GenerateLabelResponse", GenerateLabelResponse)
