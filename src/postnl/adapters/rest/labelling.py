"""Labelling (REST).

`confirm=true` etiqueta y confirma en una sola llamada.
"""

from __future__ import annotations

import httpx

from postnl.adapters.rest.base import RestRequestBuilder, query_bool, read_entity
from postnl.core.domain.requests import GenerateLabel
from postnl.core.domain.responses import GenerateLabelResponse
from postnl.core.errors import InvalidArgumentError


def validate_generate_label(generate_label: GenerateLabel) -> None:
    if not generate_label.shipments:
        raise InvalidArgumentError("GenerateLabel needs at least one Shipment")
    if generate_label.customer is None:
        raise InvalidArgumentError("GenerateLabel needs a Customer")


class LabellingRestRequestBuilder(RestRequestBuilder):
    def build_generate_label_request(self, generate_label: GenerateLabel, confirm: bool = True) -> httpx.Request:
        validate_generate_label(generate_label)
        return self.post("label", generate_label, {"confirm": query_bool(confirm)})


class LabellingRestResponseProcessor:
    def process_generate_label_response(self, response: httpx.Response) -> GenerateLabelResponse:
        return read_entity(response, GenerateLabelResponse, "ResponseShipments", "MergedLabels")
