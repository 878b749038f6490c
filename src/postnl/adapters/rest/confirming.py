"""Confirming (REST)."""

from __future__ import annotations

import httpx

from postnl.adapters.rest.base import RestRequestBuilder, read_body
from postnl.core.domain.requests import Confirming
from postnl.core.domain.responses import ConfirmingResponseShipment
from postnl.core.domain.schema import deserialize
from postnl.core.domain.union import normalized
from postnl.core.errors import InvalidArgumentError, NotFoundError


def validate_confirming(confirming: Confirming) -> None:
    if not confirming.shipments:
        raise InvalidArgumentError("Confirming needs at least one Shipment")
    if confirming.customer is None:
        raise InvalidArgumentError("Confirming needs a Customer")


def confirmed_shipments(raw: object) -> list[ConfirmingResponseShipment]:
    """Lista de envíos confirmados desde `ResponseShipments` (lista, envoltorio o singleton)."""

    if isinstance(raw, dict):
        view = normalized(raw)
        if len(view) == 1 and "confirmingresponseshipment" in view:
            raw = view["confirmingresponseshipment"]
    items = raw if isinstance(raw, list) else [raw]
    return [deserialize(item, ConfirmingResponseShipment) for item in items if item is not None]


class ConfirmingRestRequestBuilder(RestRequestBuilder):
    def build_confirm_request(self, confirming: Confirming) -> httpx.Request:
        validate_confirming(confirming)
        return self.post("confirm", confirming)


class ConfirmingRestResponseProcessor:
    def process_confirm_response(self, response: httpx.Response) -> list[ConfirmingResponseShipment]:
        payload = read_body(response)
        raw = normalized(payload).get("responseshipments") if isinstance(payload, dict) else None
        if raw is None:
            raise NotFoundError("Response holds no confirmed shipments")
        return confirmed_shipments(raw)
