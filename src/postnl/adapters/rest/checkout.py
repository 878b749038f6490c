"""Checkout (REST). Sin equivalente SOAP."""

from __future__ import annotations

import httpx

from postnl.adapters.rest.base import RestRequestBuilder, read_entity
from postnl.core.domain.requests import Checkout
from postnl.core.domain.responses import CheckoutResponse
from postnl.core.errors import InvalidArgumentError


class CheckoutRestRequestBuilder(RestRequestBuilder):
    def build_checkout_request(self, checkout: Checkout) -> httpx.Request:
        if not checkout.order_date:
            raise InvalidArgumentError("Checkout needs an OrderDate")
        if not checkout.addresses:
            raise InvalidArgumentError("Checkout needs at least one Address")
        return self.post("checkout", checkout)


class CheckoutRestResponseProcessor:
    def process_checkout_response(self, response: httpx.Response) -> CheckoutResponse:
        return read_entity(response, CheckoutResponse, "DeliveryOptions", "PickupOptions")
