"""Servicio de checkout (solo REST)."""

from __future__ import annotations

from postnl.adapters.rest.checkout import CheckoutRestRequestBuilder, CheckoutRestResponseProcessor
from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.requests import Checkout
from postnl.core.domain.responses import CheckoutResponse
from postnl.core.services.base import BaseService


class CheckoutService(BaseService):
    AREA = "Checkout"
    DEFAULT_VERSION = "1"
    STRATEGIES = {
        ApiMode.REST: (CheckoutRestRequestBuilder, CheckoutRestResponseProcessor),
    }

    def checkout(self, checkout: Checkout) -> CheckoutResponse:
        builder, processor = self.strategy
        return self._send(
            checkout,
            lambda: builder.build_checkout_request(checkout),
            processor.process_checkout_response,
        )
