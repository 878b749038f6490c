"""Servicio de confirmación de envíos."""

from __future__ import annotations

from postnl.adapters.rest.confirming import ConfirmingRestRequestBuilder, ConfirmingRestResponseProcessor
from postnl.adapters.soap.confirming import ConfirmingSoapRequestBuilder, ConfirmingSoapResponseProcessor
from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.requests import Confirming
from postnl.core.domain.responses import ConfirmingResponseShipment
from postnl.core.errors import PostNLError
from postnl.core.services.base import BaseService, Batch


class ConfirmingService(BaseService):
    AREA = "Confirming"
    DEFAULT_VERSION = "2"
    STRATEGIES = {
        ApiMode.REST: (ConfirmingRestRequestBuilder, ConfirmingRestResponseProcessor),
        ApiMode.LEGACY: (ConfirmingSoapRequestBuilder, ConfirmingSoapResponseProcessor),
    }

    def confirm_shipment(self, confirming: Confirming) -> list[ConfirmingResponseShipment]:
        builder, processor = self.strategy
        return self._send(
            confirming,
            lambda: builder.build_confirm_request(confirming),
            processor.process_confirm_response,
            cacheable=False,
        )

    def confirm_shipments(
        self, confirms: Batch[Confirming], *, strict: bool = False
    ) -> dict[str, list[ConfirmingResponseShipment] | PostNLError]:
        builder, processor = self.strategy
        return self._send_many(
            confirms,
            builder.build_confirm_request,
            processor.process_confirm_response,
            cacheable=False,
            strict=strict,
        )
