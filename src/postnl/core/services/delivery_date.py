"""Servicio de fechas de entrega y de envío."""

from __future__ import annotations

from postnl.adapters.rest.delivery_date import DeliveryDateRestRequestBuilder, DeliveryDateRestResponseProcessor
from postnl.adapters.soap.delivery_date import DeliveryDateSoapRequestBuilder, DeliveryDateSoapResponseProcessor
from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.requests import GetDeliveryDate, GetSentDateRequest
from postnl.core.domain.responses import GetDeliveryDateResponse, GetSentDateResponse
from postnl.core.services.base import BaseService


class DeliveryDateService(BaseService):
    AREA = "DeliveryDate"
    DEFAULT_VERSION = "2_2"
    STRATEGIES = {
        ApiMode.REST: (DeliveryDateRestRequestBuilder, DeliveryDateRestResponseProcessor),
        ApiMode.LEGACY: (DeliveryDateSoapRequestBuilder, DeliveryDateSoapResponseProcessor),
    }

    def get_delivery_date(self, get_delivery_date: GetDeliveryDate) -> GetDeliveryDateResponse:
        builder, processor = self.strategy
        return self._send(
            get_delivery_date,
            lambda: builder.build_get_delivery_date_request(get_delivery_date),
            processor.process_get_delivery_date_response,
        )

    def get_sent_date(self, get_sent_date: GetSentDateRequest) -> GetSentDateResponse:
        builder, processor = self.strategy
        return self._send(
            get_sent_date,
            lambda: builder.build_get_sent_date_request(get_sent_date),
            processor.process_get_sent_date_response,
        )
