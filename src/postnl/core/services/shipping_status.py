"""Servicio de estado de envíos y firmas."""

from __future__ import annotations

from postnl.adapters.rest.shipping_status import (
    ShippingStatusRestRequestBuilder,
    ShippingStatusRestResponseProcessor,
)
from postnl.adapters.soap.shipping_status import (
    ShippingStatusSoapRequestBuilder,
    ShippingStatusSoapResponseProcessor,
)
from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.requests import CompleteStatus, CurrentStatus, GetSignature, GetUpdatedShipments
from postnl.core.domain.responses import (
    CompleteStatusResponse,
    CurrentStatusResponse,
    GetSignatureResponseSignature,
    UpdatedShipmentsResponse,
)
from postnl.core.errors import PostNLError
from postnl.core.services.base import BaseService, Batch


class ShippingStatusService(BaseService):
    AREA = "ShippingStatus"
    DEFAULT_VERSION = "2"
    STRATEGIES = {
        ApiMode.REST: (ShippingStatusRestRequestBuilder, ShippingStatusRestResponseProcessor),
        ApiMode.LEGACY: (ShippingStatusSoapRequestBuilder, ShippingStatusSoapResponseProcessor),
    }

    def current_status(self, current_status: CurrentStatus) -> CurrentStatusResponse:
        """Estado actual: por barcode, referencia, código de estado o fase."""

        builder, processor = self.strategy
        return self._send(
            current_status,
            lambda: builder.build_current_status_request(current_status),
            processor.process_current_status_response,
        )

    def current_statuses(
        self, current_statuses: Batch[CurrentStatus], *, strict: bool = False
    ) -> dict[str, CurrentStatusResponse | PostNLError]:
        builder, processor = self.strategy
        return self._send_many(
            current_statuses,
            builder.build_current_status_request,
            processor.process_current_status_response,
            strict=strict,
        )

    def complete_status(self, complete_status: CompleteStatus) -> CompleteStatusResponse:
        builder, processor = self.strategy
        return self._send(
            complete_status,
            lambda: builder.build_complete_status_request(complete_status),
            processor.process_complete_status_response,
        )

    def complete_statuses(
        self, complete_statuses: Batch[CompleteStatus], *, strict: bool = False
    ) -> dict[str, CompleteStatusResponse | PostNLError]:
        builder, processor = self.strategy
        return self._send_many(
            complete_statuses,
            builder.build_complete_status_request,
            processor.process_complete_status_response,
            strict=strict,
        )

    def get_signature(self, get_signature: GetSignature) -> GetSignatureResponseSignature:
        builder, processor = self.strategy
        return self._send(
            get_signature,
            lambda: builder.build_get_signature_request(get_signature),
            processor.process_get_signature_response,
        )

    def get_signatures(
        self, get_signatures: Batch[GetSignature], *, strict: bool = False
    ) -> dict[str, GetSignatureResponseSignature | PostNLError]:
        builder, processor = self.strategy
        return self._send_many(
            get_signatures,
            builder.build_get_signature_request,
            processor.process_get_signature_response,
            strict=strict,
        )

    def get_updated_shipments(self, get_updated: GetUpdatedShipments) -> list[UpdatedShipmentsResponse]:
        builder, processor = self.strategy
        return self._send(
            get_updated,
            lambda: builder.build_get_updated_shipments_request(get_updated),
            processor.process_get_updated_shipments_response,
        )
