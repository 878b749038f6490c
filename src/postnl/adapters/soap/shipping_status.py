"""ShippingStatus (SOAP).

El web service legacy solo consulta por barcode o por referencia; la
búsqueda por fase o código de estado y los envíos actualizados son solo REST.
"""

from __future__ import annotations

import httpx

from postnl.adapters.rest.shipping_status import require_customer
from postnl.adapters.soap.base import SoapRequestBuilder, read_body
from postnl.core.domain.requests import (
    STATUS_BY_BARCODE,
    STATUS_BY_REFERENCE,
    CompleteStatus,
    CurrentStatus,
    GetSignature,
    GetUpdatedShipments,
    resolve_status_query,
)
from postnl.core.domain.responses import (
    STATUS_RESULT_VARIANTS,
    CompleteStatusResponse,
    CurrentStatusResponse,
    GetSignatureResponseSignature,
    UpdatedShipmentsResponse,
    status_result_as,
)
from postnl.core.domain.union import decode_union
from postnl.core.errors import InvalidArgumentError, NotSupportedError


class ShippingStatusSoapRequestBuilder(SoapRequestBuilder):
    service = "ShippingStatusWebService"
    endpoint = "status"

    def _status_request(self, status: CurrentStatus, operation: str) -> httpx.Request:
        query = resolve_status_query(status.shipment)
        if query.kind == STATUS_BY_REFERENCE:
            require_customer(status.customer, "A status lookup by reference")
            return self.post(f"{operation}ByReference", status)
        if query.kind == STATUS_BY_BARCODE:
            return self.post(operation, status)
        raise NotSupportedError(f"Status search by {query.kind} is only available in REST mode")

    def build_current_status_request(self, current_status: CurrentStatus) -> httpx.Request:
        return self._status_request(current_status, "CurrentStatus")

    def build_complete_status_request(self, complete_status: CompleteStatus) -> httpx.Request:
        return self._status_request(complete_status, "CompleteStatus")

    def build_get_signature_request(self, get_signature: GetSignature) -> httpx.Request:
        shipment = get_signature.shipment
        if shipment is None or not shipment.barcode:
            raise InvalidArgumentError("GetSignature needs a Shipment with a Barcode")
        return self.post("GetSignature", get_signature)

    def build_get_updated_shipments_request(self, get_updated: GetUpdatedShipments) -> httpx.Request:
        raise NotSupportedError("Updated shipments are only available in REST mode")


class ShippingStatusSoapResponseProcessor:
    def process_current_status_response(self, response: httpx.Response) -> CurrentStatusResponse:
        return status_result_as(decode_union(read_body(response), STATUS_RESULT_VARIANTS), CurrentStatusResponse)

    def process_complete_status_response(self, response: httpx.Response) -> CompleteStatusResponse:
        return status_result_as(decode_union(read_body(response), STATUS_RESULT_VARIANTS), CompleteStatusResponse)

    def process_get_signature_response(self, response: httpx.Response) -> GetSignatureResponseSignature:
        return status_result_as(
            decode_union(read_body(response), STATUS_RESULT_VARIANTS), GetSignatureResponseSignature
        )

    def process_get_updated_shipments_response(self, response: httpx.Response) -> list[UpdatedShipmentsResponse]:
        raise NotSupportedError("Updated shipments are only available in REST mode")
