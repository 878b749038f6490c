"""ShippingStatus (REST).

Rutas:
- `status/barcode/{barcode}`: por barcode.
- `status/reference`: por referencia (necesita cliente).
- `status/search`: por código de estado o por fase, en un rango de fechas.
- `status/signature/{barcode}`: firma de entrega.
- `status/{customer}/updatedshipments`: envíos actualizados.

El tipo de consulta sale de `resolve_status_query` (referencia, estado,
fase, barcode, en ese orden).
"""

from __future__ import annotations

from typing import Any

import httpx

from postnl.adapters.rest.base import RestRequestBuilder, query_bool, read_body
from postnl.core.domain.entities import Customer
from postnl.core.domain.requests import (
    STATUS_BY_BARCODE,
    STATUS_BY_PHASE,
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
from postnl.core.domain.schema import deserialize
from postnl.core.domain.union import decode_union
from postnl.core.errors import InvalidArgumentError


def require_customer(customer: Customer | None, what: str) -> Customer:
    if customer is None or not customer.customer_code or not customer.customer_number:
        raise InvalidArgumentError(f"{what} needs a Customer with CustomerCode and CustomerNumber")
    return customer


class ShippingStatusRestRequestBuilder(RestRequestBuilder):
    def _status_request(self, status: CurrentStatus, *, detail: bool) -> httpx.Request:
        query = resolve_status_query(status.shipment)
        shipment = status.shipment
        assert shipment is not None

        if query.kind == STATUS_BY_BARCODE:
            return self.get(f"status/barcode/{shipment.barcode}", {"detail": query_bool(detail)})

        customer = require_customer(status.customer, "A status lookup by reference, status or phase")
        params: dict[str, Any] = {
            "customerCode": customer.customer_code,
            "customerNumber": customer.customer_number,
            "detail": query_bool(detail),
        }
        if query.kind == STATUS_BY_REFERENCE:
            params["reference"] = shipment.reference
            return self.get("status/reference", params)

        if query.kind == STATUS_BY_PHASE:
            params["phase"] = int(shipment.phase_code)
        else:
            params["status"] = shipment.status_code
        params["startDate"] = shipment.date_from
        params["endDate"] = shipment.date_to
        return self.get("status/search", params)

    def build_current_status_request(self, current_status: CurrentStatus) -> httpx.Request:
        return self._status_request(current_status, detail=False)

    def build_complete_status_request(self, complete_status: CompleteStatus) -> httpx.Request:
        return self._status_request(complete_status, detail=True)

    def build_get_signature_request(self, get_signature: GetSignature) -> httpx.Request:
        shipment = get_signature.shipment
        if shipment is None or not shipment.barcode:
            raise InvalidArgumentError("GetSignature needs a Shipment with a Barcode")
        return self.get(f"status/signature/{shipment.barcode}")

    def build_get_updated_shipments_request(self, get_updated: GetUpdatedShipments) -> httpx.Request:
        customer = require_customer(get_updated.customer, "GetUpdatedShipments")
        period = [p for p in (get_updated.date_from, get_updated.date_to) if p]
        return self.get(f"status/{customer.customer_number}/updatedshipments", {"period": period})


class ShippingStatusRestResponseProcessor:
    def process_current_status_response(self, response: httpx.Response) -> CurrentStatusResponse:
        decoded = decode_union(read_body(response), STATUS_RESULT_VARIANTS)
        return status_result_as(decoded, CurrentStatusResponse)

    def process_complete_status_response(self, response: httpx.Response) -> CompleteStatusResponse:
        decoded = decode_union(read_body(response), STATUS_RESULT_VARIANTS)
        return status_result_as(decoded, CompleteStatusResponse)

    def process_get_signature_response(self, response: httpx.Response) -> GetSignatureResponseSignature:
        decoded = decode_union(read_body(response), STATUS_RESULT_VARIANTS)
        return status_result_as(decoded, GetSignatureResponseSignature)

    def process_get_updated_shipments_response(self, response: httpx.Response) -> list[UpdatedShipmentsResponse]:
        payload = read_body(response)
        items = payload if isinstance(payload, list) else [payload]
        return [deserialize(item, UpdatedShipmentsResponse) for item in items if item]
