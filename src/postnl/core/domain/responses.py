"""Entidades de respuesta.

Por qué aquí:
- Cada operación devuelve un tipo concreto; los processors de REST y SOAP
  producen exactamente los mismos objetos.
- Algunas respuestas comparten forma (estado actual/completo/firma) y se
  distinguen con `decode_union` sobre `STATUS_RESULT_VARIANTS`.
"""

from __future__ import annotations

from typing import TypeVar

from postnl.core.domain.entities import (
    ErrorEntry,
    GetLocationsResult,
    Label,
    ReasonNoTimeframe,
    ResponseLocation,
    Signature,
    StatusShipment,
    Timeframe,
    TimeframeTimeFrame,
    Warning,
)
from postnl.core.domain.schema import Entity, wire
from postnl.core.domain.union import Decoded, Variant
from postnl.core.errors import NotFoundError


class GenerateBarcodeResponse(Entity):
    barcode: str | None = wire("Barcode")


class ResponseShipment(Entity):
    barcode: str | None = wire("Barcode")
    coding_text: str | None = wire("CodingText")
    down_partner_barcode: str | None = wire("DownPartnerBarcode")
    down_partner_id: str | None = wire("DownPartnerID")
    down_partner_location: str | None = wire("DownPartnerLocation")
    labels: list[Label] | None = wire("Labels", item="Label")
    product_code_delivery: str | None = wire("ProductCodeDelivery")
    warnings: list[Warning] | None = wire("Warnings", item="Warning")


class MergedLabel(Entity):
    barcodes: list[str] | None = wire("Barcodes")
    labels: list[Label] | None = wire("Labels", item="Label")


class GenerateLabelResponse(Entity):
    merged_labels: list[MergedLabel] | None = wire("MergedLabels", item="MergedLabel")
    response_shipments: list[ResponseShipment] | None = wire("ResponseShipments", item="ResponseShipment")


class ConfirmingResponseShipment(Entity):
    barcode: str | None = wire("Barcode")
    warnings: list[Warning] | None = wire("Warnings", item="Warning")
    errors: list[ErrorEntry] | None = wire("Errors", item="Error")


class CurrentStatusResponse(Entity):
    shipments: list[StatusShipment] | None = wire(
        "Shipment", legacy="Shipments", item="CurrentStatusResponseShipment"
    )
    warnings: list[Warning] | None = wire("Warnings", item="Warning")


class CompleteStatusResponse(Entity):
    shipments: list[StatusShipment] | None = wire(
        "Shipment", legacy="Shipments", item="CompleteStatusResponseShipment"
    )
    warnings: list[Warning] | None = wire("Warnings", item="Warning")


class GetSignatureResponseSignature(Entity):
    signature: Signature | None = wire("Signature")
    warnings: list[Warning] | None = wire("Warnings", item="Warning")


class UpdatedShipmentStatus(Entity):
    phase_code: str | None = wire("PhaseCode")
    phase_description: str | None = wire("PhaseDescription")
    status_code: str | None = wire("StatusCode")
    status_description: str | None = wire("StatusDescription")
    timestamp: str | None = wire("TimeStamp")


class UpdatedShipmentsResponse(Entity):
    barcode: str | None = wire("Barcode")
    creation_date: str | None = wire("CreationDate")
    customer_number: str | None = wire("CustomerNumber")
    customer_code: str | None = wire("CustomerCode")
    status: UpdatedShipmentStatus | None = wire("Status")


class GetNearestLocationsResponse(Entity):
    get_locations_result: GetLocationsResult | None = wire("GetLocationsResult")


class GetLocationsInAreaResponse(Entity):
    get_locations_result: GetLocationsResult | None = wire("GetLocationsResult")


class GetLocationResponse(Entity):
    get_locations_result: GetLocationsResult | None = wire("GetLocationsResult")


class ResponseTimeframes(Entity):
    reason_no_timeframes: list[ReasonNoTimeframe] | None = wire(
        "ReasonNotimeframes", item="ReasonNoTimeframe"
    )
    timeframes: list[Timeframe] | None = wire("Timeframes", item="Timeframe")


class GetDeliveryDateResponse(Entity):
    delivery_date: str | None = wire("DeliveryDate")
    options: list[str] | None = wire("Options")


class GetSentDateResponse(Entity):
    sent_date: str | None = wire("SentDate")
    options: list[str] | None = wire("Options")


class DeliveryOption(Entity):
    delivery_date: str | None = wire("DeliveryDate")
    timeframe: list[TimeframeTimeFrame] | None = wire("Timeframe", item="TimeframeTimeFrame")


class PickupOption(Entity):
    pickup_date: str | None = wire("PickupDate")
    shipping_date: str | None = wire("ShippingDate")
    option: str | None = wire("Option")
    locations: list[ResponseLocation] | None = wire("Locations", item="ResponseLocation")


class CheckoutResponse(Entity):
    delivery_options: list[DeliveryOption] | None = wire("DeliveryOptions", item="DeliveryOption")
    pickup_options: list[PickupOption] | None = wire("PickupOptions", item="PickupOption")
    warnings: list[Warning] | None = wire("Warnings", item="Warning")


# Orden fijo: CompleteStatus, luego CurrentStatus, luego Signature.
STATUS_COMPLETE = "complete"
STATUS_CURRENT = "current"
STATUS_SIGNATURE = "signature"

_COMPLETE_KEYS = ("CompleteStatus", "CompleteStatusResponse")
_CURRENT_KEYS = ("CurrentStatus", "CurrentStatusResponse")
_SIGNATURE_KEYS = ("Signature", "GetSignatureResponse")

STATUS_RESULT_VARIANTS: tuple[Variant, ...] = (
    Variant(kind=STATUS_COMPLETE, required=(_COMPLETE_KEYS,), entity=CompleteStatusResponse, key=_COMPLETE_KEYS),
    Variant(kind=STATUS_CURRENT, required=(_CURRENT_KEYS,), entity=CurrentStatusResponse, key=_CURRENT_KEYS),
    # REST trae la firma en la raíz (`Signature` + `Warnings`); SOAP la envuelve.
    Variant(
        kind=STATUS_SIGNATURE,
        required=(_SIGNATURE_KEYS,),
        entity=GetSignatureResponseSignature,
        key="GetSignatureResponse",
    ),
)


StatusResult = TypeVar("StatusResult", CurrentStatusResponse, CompleteStatusResponse, GetSignatureResponseSignature)


def status_result_as(decoded: Decoded, target: type[StatusResult]) -> StatusResult:
    """Adapta un resultado de estado decodificado al tipo que pidió el llamador.

    Estado actual y completo comparten forma: uno se convierte en el otro. Una
    firma no sirve como estado (ni al revés): `NotFoundError`.
    """

    if isinstance(decoded.value, target):
        return decoded.value
    is_signature = decoded.kind == STATUS_SIGNATURE
    if is_signature or target is GetSignatureResponseSignature:
        raise NotFoundError(f"Expected {target.__name__}, response holds {decoded.kind} status")
    return target.model_validate(decoded.value.model_dump(exclude_none=True))


__all__ = [
    "CheckoutResponse",
    "CompleteStatusResponse",
    "ConfirmingResponseShipment",
    "CurrentStatusResponse",
    "DeliveryOption",
    "GenerateBarcodeResponse",
    "GenerateLabelResponse",
    "GetDeliveryDateResponse",
    "GetLocationResponse",
    "GetLocationsInAreaResponse",
    "GetNearestLocationsResponse",
    "GetSentDateResponse",
    "GetSignatureResponseSignature",
    "MergedLabel",
    "PickupOption",
    "ResponseShipment",
    "ResponseTimeframes",
    "STATUS_RESULT_VARIANTS",
    "UpdatedShipmentStatus",
    "UpdatedShipmentsResponse",
    "status_result_as",
]
