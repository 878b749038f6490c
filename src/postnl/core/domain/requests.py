"""Entidades de petición (una por operación lógica).

Por qué un tipo por operación:
- El builder de cada área recibe un tipo concreto y sabe qué endpoint usar.
- Cada petición lleva un `id` de correlación (no viaja por el cable) que
  empareja la petición con su respuesta en lotes y en la caché.
"""

from __future__ import annotations

from uuid import uuid4

from pydantic import Field

from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.entities import (
    Address,
    BarcodeSpec,
    Customer,
    CutOffTime,
    LabellingMessage,
    Location,
    Message,
    Shipment,
    Timeframe,
)
from postnl.core.domain.schema import Entity, serialize, wire
from postnl.core.domain.union import Decoded, Variant, decode_union
from postnl.core.errors import InvalidArgumentError, NotFoundError


def _correlation_id() -> str:
    return uuid4().hex


class RequestEntity(Entity):
    id: str = Field(default_factory=_correlation_id, exclude=True, repr=False)


class GenerateBarcode(RequestEntity):
    barcode: BarcodeSpec | None = wire("Barcode")
    customer: Customer | None = wire("Customer")
    message: Message | None = wire("Message", default_factory=Message)


class GenerateLabel(RequestEntity):
    customer: Customer | None = wire("Customer")
    message: LabellingMessage | None = wire("Message", default_factory=LabellingMessage)
    shipments: list[Shipment] | None = wire("Shipments", item="Shipment")


class Confirming(RequestEntity):
    customer: Customer | None = wire("Customer")
    message: Message | None = wire("Message", default_factory=Message)
    shipments: list[Shipment] | None = wire("Shipments", item="Shipment")


class CurrentStatus(RequestEntity):
    """Consulta de estado actual.

    Es una "combi": según qué campo del `Shipment` venga relleno se consulta
    por referencia, por código de estado, por fase o por barcode (en ese orden
    de prioridad, ver `resolve_status_query`).
    """

    customer: Customer | None = wire("Customer")
    message: Message | None = wire("Message", default_factory=Message)
    shipment: Shipment | None = wire("Shipment")


class CompleteStatus(CurrentStatus):
    """Consulta de estado completo (historial de eventos)."""


class GetSignature(RequestEntity):
    customer: Customer | None = wire("Customer")
    message: Message | None = wire("Message", default_factory=Message)
    shipment: Shipment | None = wire("Shipment")


class GetUpdatedShipments(RequestEntity):
    customer: Customer | None = wire("Customer")
    date_from: str | None = wire("DateFrom")
    date_to: str | None = wire("DateTo")


class GetNearestLocations(RequestEntity):
    countrycode: str | None = wire("Countrycode")
    location: Location | None = wire("Location")
    message: Message | None = wire("Message", default_factory=Message)


class GetLocationsInArea(RequestEntity):
    countrycode: str | None = wire("Countrycode")
    location: Location | None = wire("Location")
    message: Message | None = wire("Message", default_factory=Message)


class GetLocation(RequestEntity):
    location_code: str | None = wire("LocationCode")
    message: Message | None = wire("Message", default_factory=Message)
    retail_network_id: str | None = wire("RetailNetworkID")


class GetTimeframes(RequestEntity):
    message: Message | None = wire("Message", default_factory=Message)
    timeframe: list[Timeframe] | None = wire("Timeframe", item="Timeframe")


class DeliveryDateQuery(Entity):
    allow_sunday_sorting: bool | None = wire("AllowSundaySorting")
    city: str | None = wire("City")
    country_code: str | None = wire("CountryCode")
    cut_off_times: list[CutOffTime] | None = wire("CutOffTimes", item="CutOffTime")
    house_nr: str | None = wire("HouseNr")
    house_nr_ext: str | None = wire("HouseNrExt")
    options: list[str] | None = wire("Options")
    origin_country_code: str | None = wire("OriginCountryCode")
    postal_code: str | None = wire("PostalCode")
    shipping_date: str | None = wire("ShippingDate")
    shipping_duration: str | None = wire("ShippingDuration")
    street: str | None = wire("Street")


class GetDeliveryDate(RequestEntity):
    get_delivery_date: DeliveryDateQuery | None = wire("GetDeliveryDate")
    message: Message | None = wire("Message", default_factory=Message)


class SentDateQuery(Entity):
    allow_sunday_sorting: bool | None = wire("AllowSundaySorting")
    city: str | None = wire("City")
    country_code: str | None = wire("CountryCode")
    delivery_date: str | None = wire("DeliveryDate")
    house_nr: str | None = wire("HouseNr")
    house_nr_ext: str | None = wire("HouseNrExt")
    options: list[str] | None = wire("Options")
    postal_code: str | None = wire("PostalCode")
    shipping_duration: str | None = wire("ShippingDuration")
    street: str | None = wire("Street")


class GetSentDateRequest(RequestEntity):
    get_sent_date: SentDateQuery | None = wire("GetSentDate")
    message: Message | None = wire("Message", default_factory=Message)


class Checkout(RequestEntity):
    order_date: str | None = wire("OrderDate")
    shipping_duration: int | None = wire("ShippingDuration")
    cut_off_times: list[CutOffTime] | None = wire("CutOffTimes", item="CutOffTime")
    holiday_sorting: bool | None = wire("HolidaySorting")
    options: list[str] | None = wire("Options")
    locations: int | None = wire("Locations")
    days: int | None = wire("Days")
    addresses: list[Address] | None = wire("Addresses", item="Address")


# Orden fijo: un Shipment con referencia y fase se consulta por referencia.
STATUS_BY_REFERENCE = "reference"
STATUS_BY_STATUS = "status"
STATUS_BY_PHASE = "phase"
STATUS_BY_BARCODE = "barcode"

STATUS_QUERY_VARIANTS: tuple[Variant[dict], ...] = (
    Variant(kind=STATUS_BY_REFERENCE, required=("Reference",)),
    Variant(kind=STATUS_BY_STATUS, required=("StatusCode",)),
    Variant(kind=STATUS_BY_PHASE, required=("PhaseCode",)),
    Variant(kind=STATUS_BY_BARCODE, required=("Barcode",)),
)


def resolve_status_query(shipment: Shipment | None) -> Decoded[dict]:
    """Clasifica la consulta de estado según los campos poblados del envío.

    Lanza `InvalidArgumentError` si el envío no trae ningún criterio.
    """

    payload = serialize(shipment, ApiMode.REST) if shipment is not None else {}
    try:
        return decode_union(payload, STATUS_QUERY_VARIANTS)
    except NotFoundError as exc:
        raise InvalidArgumentError(
            "Status queries need a Shipment with Barcode, Reference, StatusCode or PhaseCode"
        ) from exc
