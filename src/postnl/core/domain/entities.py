"""Entidades compartidas del dominio PostNL (Pydantic v2).

Por qué aquí:
- Son los bloques con los que se arman peticiones y respuestas de todas las
  áreas (Customer, Address, Shipment, Timeframe, Location, Label...).
- Cada campo declara su nombre de cable con `wire(...)`; la serialización es
  genérica (ver `core.domain.schema`).

Nota:
- Todos los campos de cable son opcionales. Las fechas viajan como texto con
  el formato de PostNL (`dd-mm-YYYY` / `dd-mm-YYYY HH:MM:SS`).
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum, IntEnum
from uuid import uuid4

from postnl.core.domain.schema import Entity, wire


def _message_id() -> str:
    return uuid4().hex


def _message_timestamp() -> str:
    return datetime.now().strftime("%d-%m-%Y %H:%M:%S")


class Weekday(str, Enum):
    """Día de un `CutOffTime`; `00` aplica a todos los días."""

    ALL = "00"
    MONDAY = "01"
    TUESDAY = "02"
    WEDNESDAY = "03"
    THURSDAY = "04"
    FRIDAY = "05"
    SATURDAY = "06"
    SUNDAY = "07"

    def day_name(self) -> str | None:
        return None if self is Weekday.ALL else self.name.capitalize()


class PhaseCode(IntEnum):
    """Fase de un envío en la cadena de PostNL."""

    COLLECTION = 1
    SORTING = 2
    DISTRIBUTION = 3
    DELIVERY = 4


class Address(Entity):
    address_type: str | None = wire("AddressType")
    area: str | None = wire("Area")
    buildingname: str | None = wire("Buildingname")
    city: str | None = wire("City")
    company_name: str | None = wire("CompanyName")
    countrycode: str | None = wire("Countrycode")
    department: str | None = wire("Department")
    doorcode: str | None = wire("Doorcode")
    first_name: str | None = wire("FirstName")
    floor: str | None = wire("Floor")
    house_nr: str | None = wire("HouseNr")
    house_nr_ext: str | None = wire("HouseNrExt")
    name: str | None = wire("Name")
    region: str | None = wire("Region")
    remark: str | None = wire("Remark")
    street: str | None = wire("Street")
    street_house_nr_ext: str | None = wire("StreetHouseNrExt")
    zipcode: str | None = wire("Zipcode")


class Contact(Entity):
    contact_type: str | None = wire("ContactType")
    email: str | None = wire("Email")
    sms_nr: str | None = wire("SMSNr")
    tel_nr: str | None = wire("TelNr")


class Customer(Entity):
    address: Address | None = wire("Address")
    collection_location: str | None = wire("CollectionLocation")
    contact_person: str | None = wire("ContactPerson")
    customer_code: str | None = wire("CustomerCode")
    customer_number: str | None = wire("CustomerNumber")
    email: str | None = wire("Email")
    name: str | None = wire("Name")
    globalpack_barcode_type: str | None = wire("GlobalPackBarcodeType")
    globalpack_customer_code: str | None = wire("GlobalPackCustomerCode")


class Amount(Entity):
    account_name: str | None = wire("AccountName")
    amount_type: str | None = wire("AmountType")
    bic: str | None = wire("BIC")
    currency: str | None = wire("Currency")
    iban: str | None = wire("IBAN")
    reference: str | None = wire("Reference")
    transaction_number: str | None = wire("TransactionNumber")
    value: str | None = wire("Value")


class Dimension(Entity):
    height: str | None = wire("Height")
    length: str | None = wire("Length")
    volume: str | None = wire("Volume")
    weight: str | None = wire("Weight")
    width: str | None = wire("Width")


class Group(Entity):
    group_count: str | None = wire("GroupCount")
    group_sequence: str | None = wire("GroupSequence")
    group_type: str | None = wire("GroupType")
    main_barcode: str | None = wire("MainBarcode")


class ProductOption(Entity):
    characteristic: str | None = wire("Characteristic")
    option: str | None = wire("Option")


class Message(Entity):
    message_id: str | None = wire("MessageID", default_factory=_message_id)
    message_time_stamp: str | None = wire("MessageTimeStamp", default_factory=_message_timestamp)


class LabellingMessage(Message):
    printertype: str | None = wire("Printertype", default="GraphicFile|PDF")


class Label(Entity):
    content: str | None = wire("Content")
    contenttype: str | None = wire("Contenttype")
    labeltype: str | None = wire("Labeltype")
    output_type: str | None = wire("OutputType")


class Warning(Entity):  # noqa: A001 - nombre del tipo en el cable
    code: str | None = wire("Code")
    description: str | None = wire("Description")
    message: str | None = wire("Message")


class ErrorEntry(Entity):
    code: str | None = wire("Code")
    description: str | None = wire("Description")
    error_msg: str | None = wire("ErrorMsg")
    error_number: str | None = wire("ErrorNumber")


class Shipment(Entity):
    """Envío: se usa tanto al etiquetar/confirmar como al consultar estados."""

    addresses: list[Address] | None = wire("Addresses", item="Address")
    amounts: list[Amount] | None = wire("Amounts", item="Amount")
    barcode: str | None = wire("Barcode")
    collection_time_stamp_end: str | None = wire("CollectionTimeStampEnd")
    collection_time_stamp_start: str | None = wire("CollectionTimeStampStart")
    contacts: list[Contact] | None = wire("Contacts", item="Contact")
    content: str | None = wire("Content")
    cost_center: str | None = wire("CostCenter")
    customer_order_number: str | None = wire("CustomerOrderNumber")
    delivery_address: str | None = wire("DeliveryAddress")
    delivery_date: str | None = wire("DeliveryDate")
    dimension: Dimension | None = wire("Dimension")
    down_partner_barcode: str | None = wire("DownPartnerBarcode")
    down_partner_id: str | None = wire("DownPartnerID")
    down_partner_location: str | None = wire("DownPartnerLocation")
    groups: list[Group] | None = wire("Groups", item="Group")
    product_code_collect: str | None = wire("ProductCodeCollect")
    product_code_delivery: str | None = wire("ProductCodeDelivery")
    product_options: list[ProductOption] | None = wire("ProductOptions", item="ProductOption")
    receiver_date_of_birth: str | None = wire("ReceiverDateOfBirth")
    reference: str | None = wire("Reference")
    reference_collect: str | None = wire("ReferenceCollect")
    remark: str | None = wire("Remark")
    return_barcode: str | None = wire("ReturnBarcode")
    return_reference: str | None = wire("ReturnReference")
    # Filtros de consulta de estado.
    status_code: str | None = wire("StatusCode")
    phase_code: PhaseCode | None = wire("PhaseCode")
    date_from: str | None = wire("DateFrom")
    date_to: str | None = wire("DateTo")


class BarcodeSpec(Entity):
    type: str | None = wire("Type")
    range: str | None = wire("Range")
    serie: str | None = wire("Serie")


class CutOffTime(Entity):
    day: Weekday | None = wire("Day")
    time: str | None = wire("Time")
    available: bool | None = wire("Available")


class Coordinates(Entity):
    latitude: float | None = wire("Latitude")
    longitude: float | None = wire("Longitude")


class OpeningHours(Entity):
    monday: list[str] | None = wire("Monday")
    tuesday: list[str] | None = wire("Tuesday")
    wednesday: list[str] | None = wire("Wednesday")
    thursday: list[str] | None = wire("Thursday")
    friday: list[str] | None = wire("Friday")
    saturday: list[str] | None = wire("Saturday")
    sunday: list[str] | None = wire("Sunday")


class Location(Entity):
    """Criterios de búsqueda de puntos de recogida."""

    allow_sunday_sorting: bool | None = wire("AllowSundaySorting")
    delivery_date: str | None = wire("DeliveryDate")
    delivery_options: list[str] | None = wire("DeliveryOptions")
    opening_time: str | None = wire("OpeningTime")
    options: list[str] | None = wire("Options")
    city: str | None = wire("City")
    house_nr: str | None = wire("HouseNr")
    house_nr_ext: str | None = wire("HouseNrExt")
    postalcode: str | None = wire("Postalcode")
    street: str | None = wire("Street")
    coordinates_north_west: Coordinates | None = wire("CoordinatesNorthWest")
    coordinates_south_east: Coordinates | None = wire("CoordinatesSouthEast")
    location_code: str | None = wire("LocationCode")
    saleschannel: str | None = wire("Saleschannel")
    terminal_type: str | None = wire("TerminalType")
    retail_network_id: str | None = wire("RetailNetworkID")


class TimeframeTimeFrame(Entity):
    from_: str | None = wire("From")
    options: list[str] | None = wire("Options")
    to: str | None = wire("To")


class Timeframe(Entity):
    """Criterios de una consulta de franjas, y también un día de la respuesta."""

    city: str | None = wire("City")
    country_code: str | None = wire("CountryCode")
    date: str | None = wire("Date")
    end_date: str | None = wire("EndDate")
    house_nr: str | None = wire("HouseNr")
    house_nr_ext: str | None = wire("HouseNrExt")
    options: list[str] | None = wire("Options")
    postal_code: str | None = wire("PostalCode")
    start_date: str | None = wire("StartDate")
    street: str | None = wire("Street")
    sunday_sorting: bool | None = wire("SundaySorting")
    interval: str | None = wire("Interval")
    timeframe_range: str | None = wire("TimeframeRange")
    timeframes: list[TimeframeTimeFrame] | None = wire("Timeframes", item="TimeframeTimeFrame")


class ReasonNoTimeframe(Entity):
    code: str | None = wire("Code")
    date: str | None = wire("Date")
    description: str | None = wire("Description")
    options: list[str] | None = wire("Options")
    from_: str | None = wire("From")
    to: str | None = wire("To")


class ResponseLocation(Entity):
    address: Address | None = wire("Address")
    delivery_options: list[str] | None = wire("DeliveryOptions")
    distance: int | None = wire("Distance")
    latitude: float | None = wire("Latitude")
    longitude: float | None = wire("Longitude")
    name: str | None = wire("Name")
    opening_hours: OpeningHours | None = wire("OpeningHours")
    partner_name: str | None = wire("PartnerName")
    phone_number: str | None = wire("PhoneNumber")
    location_code: str | None = wire("LocationCode")
    retail_network_id: str | None = wire("RetailNetworkID")
    saleschannel: str | None = wire("Saleschannel")
    terminal_type: str | None = wire("TerminalType")
    pickup_time: str | None = wire("PickupTime")
    down_partner_id: str | None = wire("DownPartnerID")
    down_partner_location: str | None = wire("DownPartnerLocation")
    warnings: list[Warning] | None = wire("Warnings", item="Warning")


class GetLocationsResult(Entity):
    response_location: list[ResponseLocation] | None = wire("ResponseLocation", repeated=True)


class StatusInfo(Entity):
    current_phase_code: str | None = wire("CurrentPhaseCode")
    current_phase_description: str | None = wire("CurrentPhaseDescription")
    current_status_code: str | None = wire("CurrentStatusCode")
    current_status_description: str | None = wire("CurrentStatusDescription")
    current_status_time_stamp: str | None = wire("CurrentStatusTimeStamp")


class StatusEvent(Entity):
    code: str | None = wire("Code")
    description: str | None = wire("Description")
    destination_location_code: str | None = wire("DestinationLocationCode")
    location_code: str | None = wire("LocationCode")
    route_code: str | None = wire("RouteCode")
    route_name: str | None = wire("RouteName")
    time_stamp: str | None = wire("TimeStamp")


class OldStatus(Entity):
    code: str | None = wire("Code")
    description: str | None = wire("Description")
    phase_code: str | None = wire("PhaseCode")
    phase_description: str | None = wire("PhaseDescription")
    time_stamp: str | None = wire("TimeStamp")


class Expectation(Entity):
    eta_from: str | None = wire("ETAFrom")
    eta_to: str | None = wire("ETATo")


class StatusShipment(Entity):
    addresses: list[Address] | None = wire("Address", item="Address")
    amounts: list[Amount] | None = wire("Amount", item="Amount")
    barcode: str | None = wire("Barcode")
    delivery_date: str | None = wire("DeliveryDate")
    dimension: Dimension | None = wire("Dimension")
    events: list[StatusEvent] | None = wire("Event", item="CompleteStatusResponseEvent")
    expectation: Expectation | None = wire("Expectation")
    groups: list[Group] | None = wire("Groups", item="Group")
    main_barcode: str | None = wire("MainBarcode")
    old_statuses: list[OldStatus] | None = wire("OldStatus", item="CompleteStatusResponseOldStatus")
    product_code: str | None = wire("ProductCode")
    product_description: str | None = wire("ProductDescription")
    product_options: list[ProductOption] | None = wire("ProductOptions", item="ProductOption")
    reference: str | None = wire("Reference")
    shipment_amount: str | None = wire("ShipmentAmount")
    shipment_counter: str | None = wire("ShipmentCounter")
    status: StatusInfo | None = wire("Status")
    warnings: list[Warning] | None = wire("Warnings", item="Warning")


class Signature(Entity):
    barcode: str | None = wire("Barcode")
    signature_date: str | None = wire("SignatureDate")
    signature_image: str | None = wire("SignatureImage")
