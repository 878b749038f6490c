"""Fachada del cliente PostNL.

Por qué una fachada:
- Reúne los servicios por área bajo un mismo cliente, transporte, caché y
  modo de API.
- Rellena el `Customer` configurado en las peticiones que lo necesitan.
- Añade atajos que la API no tiene (barcode por país, franjas + ubicaciones +
  fecha de entrega en un solo lote).
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence, TypeVar

import httpx

from postnl.adapters.http_client import HttpxClient
from postnl.adapters.response_cache import MemoryResponseCache
from postnl.core.config import PostNLSettings
from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.entities import BarcodeSpec, Customer, LabellingMessage, Shipment
from postnl.core.domain.requests import (
    Checkout,
    CompleteStatus,
    Confirming,
    CurrentStatus,
    GenerateBarcode,
    GenerateLabel,
    GetDeliveryDate,
    GetLocation,
    GetLocationsInArea,
    GetNearestLocations,
    GetSentDateRequest,
    GetSignature,
    GetTimeframes,
    GetUpdatedShipments,
    RequestEntity,
)
from postnl.core.domain.responses import (
    CheckoutResponse,
    CompleteStatusResponse,
    ConfirmingResponseShipment,
    CurrentStatusResponse,
    GenerateLabelResponse,
    GetDeliveryDateResponse,
    GetLocationResponse,
    GetLocationsInAreaResponse,
    GetNearestLocationsResponse,
    GetSentDateResponse,
    GetSignatureResponseSignature,
    ResponseTimeframes,
    UpdatedShipmentsResponse,
)
from postnl.core.errors import (
    InvalidBarcodeError,
    InvalidConfigurationError,
    NotFoundError,
    PostNLError,
)
from postnl.core.interfaces.cache import ResponseCache
from postnl.core.interfaces.transport import HttpClient
from postnl.core.services.barcode import BarcodeService
from postnl.core.services.base import BaseService, Batch, keyed_batch
from postnl.core.services.batch import dispatch_batch
from postnl.core.services.checkout import CheckoutService
from postnl.core.services.confirming import ConfirmingService
from postnl.core.services.delivery_date import DeliveryDateService
from postnl.core.services.labelling import LabellingService
from postnl.core.services.location import LocationService
from postnl.core.services.shipping_status import ShippingStatusService
from postnl.core.services.timeframe import TimeframeService

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=RequestEntity)

# Destinos con barcode EPS (3S + rango del cliente); el resto usa GlobalPack.
EU_COUNTRIES = frozenset(
    {
        "AT", "BE", "BG", "CY", "CZ", "DE", "DK", "EE", "ES", "FI", "FR", "GR", "HR", "HU",
        "IE", "IT", "LT", "LU", "LV", "MT", "PL", "PT", "RO", "SE", "SI", "SK",
    }
)


def find_barcode_serie(type: str, range: str, eps: bool) -> str:
    """Serie de barcode para un tipo y rango.

    - `2S`: `0000000-9999999`.
    - `3S` EPS: según la longitud del rango (4, 3 o 1 caracteres).
    - `3S` nacional: `987000000-987600000` con rango de 4, si no `0000000-9999999`.
    - Cualquier otro tipo es GlobalPack: `0000-9999`.
    """

    if type == "2S":
        return "0000000-9999999"
    if type == "3S":
        if eps:
            series = {4: "0000000-9999999", 3: "10000000-20000000", 1: "5200000000-5299999999"}
            try:
                return series[len(range)]
            except KeyError:
                raise InvalidBarcodeError(f"No EPS barcode serie for range {range!r}") from None
        return "987000000-987600000" if len(range) == 4 else "0000000-9999999"
    return "0000-9999"


def customer_from_settings(settings: PostNLSettings) -> Customer:
    return Customer(
        customer_number=settings.customer_number,
        customer_code=settings.customer_code,
        collection_location=settings.collection_location,
        contact_person=settings.contact_person,
        globalpack_barcode_type=settings.globalpack_barcode_type,
        globalpack_customer_code=settings.globalpack_customer_code,
    )


class PostNL:
    """Cliente unificado (REST o SOAP legacy) de la API de PostNL."""

    def __init__(
        self,
        customer: Customer | None = None,
        api_key: str | None = None,
        *,
        sandbox: bool | None = None,
        mode: ApiMode | None = None,
        settings: PostNLSettings | None = None,
        http_client: HttpClient | None = None,
        cache: ResponseCache | None = None,
        transport: httpx.MockTransport | None = None,
    ) -> None:
        self.settings = settings or PostNLSettings()
        api_key = api_key or self.settings.api_key_value()
        if not api_key:
            raise InvalidConfigurationError("An API key is required (set POSTNL_API_KEY)")

        self.api_key = api_key
        self.customer = customer or customer_from_settings(self.settings)
        self.sandbox = self.settings.sandbox if sandbox is None else sandbox
        self.mode = mode or self.settings.api_mode
        self.http_client: HttpClient = http_client or HttpxClient(self.settings, transport=transport)
        if cache is None and self.settings.cache_enabled():
            cache = MemoryResponseCache(
                ttl_seconds=self.settings.cache_ttl_seconds,
                max_items=self.settings.cache_max_items,
            )
        self.cache = cache

        self.barcode_service = self._service(BarcodeService)
        self.labelling_service = self._service(LabellingService)
        self.confirming_service = self._service(ConfirmingService)
        self.shipping_status_service = self._service(ShippingStatusService)
        self.location_service = self._service(LocationService)
        self.timeframe_service = self._service(TimeframeService)
        self.delivery_date_service = self._service(DeliveryDateService)
        self.checkout_service = self._service(CheckoutService)

    def _service(self, service_cls: type[BaseService]) -> Any:
        return service_cls(
            api_key=self.api_key,
            sandbox=self.sandbox,
            http_client=self.http_client,
            api_mode=self.mode,
            cache=self.cache,
        )

    @property
    def services(self) -> tuple[BaseService, ...]:
        return (
            self.barcode_service,
            self.labelling_service,
            self.confirming_service,
            self.shipping_status_service,
            self.location_service,
            self.timeframe_service,
            self.delivery_date_service,
            self.checkout_service,
        )

    def set_api_mode(self, mode: ApiMode) -> None:
        logger.debug("Switching API mode to %s", mode.label())
        self.mode = mode
        for service in self.services:
            service.set_api_mode(mode)

    def close(self) -> None:
        close = getattr(self.http_client, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "PostNL":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _with_customer(self, request: E) -> E:
        if getattr(request, "customer", "absent") is None:
            return request.model_copy(update={"customer": self.customer})
        return request

    # --- barcodes ----------------------------------------------------------

    def generate_barcode(
        self,
        type: str = "3S",
        range: str | None = None,
        serie: str | None = None,
        eps: bool = False,
    ) -> str:
        range = range or self.customer.customer_code
        if not range:
            raise InvalidConfigurationError("A barcode range (or the customer code) is required")
        serie = serie or find_barcode_serie(type, range, eps)
        request = GenerateBarcode(
            barcode=BarcodeSpec(type=type, range=range, serie=serie),
            customer=self.customer,
        )
        return self.barcode_service.generate_barcode(request)

    def _barcode_spec_for_country(self, iso: str) -> BarcodeSpec:
        iso = iso.upper()
        if iso == "NL":
            type, range, eps = "3S", self.customer.customer_code, False
        elif iso in EU_COUNTRIES:
            type, range, eps = "3S", self.customer.customer_code, True
        else:
            type = self.customer.globalpack_barcode_type
            range = self.customer.globalpack_customer_code
            eps = False
            if not type or not range:
                raise InvalidConfigurationError(
                    "GlobalPack barcodes need globalpack_barcode_type and globalpack_customer_code"
                )
        if not range:
            raise InvalidConfigurationError("Barcodes for NL/EU need the customer code")
        return BarcodeSpec(type=type, range=range, serie=find_barcode_serie(type, range, eps))

    def generate_barcode_by_country_code(self, iso: str) -> str:
        spec = self._barcode_spec_for_country(iso)
        return self.barcode_service.generate_barcode(GenerateBarcode(barcode=spec, customer=self.customer))

    def generate_barcodes_by_country_codes(self, counts: Mapping[str, int]) -> dict[str, list[str]]:
        """`{"NL": 2, "DE": 1}` -> `{"NL": [b1, b2], "DE": [b3]}` en un solo lote."""

        requests: list[GenerateBarcode] = []
        owners: dict[str, str] = {}
        for iso, count in counts.items():
            spec = self._barcode_spec_for_country(iso)
            for index in range(count):
                request = GenerateBarcode(id=f"{iso}-{index}", barcode=spec, customer=self.customer)
                requests.append(request)
                owners[request.id] = iso

        barcodes = self.barcode_service.generate_barcodes(requests, strict=True)
        grouped: dict[str, list[str]] = {iso: [] for iso in counts}
        for key, barcode in barcodes.items():
            grouped[owners[key]].append(barcode)
        return grouped

    # --- etiquetas y confirmación --------------------------------------------

    def _label_request(self, shipment: Shipment, printertype: str) -> GenerateLabel:
        request = GenerateLabel(
            customer=self.customer,
            message=LabellingMessage(printertype=printertype),
            shipments=[shipment],
        )
        if shipment.barcode:
            request.id = shipment.barcode
        return request

    def generate_label(
        self,
        shipment: Shipment,
        printertype: str = "GraphicFile|PDF",
        confirm: bool = True,
    ) -> GenerateLabelResponse:
        return self.labelling_service.generate_label(self._label_request(shipment, printertype), confirm)

    def generate_labels(
        self,
        shipments: Sequence[Shipment],
        printertype: str = "GraphicFile|PDF",
        confirm: bool = True,
        *,
        strict: bool = False,
    ) -> dict[str, GenerateLabelResponse | PostNLError]:
        """Una etiqueta por envío; el resultado va indexado por barcode."""

        requests = [self._label_request(s, printertype) for s in shipments]
        return self.labelling_service.generate_labels(requests, confirm, strict=strict)

    def _confirm_request(self, shipment: Shipment) -> Confirming:
        request = Confirming(customer=self.customer, shipments=[shipment])
        if shipment.barcode:
            request.id = shipment.barcode
        return request

    def confirm_shipment(self, shipment: Shipment) -> ConfirmingResponseShipment:
        confirmed = self.confirming_service.confirm_shipment(self._confirm_request(shipment))
        if not confirmed:
            raise NotFoundError("Response holds no confirmed shipment")
        return confirmed[0]

    def confirm_shipments(
        self, shipments: Sequence[Shipment], *, strict: bool = False
    ) -> dict[str, ConfirmingResponseShipment | PostNLError]:
        results = self.confirming_service.confirm_shipments(
            [self._confirm_request(s) for s in shipments], strict=strict
        )
        out: dict[str, ConfirmingResponseShipment | PostNLError] = {}
        for key, value in results.items():
            if isinstance(value, list):
                out[key] = value[0] if value else NotFoundError("Response holds no confirmed shipment")
            else:
                out[key] = value
        return out

    # --- estado --------------------------------------------------------------

    def current_status(self, current_status: CurrentStatus) -> CurrentStatusResponse:
        return self.shipping_status_service.current_status(self._with_customer(current_status))

    def current_statuses(
        self, current_statuses: Batch[CurrentStatus], *, strict: bool = False
    ) -> dict[str, CurrentStatusResponse | PostNLError]:
        return self.shipping_status_service.current_statuses(
            {key: self._with_customer(s) for key, s in keyed_batch(current_statuses).items()},
            strict=strict,
        )

    def complete_status(self, complete_status: CompleteStatus) -> CompleteStatusResponse:
        return self.shipping_status_service.complete_status(self._with_customer(complete_status))

    def complete_statuses(
        self, complete_statuses: Batch[CompleteStatus], *, strict: bool = False
    ) -> dict[str, CompleteStatusResponse | PostNLError]:
        return self.shipping_status_service.complete_statuses(
            {key: self._with_customer(s) for key, s in keyed_batch(complete_statuses).items()},
            strict=strict,
        )

    def get_signature(self, get_signature: GetSignature) -> GetSignatureResponseSignature:
        return self.shipping_status_service.get_signature(self._with_customer(get_signature))

    def get_signatures(
        self, get_signatures: Batch[GetSignature], *, strict: bool = False
    ) -> dict[str, GetSignatureResponseSignature | PostNLError]:
        return self.shipping_status_service.get_signatures(
            {key: self._with_customer(s) for key, s in keyed_batch(get_signatures).items()},
            strict=strict,
        )

    def get_updated_shipments(
        self, date_from: str | None = None, date_to: str | None = None
    ) -> list[UpdatedShipmentsResponse]:
        request = GetUpdatedShipments(customer=self.customer, date_from=date_from, date_to=date_to)
        return self.shipping_status_service.get_updated_shipments(request)

    # --- ubicaciones, franjas, fechas, checkout ------------------------------

    def get_nearest_locations(self, get_nearest: GetNearestLocations) -> GetNearestLocationsResponse:
        return self.location_service.get_nearest_locations(get_nearest)

    def get_locations_in_area(self, get_in_area: GetLocationsInArea) -> GetLocationsInAreaResponse:
        return self.location_service.get_locations_in_area(get_in_area)

    def get_location(self, get_location: GetLocation) -> GetLocationResponse:
        return self.location_service.get_location(get_location)

    def get_timeframes(self, get_timeframes: GetTimeframes) -> ResponseTimeframes:
        return self.timeframe_service.get_timeframes(get_timeframes)

    def get_delivery_date(self, get_delivery_date: GetDeliveryDate) -> GetDeliveryDateResponse:
        return self.delivery_date_service.get_delivery_date(get_delivery_date)

    def get_sent_date(self, get_sent_date: GetSentDateRequest) -> GetSentDateResponse:
        return self.delivery_date_service.get_sent_date(get_sent_date)

    def checkout(self, checkout: Checkout) -> CheckoutResponse:
        return self.checkout_service.checkout(checkout)

    def get_timeframes_and_nearest_locations(
        self,
        get_timeframes: GetTimeframes,
        get_nearest_locations: GetNearestLocations,
        get_delivery_date: GetDeliveryDate,
    ) -> dict[str, Any]:
        """Franjas, ubicaciones cercanas y fecha de entrega en un único lote.

        Devuelve `{"timeframes", "locations", "delivery_date"}`. Cualquier fallo
        (de transporte o de proceso) se propaga.
        Pasa por la caché de respuestas igual que las demás lecturas.
        """

        timeframe_builder, timeframe_processor = self.timeframe_service.strategy
        location_builder, location_processor = self.location_service.strategy
        delivery_builder, delivery_processor = self.delivery_date_service.strategy

        # {nombre del resultado: (petición, request http, processor)}
        plan = {
            "timeframes": (
                get_timeframes,
                timeframe_builder.build_get_timeframes_request(get_timeframes),
                timeframe_processor.process_get_timeframes_response,
            ),
            "locations": (
                get_nearest_locations,
                location_builder.build_get_nearest_locations_request(get_nearest_locations),
                location_processor.process_get_nearest_locations_response,
            ),
            "delivery_date": (
                get_delivery_date,
                delivery_builder.build_get_delivery_date_request(get_delivery_date),
                delivery_processor.process_get_delivery_date_response,
            ),
        }
        # El lote va por id de correlación, igual que la caché; ids repetidos fallan aquí.
        keyed = keyed_batch([entity for entity, _, _ in plan.values()])
        requests = {entity.id: request for entity, request, _ in plan.values()}
        outcomes = dispatch_batch(
            {key: requests[key] for key in keyed},
            http_client=self.http_client,
            cache=self.cache,
        )

        results: dict[str, Any] = {}
        for name, (entity, _, process) in plan.items():
            outcome = outcomes[entity.id]
            if isinstance(outcome, PostNLError):
                raise outcome
            results[name] = process(outcome)
        return results
