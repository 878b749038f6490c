"""Piezas comunes de la estrategia SOAP.

Sobre:
- `soap:Header` lleva un WS-Security `UsernameToken` con la API key como
  `Password`.
- `soap:Body` lleva `services:{Operación}` con los campos de la petición en
  el namespace `domain` (ver `serialize(..., ApiMode.LEGACY, prefix="domain")`).
- `SOAPAction`: `http://postnl.nl/cif/services/{Servicio}/I{Servicio}/{Operación}`.

Lectura:
- `xmltodict.parse` con un postprocessor que quita prefijos y atributos, así
  que el resto del código solo ve nombres locales.
- `soap:Fault` con `CifException` -> `CifError` (`CifDownError` si 503).
"""

from __future__ import annotations

from typing import Any, Mapping
from xml.parsers.expat import ExpatError

import httpx
import xmltodict

from postnl.adapters.rest.base import base_url
from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.schema import ARRAY_PREFIX, Entity, deserialize, local_name, serialize
from postnl.core.domain.union import normalized
from postnl.core.errors import CifDownError, CifError, NotFoundError, ResponseError

SOAP_ENVELOPE_NS = "http://schemas.xmlsoap.org/soap/envelope/"
WSSE_NS = "http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-secext-1.0.xsd"
ARRAYS_NS = "http://schemas.microsoft.com/2003/10/Serialization/Arrays"
SERVICES_NS = "http://postnl.nl/cif/services/{service}/"
DOMAIN_NS = "http://postnl.nl/cif/domain/{service}/"
SOAP_ACTION = "http://postnl.nl/cif/services/{service}/I{service}/{operation}"

DOMAIN_PREFIX = "domain"


class SoapRequestBuilder:
    """Base de los builders SOAP.

    `service` es el nombre del web service de CIF (p.ej. `BarcodeWebService`);
    `endpoint` la ruta REST del área, a la que se añade `/soap`.
    """

    service: str = ""
    endpoint: str = ""

    def __init__(self, *, api_key: str, sandbox: bool, version: str) -> None:
        self.api_key = api_key
        self.sandbox = sandbox
        self.version = version

    def url(self) -> str:
        return f"{base_url(self.sandbox)}/shipment/v{self.version}/{self.endpoint}/soap"

    def envelope(self, operation: str, entity: Entity) -> str:
        body = serialize(entity, ApiMode.LEGACY, prefix=DOMAIN_PREFIX)
        document = {
            "soap:Envelope": {
                "@xmlns:soap": SOAP_ENVELOPE_NS,
                "@xmlns:services": SERVICES_NS.format(service=self.service),
                "@xmlns:domain": DOMAIN_NS.format(service=self.service),
                f"@xmlns:{ARRAY_PREFIX}": ARRAYS_NS,
                "soap:Header": {
                    "wsse:Security": {
                        "@xmlns:wsse": WSSE_NS,
                        "wsse:UsernameToken": {"wsse:Password": self.api_key},
                    }
                },
                "soap:Body": {f"services:{operation}": body},
            }
        }
        return xmltodict.unparse(document, encoding="utf-8")

    def post(self, operation: str, entity: Entity) -> httpx.Request:
        headers = {
            "SOAPAction": f'"{SOAP_ACTION.format(service=self.service, operation=operation)}"',
            "Content-Type": "text/xml;charset=UTF-8",
            "Accept": "text/xml",
        }
        return httpx.Request(
            "POST",
            self.url(),
            content=self.envelope(operation, entity).encode("utf-8"),
            headers=headers,
        )


def _strip_names(path: Any, key: str, value: Any) -> tuple[str, Any] | None:
    if key.startswith("@"):
        return None
    return local_name(key), value


def parse_envelope(text: str) -> dict[str, Any] | None:
    """Contenido de `soap:Body` con nombres locales, o None si no es un sobre SOAP."""

    try:
        document = xmltodict.parse(text, postprocessor=_strip_names)
    except ExpatError:
        return None
    envelope = document.get("Envelope") if isinstance(document, Mapping) else None
    body = envelope.get("Body") if isinstance(envelope, Mapping) else None
    return dict(body) if isinstance(body, Mapping) else None


def _fault_errors(fault: Mapping[str, Any]) -> list[dict[str, Any]]:
    view = normalized(fault)
    detail = view.get("detail")
    exception = normalized(detail).get("cifexception") if isinstance(detail, Mapping) else None
    errors_node = normalized(exception).get("errors") if isinstance(exception, Mapping) else None
    data = normalized(errors_node).get("exceptiondata") if isinstance(errors_node, Mapping) else None
    items = data if isinstance(data, list) else [data] if data else []

    errors = []
    for item in items:
        item_view = normalized(item) if isinstance(item, Mapping) else {}
        errors.append(
            {
                "message": item_view.get("errormsg") or item_view.get("description"),
                "code": item_view.get("errornumber"),
                "description": item_view.get("description"),
            }
        )
    if not errors:
        errors.append({"message": view.get("faultstring"), "code": view.get("faultcode"), "description": None})
    return errors


def read_body(response: httpx.Response) -> dict[str, Any]:
    """Valida la respuesta SOAP y devuelve el contenido de `Body`."""

    body = parse_envelope(response.text) if response.content else None
    if body is not None:
        fault = normalized(body).get("fault")
        if isinstance(fault, Mapping):
            errors = _fault_errors(fault)
            if response.status_code == 503:
                raise CifDownError(errors, response=response)
            raise CifError(errors, response=response)
    if not response.is_success:
        raise ResponseError(f"Unexpected HTTP status {response.status_code}", response=response)
    if body is None:
        raise ResponseError("Response body is not a SOAP envelope", response=response)
    return body


def response_element(response: httpx.Response, name: str) -> dict[str, Any]:
    """Elemento `name` dentro de `Body`; `NotFoundError` si no viene."""

    element = normalized(read_body(response)).get(name.lower())
    if not isinstance(element, Mapping):
        raise NotFoundError(f"Response holds no {name}")
    return dict(element)


def read_entity(response: httpx.Response, name: str, entity_type: type[Entity]) -> Any:
    return deserialize(response_element(response, name), entity_type)
