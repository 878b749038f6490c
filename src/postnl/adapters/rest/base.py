"""Piezas comunes de la estrategia REST.

Por qué aquí:
- Todos los builders REST comparten base URL, versión y cabecera `apikey`.
- Todos los processors REST validan igual los cuerpos de error de CIF.

Formatos de error que devuelve la API:
- `{"fault": {"faultstring": ..., "detail": {"errorcode": ...}}}`
- `{"Errors": [{"Code": ..., "Description": ...}]}` (o envuelto en `Error`)
- `[{"ErrorMsg": ..., "ErrorNumber": ...}]` (lista en la raíz)
"""

from __future__ import annotations

import json
from typing import Any, Mapping

import httpx

from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.schema import Entity, deserialize, serialize
from postnl.core.domain.union import normalized
from postnl.core.errors import CifDownError, CifError, NotFoundError, ResponseError

LIVE_BASE_URL = "https://api.postnl.nl"
SANDBOX_BASE_URL = "https://api-sandbox.postnl.nl"


def base_url(sandbox: bool) -> str:
    return SANDBOX_BASE_URL if sandbox else LIVE_BASE_URL


def query_bool(value: bool) -> str:
    return "true" if value else "false"


class RestRequestBuilder:
    """Base de los builders REST: funciones puras de entidad a `httpx.Request`."""

    def __init__(self, *, api_key: str, sandbox: bool, version: str) -> None:
        self.api_key = api_key
        self.sandbox = sandbox
        self.version = version

    def url(self, path: str) -> str:
        return f"{base_url(self.sandbox)}/shipment/v{self.version}/{path.lstrip('/')}"

    def headers(self) -> dict[str, str]:
        return {"apikey": self.api_key, "Accept": "application/json"}

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> httpx.Request:
        clean = {k: v for k, v in (params or {}).items() if v is not None and v != []}
        return httpx.Request("GET", self.url(path), params=clean, headers=self.headers())

    def post(
        self,
        path: str,
        entity: Entity,
        params: Mapping[str, Any] | None = None,
    ) -> httpx.Request:
        body = json.dumps(serialize(entity, ApiMode.REST), ensure_ascii=False)
        headers = {**self.headers(), "Content-Type": "application/json;charset=UTF-8"}
        return httpx.Request(
            "POST",
            self.url(path),
            params={k: v for k, v in (params or {}).items() if v is not None},
            content=body.encode("utf-8"),
            headers=headers,
        )


def _error_entry(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, Mapping):
        return {"message": str(raw), "code": None, "description": None}
    view = normalized(raw)
    message = view.get("errormsg") or view.get("message") or view.get("description") or view.get("faultstring")
    code = view.get("errornumber") or view.get("code") or view.get("errorcode")
    return {
        "message": str(message) if message is not None else None,
        "code": str(code) if code is not None else None,
        "description": view.get("description"),
    }


def _as_entries(raw: Any) -> list[Any]:
    if isinstance(raw, Mapping):
        view = normalized(raw)
        if "error" in view and len(view) == 1:
            raw = view["error"]
    return raw if isinstance(raw, list) else [raw]


def extract_errors(payload: Any) -> list[dict[str, Any]]:
    """Entradas de error de un cuerpo REST; lista vacía si no hay."""

    if isinstance(payload, list):
        if payload and all(isinstance(e, Mapping) and "ErrorMsg" in e for e in payload):
            return [_error_entry(e) for e in payload]
        return []
    if not isinstance(payload, Mapping):
        return []

    view = normalized(payload)
    fault = view.get("fault")
    if isinstance(fault, Mapping):
        fault_view = normalized(fault)
        detail = fault_view.get("detail")
        code = normalized(detail).get("errorcode") if isinstance(detail, Mapping) else None
        return [
            {
                "message": fault_view.get("faultstring"),
                "code": str(code) if code is not None else None,
                "description": None,
            }
        ]
    for key in ("errors", "error"):
        if view.get(key):
            return [_error_entry(e) for e in _as_entries(view[key])]
    return []


def _decode_json(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def read_body(response: httpx.Response) -> Any:
    """Valida la respuesta y devuelve el JSON decodificado.

    - Cuerpo de error de CIF (con cualquier status): `CifError`
      (`CifDownError` si el status es 503).
    - Status no exitoso sin cuerpo legible: `ResponseError`.
    - Éxito con cuerpo que no es JSON: `ResponseError`.
    """

    payload = _decode_json(response)
    errors = extract_errors(payload)
    if errors:
        if response.status_code == 503:
            raise CifDownError(errors, response=response)
        raise CifError(errors, response=response)
    if not response.is_success:
        raise ResponseError(f"Unexpected HTTP status {response.status_code}", response=response)
    if payload is None:
        raise ResponseError("Response body is not valid JSON", response=response)
    return payload


def read_entity(response: httpx.Response, entity_type: type[Entity], *required: str) -> Any:
    """`read_body` + deserialización; `NotFoundError` si falta toda clave requerida."""

    payload = read_body(response)
    if not isinstance(payload, Mapping):
        raise NotFoundError(f"Response holds no {entity_type.__name__}")
    if required:
        view = normalized(payload)
        if not any(view.get(k.lower()) is not None for k in required):
            raise NotFoundError(f"Response holds no {entity_type.__name__}")
    return deserialize(payload, entity_type)
