"""Contrato de transporte HTTP.

Por qué Protocol:
- Los servicios solo necesitan "enviar una petición" y "enviar un lote".
- En tests se sustituye por un cliente sobre `httpx.MockTransport` o por un
  doble que registra las llamadas, sin herencia.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable

import httpx

from postnl.core.errors import HttpClientError


@runtime_checkable
class HttpClient(Protocol):
    """Contrato mínimo de transporte.

    Reglas de diseño:
    - `execute` lanza `HttpClientError` si el transporte falla; un status HTTP
      de error NO es un fallo de transporte.
    - `execute_all` nunca lanza por un id concreto: el fallo queda en el mapa.
    """

    def execute(self, request: httpx.Request) -> httpx.Response:
        ...

    def execute_all(
        self, requests: Mapping[str, httpx.Request]
    ) -> dict[str, httpx.Response | HttpClientError]:
        ...
