"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y logging para todas las áreas de la API.
- Facilita testeo: se inyecta un `httpx.MockTransport` y no hay red.

Modelo de concurrencia:
- `execute` es síncrono (`httpx.Client`).
- `execute_all` corre el lote en un `httpx.AsyncClient` bajo `asyncio.run`,
  limitado por un semáforo; no debe llamarse desde un event loop activo.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Mapping

import httpx

from postnl.core.config import PostNLSettings
from postnl.core.errors import HttpClientError

logger = logging.getLogger(__name__)


def _default_headers(settings: PostNLSettings, extra_headers: dict[str, str] | None) -> dict[str, str]:
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json, text/xml;q=0.9, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return headers


def build_client(
    settings: PostNLSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros."""

    settings = settings or PostNLSettings()
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=_default_headers(settings, extra_headers),
        transport=transport,
    )


def build_async_client(
    settings: PostNLSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que lote y petición suelta se comporten igual.
    - Facilita testeo (transport inyectable).
    """

    settings = settings or PostNLSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=_default_headers(settings, extra_headers),
        transport=transport,
    )


class HttpxClient:
    """Implementación de `HttpClient` sobre httpx.

    `transport` (opcional) se usa tanto en el cliente síncrono como en el
    asíncrono; `httpx.MockTransport` implementa ambos.
    """

    def __init__(
        self,
        settings: PostNLSettings | None = None,
        *,
        transport: httpx.MockTransport | None = None,
    ) -> None:
        self.settings = settings or PostNLSettings()
        self._transport = transport
        self._timeout = httpx.Timeout(self.settings.http_timeout_seconds)
        self._client = build_client(self.settings, transport=transport)

    def _prepare(self, request: httpx.Request) -> httpx.Request:
        # Un `httpx.Request` construido a mano no lleva timeout propio.
        request.extensions.setdefault("timeout", self._timeout.as_dict())
        request.headers.setdefault("User-Agent", self.settings.user_agent)
        return request

    def execute(self, request: httpx.Request) -> httpx.Response:
        request = self._prepare(request)
        logger.debug("%s %s", request.method, request.url)
        try:
            response = self._client.send(request)
            response.read()
        except httpx.HTTPError as exc:
            raise HttpClientError(f"{request.method} {request.url} failed: {exc}", request=request) from exc
        logger.debug("%s %s -> %s", request.method, request.url, response.status_code)
        return response

    def execute_all(
        self, requests: Mapping[str, httpx.Request]
    ) -> dict[str, httpx.Response | HttpClientError]:
        if not requests:
            return {}
        return asyncio.run(self._execute_all(requests))

    async def _execute_all(
        self, requests: Mapping[str, httpx.Request]
    ) -> dict[str, httpx.Response | HttpClientError]:
        sem = asyncio.Semaphore(max(1, self.settings.max_concurrency))
        results: dict[str, httpx.Response | HttpClientError] = {}

        async with build_async_client(self.settings, transport=self._transport) as client:

            async def send_one(key: str, request: httpx.Request) -> None:
                request = self._prepare(request)
                async with sem:
                    logger.debug("[%s] %s %s", key, request.method, request.url)
                    try:
                        response = await client.send(request)
                        await response.aread()
                    except Exception as exc:
                        # Cualquier fallo se queda en su id; gather no debe abortar el lote.
                        logger.warning("[%s] %s %s failed: %s", key, request.method, request.url, exc)
                        results[key] = HttpClientError(
                            f"{request.method} {request.url} failed: {exc}", request=request
                        )
                        return
                    results[key] = response

            await asyncio.gather(*(send_one(k, r) for k, r in requests.items()))

        # Mismo orden que la entrada.
        return {key: results[key] for key in requests}

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpxClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
