"""Despacho de lotes con caché.

Reglas:
- Un id con blob en caché no pasa por el transporte.
- El resto va en un único `execute_all`.
- Las respuestas 2xx nuevas se guardan con `save_deferred` y se vuelcan con
  un solo `commit` al final.
- El fallo de transporte de un id queda en su entrada del resultado; el resto
  del lote sigue.
"""

from __future__ import annotations

import logging
from typing import Mapping

import httpx

from postnl.adapters.response_cache import dump_response, load_response
from postnl.core.errors import HttpClientError
from postnl.core.interfaces.cache import ResponseCache
from postnl.core.interfaces.transport import HttpClient

logger = logging.getLogger(__name__)


def dispatch_batch(
    requests: Mapping[str, httpx.Request],
    *,
    http_client: HttpClient,
    cache: ResponseCache | None = None,
) -> dict[str, httpx.Response | HttpClientError]:
    """Resuelve un lote `{id: request}` en `{id: response | HttpClientError}` (mismo orden)."""

    results: dict[str, httpx.Response | HttpClientError] = {}
    misses: dict[str, httpx.Request] = {}

    for key, request in requests.items():
        cached = load_response(cache.get(key)) if cache is not None else None
        if cached is not None:
            logger.debug("[%s] cache hit", key)
            results[key] = cached
        else:
            misses[key] = request

    if misses:
        fresh = http_client.execute_all(misses)
        for key, outcome in fresh.items():
            if isinstance(outcome, httpx.Response) and cache is not None and outcome.is_success:
                cache.save_deferred(key, dump_response(outcome))
            results[key] = outcome
        if cache is not None:
            cache.commit()

    return {key: results[key] for key in requests}
