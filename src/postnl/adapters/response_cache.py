"""Caché de respuestas en memoria (cachetools).

Por qué cachetools:
- `TTLCache` resuelve expiración y tamaño máximo sin hilos ni timers.
- Las escrituras diferidas (`save_deferred`) se acumulan en un buffer y se
  vuelcan juntas en `commit`, como hace un lote tras recibir sus respuestas.

Formato del blob: JSON `{"status", "headers", "body"}` con el body como texto.
Un blob ilegible se trata como miss (nunca rompe la operación).
"""

from __future__ import annotations

import json
import logging
import time
from typing import Callable

import httpx
from cachetools import TTLCache

logger = logging.getLogger(__name__)


class MemoryResponseCache:
    def __init__(
        self,
        *,
        ttl_seconds: float = 300.0,
        max_items: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store: TTLCache[str, str] = TTLCache(maxsize=max_items, ttl=ttl_seconds, timer=timer)
        self._pending: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        self._store[key] = value

    def save_deferred(self, key: str, value: str) -> None:
        self._pending[key] = value

    def commit(self) -> None:
        if self._pending:
            logger.debug("Committing %d cached responses", len(self._pending))
        for key, value in self._pending.items():
            self._store[key] = value
        self._pending.clear()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store


def dump_response(response: httpx.Response) -> str:
    """Serializa una respuesta para la caché."""

    return json.dumps(
        {
            "status": response.status_code,
            "headers": dict(response.headers),
            "body": response.text,
        },
        ensure_ascii=False,
    )


def load_response(blob: str | None) -> httpx.Response | None:
    """Reconstruye una respuesta cacheada; None si el blob no se puede leer."""

    if not blob:
        return None
    try:
        data = json.loads(blob)
        headers = {
            k: v
            for k, v in (data.get("headers") or {}).items()
            # El body se guarda ya decodificado.
            if k.lower() not in ("content-encoding", "content-length", "transfer-encoding")
        }
        return httpx.Response(
            status_code=int(data["status"]),
            headers=headers,
            content=str(data.get("body") or "").encode("utf-8"),
        )
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        logger.debug("Ignoring unreadable cache blob: %s", exc)
        return None
