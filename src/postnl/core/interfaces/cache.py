"""Contrato de caché de respuestas.

Claves: ids de correlación. Valores: blobs de texto (respuesta serializada).
La expiración es cosa de la implementación.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ResponseCache(Protocol):
    def get(self, key: str) -> str | None:
        """Blob guardado bajo `key`, o None si no hay (o expiró)."""

        ...

    def set(self, key: str, value: str) -> None:
        """Guarda inmediatamente."""

        ...

    def save_deferred(self, key: str, value: str) -> None:
        """Encola una escritura hasta el próximo `commit`."""

        ...

    def commit(self) -> None:
        """Vuelca las escrituras encoladas."""

        ...
