"""API mode selection for the PostNL client.

This module centralizes the protocol options supported by the remote
service. Keeping it in the domain layer lets the schema, the services and
the CLI share a single source of truth without importing adapters.
"""

from __future__ import annotations

from enum import Enum


class ApiMode(str, Enum):
    """Wire protocol used to talk to the PostNL API."""

    REST = "rest"
    LEGACY = "legacy"

    @classmethod
    def default(cls) -> "ApiMode":
        """Return the mode used when nothing else is configured."""

        return cls.REST

    @classmethod
    def from_bool(cls, legacy: bool) -> "ApiMode":
        """Derive a mode from a boolean CLI flag."""

        return cls.LEGACY if legacy else cls.REST

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return "SOAP (legacy)" if self is ApiMode.LEGACY else "REST"
