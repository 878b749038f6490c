"""Excepciones del cliente PostNL.

Por qué una jerarquía propia:
- El llamador captura `PostNLError` sin conocer httpx, xmltodict ni pydantic.
- Cada fase (validación, transporte, respuesta, deserialización) tiene su tipo.
"""

from __future__ import annotations

from typing import Any

import httpx


class PostNLError(Exception):
    """Base exception for all client errors."""

    pass


class InvalidArgumentError(PostNLError):
    """Raised when a request entity is malformed, before any I/O."""

    pass


class InvalidConfigurationError(PostNLError):
    """Raised when the client lacks configuration an operation needs."""

    pass


class InvalidBarcodeError(PostNLError):
    """Raised when no barcode serie exists for a type/range combination."""

    pass


class NotSupportedError(PostNLError):
    """Raised when an operation is unavailable in the selected API mode."""

    pass


class HttpClientError(PostNLError):
    """Raised when the transport fails (connection, timeout, protocol)."""

    def __init__(self, message: str, *, request: httpx.Request | None = None):
        self.request = request
        super().__init__(message)


class ResponseError(PostNLError):
    """Raised on a non-success response without a usable body, or a malformed success body."""

    def __init__(self, message: str, *, response: httpx.Response | None = None):
        self.response = response
        self.status_code = response.status_code if response is not None else None
        super().__init__(message)


class CifError(ResponseError):
    """Raised when the API answers with a parseable error body."""

    def __init__(
        self,
        errors: list[dict[str, Any]],
        *,
        response: httpx.Response | None = None,
    ):
        self.errors = errors
        messages = [str(e.get("message") or e.get("code") or "unknown") for e in errors]
        super().__init__("; ".join(messages) or "CIF error", response=response)


class CifDownError(CifError):
    """Raised when the API reports it is temporarily unavailable."""

    pass


class NotFoundError(PostNLError):
    """Raised when a well-formed response holds no matching result."""

    pass


class DeserializationError(PostNLError):
    """Raised when a payload does not match the expected entity shape."""

    def __init__(self, message: str, *, entity: str | None = None, field: str | None = None):
        self.entity = entity
        self.field = field
        where = ".".join(p for p in (entity, field) if p)
        super().__init__(f"{where}: {message}" if where else message)
