"""Decodificación de uniones etiquetadas.

Varias respuestas (y consultas) de PostNL comparten forma: un payload de
estado puede traer `CurrentStatus`, `CompleteStatus` o `Signature`, y una
consulta de estado puede llevar barcode, referencia, fase o código de estado.

Regla:
- Cada `Variant` declara las claves que deben venir no vacías. Una entrada
  puede ser una tupla de nombres alternativos (REST `CurrentStatus`, SOAP
  `CurrentStatusResponse`).
- Se prueban en el orden dado; gana la primera que encaja.
- El resultado se envuelve en `Decoded(kind, value)` en vez de depender de
  `isinstance` en el llamador.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Mapping, Sequence, TypeVar, Union

from postnl.core.domain.schema import Entity, deserialize, local_name
from postnl.core.errors import NotFoundError

T = TypeVar("T")

RequiredKey = Union[str, tuple[str, ...]]


@dataclass(frozen=True)
class Variant(Generic[T]):
    kind: str
    required: tuple[RequiredKey, ...]
    entity: type[Entity] | None = None
    # Sub-árbol a deserializar; si no viene, se usa el payload completo.
    key: RequiredKey | None = None


@dataclass(frozen=True)
class Decoded(Generic[T]):
    kind: str
    value: T


def is_populated(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (Mapping, list, tuple)):
        return len(value) > 0
    return True


def normalized(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Claves sin prefijo y en minúsculas; descarta atributos XML."""

    return {
        local_name(k).lower(): v
        for k, v in payload.items()
        if isinstance(k, str) and not k.startswith("@")
    }


def _names(key: RequiredKey) -> tuple[str, ...]:
    return (key,) if isinstance(key, str) else key


def _first_populated(view: Mapping[str, Any], key: RequiredKey) -> Any:
    for name in _names(key):
        value = view.get(name.lower())
        if is_populated(value):
            return value
    return None


def match_variant(payload: Mapping[str, Any], variants: Sequence[Variant[Any]]) -> Variant[Any] | None:
    """Primera variante cuyas claves requeridas están pobladas, o None."""

    view = normalized(payload)
    for variant in variants:
        if all(_first_populated(view, k) is not None for k in variant.required):
            return variant
    return None


def decode_union(payload: Any, variants: Sequence[Variant[Any]]) -> Decoded[Any]:
    """Elige la variante y deserializa su sub-árbol.

    Lanza `NotFoundError` si ninguna variante encaja.
    """

    if not isinstance(payload, Mapping):
        raise NotFoundError("Response holds no result object")

    variant = match_variant(payload, variants)
    if variant is None:
        kinds = ", ".join(v.kind for v in variants)
        raise NotFoundError(f"Response matches none of: {kinds}")

    data: Any = payload
    if variant.key:
        sub = _first_populated(normalized(payload), variant.key)
        if sub is not None:
            data = sub
    value = deserialize(data, variant.entity) if variant.entity else data
    return Decoded(kind=variant.kind, value=value)
