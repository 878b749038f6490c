"""Esquema de serialización de entidades (REST y SOAP legacy).

Por qué una tabla estática por entidad:
- Las entidades son modelos Pydantic v2, pero el formato de cable no es JSON
  "plano": el SOAP legacy envuelve los arrays en un tag por elemento y prefija
  cada clave con su namespace, y ambos protocolos colapsan arrays de un solo
  elemento en un escalar.
- `schema_of` calcula una vez, por clase, la lista ordenada de
  `(campo, nombre de cable, tipo, tag de elemento)`. `serialize` y
  `deserialize` son dos funciones genéricas guiadas por esa tabla.

Reglas:
- Un campo `None` nunca se emite (ni como null ni como elemento vacío).
- Al leer se ignoran claves desconocidas, atributos XML y prefijos de namespace.
- Un array siempre vuelve como lista ordenada, aunque el cable traiga un escalar.
"""

from __future__ import annotations

import functools
import types
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from postnl.core.domain.api_mode import ApiMode
from postnl.core.errors import DeserializationError

# Prefijo XML para arrays de escalares (serialización de .NET, `arr:string`).
ARRAY_PREFIX = "arr"

_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})


class FieldKind(str, Enum):
    SCALAR = "scalar"
    BOOL = "bool"
    ENUM = "enum"
    ENTITY = "entity"
    ARRAY = "array"


@dataclass(frozen=True)
class WireField:
    """Una fila de la tabla de esquema de una entidad."""

    name: str
    wire: str
    kind: FieldKind
    type: Any
    item: str | None = None
    item_kind: FieldKind | None = None
    legacy: str | None = None
    repeated: bool = False

    def wire_name(self, mode: ApiMode) -> str:
        if mode is ApiMode.LEGACY and self.legacy:
            return self.legacy
        return self.wire


def wire(
    alias: str,
    *,
    item: str | None = None,
    legacy: str | None = None,
    default: Any = None,
    repeated: bool = False,
    default_factory: Callable[[], Any] | None = None,
) -> Any:
    """Declara un campo de cable.

    - `alias`: nombre en el cable REST (PascalCase).
    - `legacy`: nombre en el SOAP cuando difiere del REST.
    - `item`: tag con el que el SOAP envuelve cada elemento de un array.
    - `repeated`: el SOAP repite el elemento sin tag contenedor
      (`<ResponseLocation>` directamente bajo `<GetLocationsResult>`).
    """

    extra = {k: v for k, v in (("item", item), ("legacy", legacy), ("repeated", repeated)) if v} or None
    if default_factory is not None:
        return Field(default_factory=default_factory, alias=alias, json_schema_extra=extra)
    return Field(default=default, alias=alias, json_schema_extra=extra)


class Entity(BaseModel):
    """Base de todas las entidades: campos opcionales con nombre de cable."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def local_name(key: str) -> str:
    """`domain:Barcode` -> `Barcode`."""

    return key.rpartition(":")[2]


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _kind_of(tp: Any) -> FieldKind:
    if isinstance(tp, type):
        if issubclass(tp, Entity):
            return FieldKind.ENTITY
        if issubclass(tp, Enum):
            return FieldKind.ENUM
        if tp is bool:
            return FieldKind.BOOL
    return FieldKind.SCALAR


@functools.cache
def schema_of(entity_type: type[Entity]) -> tuple[WireField, ...]:
    """Tabla de esquema (ordenada) de una clase de entidad."""

    rows: list[WireField] = []
    for name, info in entity_type.model_fields.items():
        if info.exclude:
            continue
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        tp = _unwrap_optional(info.annotation)
        wire_name = info.alias or name
        if get_origin(tp) is list:
            (item_type,) = get_args(tp)
            rows.append(
                WireField(
                    name=name,
                    wire=wire_name,
                    kind=FieldKind.ARRAY,
                    type=item_type,
                    item=extra.get("item"),
                    item_kind=_kind_of(item_type),
                    legacy=extra.get("legacy"),
                    repeated=bool(extra.get("repeated")),
                )
            )
        else:
            rows.append(
                WireField(
                    name=name,
                    wire=wire_name,
                    kind=_kind_of(tp),
                    type=tp,
                    legacy=extra.get("legacy"),
                )
            )
    return tuple(rows)


def _tag(name: str, prefix: str | None) -> str:
    return f"{prefix}:{name}" if prefix else name


def _serialize_value(value: Any, kind: FieldKind, mode: ApiMode, prefix: str | None) -> Any:
    if kind is FieldKind.ENTITY:
        return serialize(value, mode, prefix=prefix)
    if kind is FieldKind.BOOL:
        if mode is ApiMode.LEGACY:
            return "true" if value else "false"
        return bool(value)
    if kind is FieldKind.ENUM:
        value = value.value
    if mode is ApiMode.LEGACY:
        return str(value)
    return value


def serialize(entity: Entity, mode: ApiMode = ApiMode.REST, *, prefix: str | None = None) -> dict[str, Any]:
    """Convierte una entidad en un mapping listo para JSON (REST) o xmltodict (LEGACY)."""

    if mode is ApiMode.REST:
        prefix = None

    out: dict[str, Any] = {}
    for field in schema_of(type(entity)):
        value = getattr(entity, field.name)
        if value is None:
            continue
        key = _tag(field.wire_name(mode), prefix)
        if field.kind is not FieldKind.ARRAY:
            out[key] = _serialize_value(value, field.kind, mode, prefix)
            continue

        assert field.item_kind is not None
        items = [_serialize_value(v, field.item_kind, mode, prefix) for v in value]
        if mode is ApiMode.LEGACY and field.repeated:
            # xmltodict repite el elemento una vez por item de la lista.
            out[key] = items
        elif mode is ApiMode.LEGACY:
            if field.item_kind is FieldKind.ENTITY:
                item_tag = _tag(_entity_item_tag(field), prefix)
            else:
                item_tag = _tag(field.item or "string", ARRAY_PREFIX if prefix else None)
            out[key] = {item_tag: items}
        else:
            out[key] = items
    return out


def _entity_item_tag(field: WireField) -> str:
    return field.item or field.type.__name__


def _as_list(raw: Any, field: WireField) -> list[Any]:
    if isinstance(raw, Mapping) and not field.repeated:
        keys = [k for k in raw if isinstance(k, str) and not k.startswith("@")]
        if not keys:
            return []
        if len(keys) == 1:
            tag = local_name(keys[0]).lower()
            if field.item_kind is not FieldKind.ENTITY or tag == _entity_item_tag(field).lower():
                raw = raw[keys[0]]
    if raw is None:
        return []
    if isinstance(raw, list):
        return raw
    # Singleton colapsado por el cable: se re-envuelve.
    return [raw]


def _read_bool(raw: Any, owner: str, field: str) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, int) and raw in (0, 1):
        return bool(raw)
    if isinstance(raw, str):
        text = raw.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise DeserializationError(f"invalid boolean {raw!r}", entity=owner, field=field)


def _read_enum(raw: Any, enum_type: type[Enum], owner: str, field: str) -> Enum:
    if isinstance(raw, enum_type):
        return raw
    candidates: list[Any] = [raw]
    if isinstance(raw, str) and issubclass(enum_type, int):
        candidates.append(raw.strip())
        if raw.strip().lstrip("-").isdigit():
            candidates.append(int(raw))
    elif isinstance(raw, int) and issubclass(enum_type, str):
        candidates.append(str(raw))
    for candidate in candidates:
        try:
            return enum_type(candidate)
        except ValueError:
            continue
    raise DeserializationError(f"invalid {enum_type.__name__} value {raw!r}", entity=owner, field=field)


def _read_value(raw: Any, kind: FieldKind, tp: Any, owner: str, field: str) -> Any:
    if kind is FieldKind.ENTITY:
        if not isinstance(raw, Mapping):
            raise DeserializationError(
                f"expected an object, got {type(raw).__name__}", entity=owner, field=field
            )
        return deserialize(raw, tp)
    if isinstance(raw, (Mapping, list)):
        raise DeserializationError(f"expected a scalar, got {type(raw).__name__}", entity=owner, field=field)
    if kind is FieldKind.BOOL:
        return _read_bool(raw, owner, field)
    if kind is FieldKind.ENUM:
        return _read_enum(raw, tp, owner, field)
    if tp is str and isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return str(raw)
    return raw


def deserialize(payload: Any, entity_type: type[Entity]) -> Any:
    """Puebla `entity_type` solo con los campos presentes en `payload`."""

    if isinstance(payload, entity_type):
        return payload
    owner = entity_type.__name__
    if not isinstance(payload, Mapping):
        raise DeserializationError(f"expected an object, got {type(payload).__name__}", entity=owner)

    by_wire: dict[str, WireField] = {}
    for f in schema_of(entity_type):
        by_wire[f.wire.lower()] = f
        if f.legacy:
            by_wire.setdefault(f.legacy.lower(), f)
    values: dict[str, Any] = {}
    for raw_key, raw in payload.items():
        if not isinstance(raw_key, str) or raw_key.startswith("@"):
            continue
        field = by_wire.get(local_name(raw_key).lower())
        if field is None or raw is None:
            continue
        if field.kind is FieldKind.ARRAY:
            assert field.item_kind is not None
            values[field.name] = [
                _read_value(item, field.item_kind, field.type, owner, field.name)
                for item in _as_list(raw, field)
                if item is not None
            ]
        else:
            values[field.name] = _read_value(raw, field.kind, field.type, owner, field.name)

    try:
        return entity_type.model_validate(values)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(p) for p in first.get("loc", ()))
        raise DeserializationError(first.get("msg", "invalid value"), entity=owner, field=location) from exc
