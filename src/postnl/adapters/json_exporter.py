"""Exportación JSON de resultados.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines (la CLI usa `--json`).
- Se exporta en formato de cable REST (PascalCase, sin campos vacíos), el
  mismo que devuelve la API.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.schema import Entity, serialize


def to_jsonable(value: Any) -> Any:
    if isinstance(value, Entity):
        return serialize(value, ApiMode.REST)
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, Exception):
        return {"error": type(value).__name__, "message": str(value)}
    return value


def export_entity_json(*, result: Any, output_path: Path) -> Path:
    """Exporta una entidad (o lista/mapa de entidades) a JSON UTF-8 estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(to_jsonable(result), ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
