"""Exportación JSON de registros.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines.
- Usa el mismo formato que el API (alias de campos), así el archivo puede
  reenviarse tal cual como body de un comando.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from tmapi.core.domain.models import Record


def records_to_json(records: Sequence[Record]) -> str:
    payload = [record.model_dump(mode="json", by_alias=True) for record in records]
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_records_json(*, records: Sequence[Record], output_path: Path) -> Path:
    """Exporta registros a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(records_to_json(records), encoding="utf-8")
    return output_path
