"""Exportación JSON de resultados.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines (`jq`, notebooks).
- Permite persistir lo consultado sin depender del render de la terminal.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from core.domain.api_model import ApiModel


def models_payload(models: Sequence[ApiModel]) -> list[dict]:
    """Forma completa (incluye `id` y `created`) de cada modelo, lista para JSON."""

    return [m.model_dump(mode="json", by_alias=True) for m in models]


def export_models_json(*, models: Sequence[ApiModel], output_path: Path) -> Path:
    """Exporta los modelos a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(models_payload(models), ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
