"""Exportación JSON de los ids generados.

Por qué JSON:
- Interoperabilidad con otros scripts y pipelines.
- Permite guardar el lote recibido tal cual, sin depender del render Rich.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import IdGenerationResponse


def export_response_json(*, response: IdGenerationResponse, output_path: Path) -> Path:
    """Exporta `IdGenerationResponse` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = response.model_dump(mode="json", by_alias=True, exclude_none=True)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
