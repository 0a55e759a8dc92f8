"""Serialización JSON de modelos para la CLI (`--json`) y ficheros.

Usa el mismo volcado que el cuerpo de las peticiones (`to_payload`): alias
del proveedor y sin campos `None`, así la salida es reutilizable tal cual.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.models import to_payload


def dumps_json(value: Any) -> str:
    """Serializa modelos, listas o dicts a JSON UTF-8 con formato estable."""

    return json.dumps(to_payload(value), ensure_ascii=False, indent=2, sort_keys=True, default=str)


def export_json(value: Any, *, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps_json(value) + "\n", encoding="utf-8")
    return output_path
