"""Base común de los modelos del dominio (Pydantic v2).

Los modelos reflejan el esquema JSON del proveedor campo a campo. No tienen
comportamiento propio: se construyen al deserializar una respuesta y se
descartan tras usarlos.

Nota:
- `extra="allow"` conserva campos que el proveedor añada en el futuro.
- Los nombres reservados de Python (`type`, `final`, `from`) usan alias.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class WatsonModel(BaseModel):
    """Modelo base para respuestas y cuerpos de petición."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Serializa con los nombres del proveedor, omitiendo campos vacíos."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def to_payload(value: Any) -> Any:
    """Convierte modelos (o listas/dicts de modelos) a JSON serializable."""

    if isinstance(value, WatsonModel):
        return value.to_payload()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, list):
        return [to_payload(item) for item in value]
    if isinstance(value, tuple):
        return [to_payload(item) for item in value]
    if isinstance(value, dict):
        return {key: to_payload(item) for key, item in value.items()}
    return value
