"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- El contrato JSON de Alertmanager usa camelCase; los alias mantienen los
  nombres Python idiomáticos sin perder el formato del wire.
- Validar la respuesta en el borde convierte cuerpos malformados en un único
  error de parseo en vez de `KeyError` dispersos.

Nota:
- Las fechas se guardan como strings RFC3339 tal como las envía el servidor;
  Alertmanager usa nanosegundos y no necesitamos aritmética sobre ellas.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

ACTIVE_STATE = "active"

# Centinela de Alertmanager para "nunca actualizado".
ZERO_TIMESTAMP = "0001-01-01T00:00:00Z"


def format_timestamp(value: datetime) -> str:
    """Serializa un `datetime` como RFC3339 UTC con precisión de segundos."""

    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class Matcher(BaseModel):
    """Condición label name/value de un silence."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(..., description="Nombre de la label.")
    value: str = Field(..., description="Valor esperado de la label.")
    is_regex: bool = Field(
        default=False,
        alias="isRegex",
        description="Siempre `False` en los silences que crea esta herramienta.",
    )


class SilenceStatus(BaseModel):
    model_config = ConfigDict(extra="ignore")

    state: str = Field(default="", description="Estado reportado por el servidor.")


class Silence(BaseModel):
    """Silence de Alertmanager.

    Por qué `id` vacío por defecto:
    - El servidor asigna la identidad; un silence recién construido no la tiene.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(default="", description="ID asignado por Alertmanager.")
    status: SilenceStatus = Field(default_factory=SilenceStatus)
    comment: str = Field(default="")
    created_by: str = Field(default="", alias="createdBy")
    updated_at: str = Field(default=ZERO_TIMESTAMP, alias="updatedAt")
    starts_at: str = Field(default="", alias="startsAt")
    ends_at: str = Field(default="", alias="endsAt")
    matchers: list[Matcher] = Field(default_factory=list)

    @field_validator("matchers", mode="before")
    @classmethod
    def _null_matchers(cls, value: object) -> object:
        return [] if value is None else value

    @property
    def is_active(self) -> bool:
        return self.status.state == ACTIVE_STATE

    def to_payload(self) -> str:
        """JSON listo para `POST /api/v1/silences`.

        `status` lo gestiona el servidor, así que no se envía.
        """

        return self.model_dump_json(by_alias=True, exclude={"status"})


class SilencesResponse(BaseModel):
    """Respuesta de `GET /api/v1/silences`."""

    model_config = ConfigDict(extra="ignore")

    status: str = Field(default="")
    # Alertmanager devuelve `null` cuando no hay silences.
    data: list[Silence] | None = Field(default_factory=list)

    def silences(self) -> list[Silence]:
        return list(self.data or [])
