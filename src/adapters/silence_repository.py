"""Cliente del repositorio de silences (API v1 de Alertmanager).

Responsabilidad:
- Construir payloads de silence a partir de labels.
- Consultar silences filtrados por label y mapearlos a modelos tipados.
- Exponer create/query/delete sobre un `SilenceTransport` intercambiable.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone

from pydantic import ValidationError

from core.domain.labels import format_filter, matchers_from_labels
from core.domain.models import ZERO_TIMESTAMP, Silence, SilencesResponse, format_timestamp
from core.errors import ResponseParseError
from core.interfaces.transport import SilenceTransport
from core.services.dispatcher import call_with_timeout

logger = logging.getLogger(__name__)

SILENCES_PATH = "/api/v1/silences"
SILENCE_PATH = "/api/v1/silence"


def build_silence(
    period_hours: int,
    labels: Mapping[str, str],
    creator: str,
    comment: str,
    *,
    now: datetime | None = None,
) -> Silence:
    """Silence nuevo que empieza ahora (UTC) y dura `period_hours`.

    `updatedAt` queda en el centinela cero: solo el servidor lo gestiona.
    """

    starts_at = (now or datetime.now(timezone.utc)).astimezone(timezone.utc).replace(microsecond=0)
    ends_at = starts_at + timedelta(hours=period_hours)
    return Silence(
        starts_at=format_timestamp(starts_at),
        ends_at=format_timestamp(ends_at),
        created_by=creator,
        comment=comment,
        updated_at=ZERO_TIMESTAMP,
        matchers=matchers_from_labels(labels),
    )


def parse_silences(body: str) -> list[Silence]:
    try:
        response = SilencesResponse.model_validate_json(body)
    except ValidationError as exc:
        raise ResponseParseError(f"Cannot parse Alertmanager response: {exc}") from exc
    return response.silences()


def filter_active(silences: list[Silence]) -> list[Silence]:
    return [silence for silence in silences if silence.is_active]


class SilenceRepository:
    """Operaciones sobre `/api/v1/silences` con presupuesto de tiempo.

    `create` y `query_active` aplican su propio timeout; `delete` no, porque
    el fan-out del modo delete mide cada llamada por separado.
    """

    def __init__(self, base_url: str, transport: SilenceTransport, timeout_seconds: float) -> None:
        self._base_url = base_url.rstrip("/")
        self._transport = transport
        self._timeout = timeout_seconds

    @property
    def silences_url(self) -> str:
        return self._base_url + SILENCES_PATH

    def silence_url(self, silence_id: str) -> str:
        return f"{self._base_url}{SILENCE_PATH}/{silence_id}"

    async def create(self, silence: Silence) -> None:
        await call_with_timeout(self._transport.post(self.silences_url, silence.to_payload()), self._timeout)

    async def query(self, labels: Mapping[str, str]) -> list[Silence]:
        body = await call_with_timeout(
            self._transport.get_filtered(self.silences_url, format_filter(labels)),
            self._timeout,
        )
        return parse_silences(body)

    async def query_active(self, labels: Mapping[str, str]) -> list[Silence]:
        """Silences activos que el servidor devuelve para el filtro `labels`.

        Expirados y pendientes nunca llegan al llamador.
        """

        silences = await self.query(labels)
        active = filter_active(silences)
        logger.debug("query returned %d silences, %d active", len(silences), len(active))
        return active

    async def delete(self, silence_id: str) -> None:
        await self._transport.delete(self.silence_url(silence_id))
