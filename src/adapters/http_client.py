"""Wrapper de httpx para la API de Alertmanager.

Por qué un wrapper:
- Estandariza timeouts, headers y la normalización de errores: toda falla
  (red o status != 200) sale como `TransportError`.
- Facilita testeo: se inyecta un `httpx.MockTransport` en vez de red real.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings
from core.errors import RequestValidationError, TransportError

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout_seconds: float | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults para Alertmanager.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - `transport` permite enchufar un servidor falso en tests.
    - `timeout_seconds=None` desactiva el timeout de httpx; el llamador acota
      la espera por su cuenta.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        headers=headers,
        transport=transport,
    )


def build_query_url(url: str, filter_expr: str) -> httpx.URL:
    """Parsea la URL base y añade `filter` si hay expresión.

    Falla antes de cualquier request si la URL no es utilizable.
    """

    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise RequestValidationError(f"Cannot parse URL {url}: {exc}") from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise RequestValidationError(f"Cannot parse URL {url}: expected an absolute http(s) URL")

    if filter_expr:
        return parsed.copy_merge_params({"filter": filter_expr})
    return parsed


def _describe(exc: httpx.HTTPError) -> str:
    return str(exc) or exc.__class__.__name__


def _check_status(response: httpx.Response) -> None:
    if response.status_code != 200:
        raise TransportError(
            f"HTTP response code: {response.status_code} {response.reason_phrase}".rstrip()
        )


class HttpxTransport:
    """Implementación de `SilenceTransport` sobre `httpx.AsyncClient`.

    Cada llamada abre su propio cliente: las llamadas concurrentes del modo
    delete no comparten estado mutable.

    httpx no aplica timeout propio: el presupuesto por llamada lo mide
    `call_with_timeout`, así que agotarlo siempre es `RequestTimeoutError` y
    nunca un `TransportError` por `ReadTimeout`.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return build_async_client(self._settings, transport=self._transport)

    async def _send(self, method: str, url: str | httpx.URL, **kwargs: object) -> httpx.Response:
        logger.debug("%s %s", method, url)
        try:
            async with self._client() as client:
                response = await client.request(method, url, **kwargs)  # type: ignore[arg-type]
        except httpx.HTTPError as exc:
            raise TransportError(_describe(exc)) from exc
        logger.debug("%s %s -> %s", method, url, response.status_code)
        _check_status(response)
        return response

    async def post(self, url: str, body: str) -> None:
        await self._send(
            "POST",
            url,
            content=body.encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )

    async def delete(self, url: str) -> None:
        await self._send("DELETE", url)

    async def get_filtered(self, url: str, filter_expr: str) -> str:
        target = build_query_url(url, filter_expr)
        response = await self._send("GET", target)
        return response.text
