"""Contrato del transporte HTTP hacia Alertmanager.

Por qué Protocol:
- El repositorio de silences depende de esta abstracción, no de httpx.
- Los tests pueden sustituir el transporte por un doble en memoria.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SilenceTransport(Protocol):
    """Una única llamada HTTP por operación, sin reintentos.

    Reglas de diseño:
    - Solo HTTP 200 es éxito; cualquier otro status o fallo de red se lanza
      como `TransportError`.
    - Todas las operaciones son asíncronas.
    """

    async def post(self, url: str, body: str) -> None:
        ...

    async def delete(self, url: str) -> None:
        ...

    async def get_filtered(self, url: str, filter_expr: str) -> str:
        """GET con un parámetro `filter` opcional; devuelve el cuerpo crudo."""

        ...
