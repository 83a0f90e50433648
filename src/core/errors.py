"""Errores del Core.

Todas las operaciones fallan con una subclase de `SilenceError`, de modo que
la CLI solo necesita capturar una jerarquía para reportar el fallo.
"""

from __future__ import annotations

from typing import Sequence


class SilenceError(Exception):
    """Base de todos los errores reportados por am-silence."""


class RequestValidationError(SilenceError):
    """Input inválido (labels vacías, modo desconocido, URL ilegible).

    Se lanza siempre antes de cualquier actividad de red.
    """


class TransportError(SilenceError):
    """Fallo de red o respuesta HTTP distinta de 200."""


class RequestTimeoutError(SilenceError):
    """La espera local de una llamada superó su presupuesto."""

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Alertmanager connection timeout after {timeout_seconds:g}s")


class ResponseParseError(SilenceError):
    """Cuerpo de respuesta que no respeta el contrato JSON de silences."""


class AggregateError(SilenceError):
    """Unión de los errores individuales de un fan-out (modo delete)."""

    def __init__(self, errors: Sequence[SilenceError]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(str(err) for err in self.errors))
