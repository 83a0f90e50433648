"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los flags de la CLI solo sobreescriben estos defaults; el pipeline recibe
  un `SilenceRequest` explícito y nunca lee estado global.
"""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.mode import SilenceMode

APP_DIR_NAME = "am-silence"


def get_user_env_file() -> Path:
    """`.env` por usuario (p.ej. `~/.config/am-silence/.env` en Linux)."""

    return Path(typer.get_app_dir(APP_DIR_NAME)) / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Los defaults reproducen los flags históricos de la herramienta
    (`--URL http://127.0.0.1`, `--timeout 3`, `--silence-period 2`).
    """

    model_config = SettingsConfigDict(
        env_prefix="AM_SILENCE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    alertmanager_url: str = Field(
        default="http://127.0.0.1",
        min_length=1,
        description="Base URL de Alertmanager.",
    )
    timeout_seconds: float = Field(
        default=3.0,
        gt=0,
        description="Presupuesto por request (segundos), medido de forma independiente por llamada.",
    )
    silence_period_hours: int = Field(
        default=2,
        ge=1,
        description="Duración por defecto de un silence nuevo (horas).",
    )
    creator: str = Field(
        default="auto-silencer",
        min_length=1,
        description="Autor registrado en `createdBy`.",
    )
    comment: str = Field(
        default="auto-silencer",
        description="Comentario del silence. Se recomienda el ticket asociado.",
    )
    mode: SilenceMode = Field(
        default=SilenceMode.SHOW,
        description="Modo por defecto cuando la CLI no recibe `--mode`.",
    )
    user_agent: str = Field(
        default="am-silence/1.0",
        min_length=1,
        description="User-Agent para las peticiones a Alertmanager.",
    )
