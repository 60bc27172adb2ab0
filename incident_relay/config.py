"""
Incident Relay — Configuration
==============================
Read once at process start from the environment (or a local ``.env``).

Missing ``AUTH_TOKEN`` / ``DESTINATION_WEBHOOK_URL`` do not stop the process
from starting; every inbound request reports them as a server error instead.
"""
from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── App ──────────────────────────────────────────────────────────────────
    app_name: str = "IncidentRelay"
    app_version: str = "1.0.0"
    app_env: str = "development"
    log_level: str = "INFO"

    # ── Security ─────────────────────────────────────────────────────────────
    # Shared secret the alerting system appends as ?auth_token=...
    auth_token: str = ""

    # ── Destination ──────────────────────────────────────────────────────────
    destination_webhook_url: str = Field(
        default="",
        validation_alias=AliasChoices("destination_webhook_url", "discord_webhook_url"),
    )
    delivery_timeout_s: float = 10.0


settings = Settings()
