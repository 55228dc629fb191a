"""Application configuration."""

import os
from datetime import date

from pydantic_settings import BaseSettings, SettingsConfigDict

from yearbook_picker.domain.deadlines import Deadline

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    session_ttl_seconds: int = 3600
    site_title: str = "Yearbook Photo Selection Tool"
    timezone: str = "UTC"
    submission_deadlines: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_deadlines(raw: str | None) -> list[Deadline]:
    """Parse deadlines like ``ES=2025-10-24,MS=2025-10-10`` from env."""
    if raw is None:
        return []
    deadlines: list[Deadline] = []
    for chunk in raw.split(","):
        label, sep, value = chunk.partition("=")
        label = label.strip()
        if not sep or not label:
            continue
        try:
            due = date.fromisoformat(value.strip())
        except ValueError:
            continue
        deadlines.append(Deadline(label=label, due=due))
    return deadlines
