"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from yearbook_picker.adapters.supabase_record_store import SupabaseRecordStore
from yearbook_picker.config import Settings, parse_deadlines
from yearbook_picker.domain.deadlines import Deadline
from yearbook_picker.services.registry import SessionRegistry
from yearbook_picker.services.selection import RecordStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    record_store: RecordStore
    session_registry: SessionRegistry
    deadlines: list[Deadline]
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    record_store = SupabaseRecordStore(supabase_client)
    session_registry = SessionRegistry(
        record_store, ttl_seconds=resolved_settings.session_ttl_seconds
    )

    async def close_resources() -> None:
        session_registry.clear()

    return AppContainer(
        settings=resolved_settings,
        record_store=record_store,
        session_registry=session_registry,
        deadlines=parse_deadlines(resolved_settings.submission_deadlines),
        close_resources=close_resources,
    )
