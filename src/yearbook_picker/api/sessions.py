"""Selection session endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from fastapi import APIRouter, HTTPException, Request, Response, status

from yearbook_picker.api.models import (
    CodeSubmission,
    PhotoSelection,
    SessionView,
    build_session_view,
)

if TYPE_CHECKING:
    from yearbook_picker.containers import AppContainer
    from yearbook_picker.services.selection import SelectionController

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


def _get_controller(session_id: str, request: Request) -> SelectionController:
    container: AppContainer = request.app.state.container
    controller = container.session_registry.get(session_id)
    if controller is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Session expired."
        )
    return controller


def _render(
    session_id: str, controller: SelectionController, request: Request
) -> SessionView:
    container: AppContainer = request.app.state.container
    today = datetime.now(tz=ZoneInfo(container.settings.timezone)).date()
    return build_session_view(
        session_id, controller.session, container.deadlines, today
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def open_session(request: Request) -> SessionView:
    """Open a new selection session."""
    container: AppContainer = request.app.state.container
    session_id, controller = container.session_registry.open()
    return _render(session_id, controller, request)


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> SessionView:
    """Return the current state of a session."""
    controller = _get_controller(session_id, request)
    return _render(session_id, controller, request)


@router.post("/{session_id}/code")
async def submit_code(
    session_id: str, payload: CodeSubmission, request: Request
) -> SessionView:
    """Look up the student for an access code."""
    controller = _get_controller(session_id, request)
    await controller.submit_code(payload.code)
    return _render(session_id, controller, request)


@router.post("/{session_id}/selection")
async def select_photo(
    session_id: str, payload: PhotoSelection, request: Request
) -> SessionView:
    """Change the selected photo."""
    controller = _get_controller(session_id, request)
    controller.select_photo(payload.url)
    return _render(session_id, controller, request)


@router.post("/{session_id}/confirm")
async def confirm_selection(session_id: str, request: Request) -> SessionView:
    """Persist the selected photo as the student's choice."""
    controller = _get_controller(session_id, request)
    await controller.confirm_selection()
    return _render(session_id, controller, request)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_session(session_id: str, request: Request) -> Response:
    """Forget a session when the page is left."""
    container: AppContainer = request.app.state.container
    container.session_registry.discard(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
