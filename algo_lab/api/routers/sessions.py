"""Playback session routes.

A session mirrors what the widget does in the browser: generate a document,
serve it with the command bridge injected, accept the messages the rendering
context posts back and turn transport actions into commands.

Notes/Assumptions:
    - The client hosting the document relays its postMessage traffic to
      `/messages`, tagged with the `context_id` from the session state.
    - Transport actions return the commands to deliver; the API never talks
      to the rendering context itself.
"""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import HTMLResponse
from loguru import logger

from algo_lab.api.deps import get_session
from algo_lab.api.errors import to_http_exception
from algo_lab.api.models import (
    CommandResponse,
    CreateSessionResponse,
    GenerateRequest,
    MessageRequest,
    MessageResponse,
    SessionStateResponse,
)
from algo_lab.api.services.registry import SessionRegistry, get_registry
from algo_lab.core.errors import GenerationError, PlayerError
from algo_lab.core.session import VisualizationSession

router = APIRouter()


class TransportAction(str, Enum):
    """Transport actions exposed over HTTP."""

    PLAY = "play"
    PAUSE = "pause"
    NEXT = "next"
    PREVIOUS = "previous"
    RESTART = "restart"
    TOGGLE = "toggle"


def snapshot(session_id: str, session: VisualizationSession) -> SessionStateResponse:
    """Build the state response for a session."""
    session.check_ready_timeout()
    controller = session.controller
    return SessionStateResponse(
        session_id=session_id,
        phase=controller.phase,
        context_id=controller.context_id,
        playback=controller.state,
        is_loading=session.is_loading,
        has_document=session.document is not None,
        error=session.error_message,
        can_play=controller.can_play,
        can_next=controller.can_next,
        can_previous=controller.can_previous,
    )


@router.post(
    "/sessions",
    response_model=CreateSessionResponse,
    summary="Create a playback session",
)
def create_session(
    registry: SessionRegistry = Depends(get_registry),
) -> CreateSessionResponse:
    """Create and register an empty session.

    Args:
        registry (SessionRegistry): In-memory registry dependency.

    Returns:
        CreateSessionResponse: The new session ID.
    """
    session_id, _ = registry.create()
    logger.debug(f"Created session {session_id}")
    return CreateSessionResponse(session_id=session_id)


@router.get(
    "/sessions/{session_id}/state",
    response_model=SessionStateResponse,
    summary="Get session and playback state",
)
def get_state(
    session_id: str, session: VisualizationSession = Depends(get_session)
) -> SessionStateResponse:
    """Fetch the current state of a session.

    Also enforces the readiness timeout, so polling this endpoint surfaces a
    rendering context that never started.
    """
    return snapshot(session_id, session)


@router.post(
    "/sessions/{session_id}/generate",
    response_model=SessionStateResponse,
    summary="Generate and load a new document",
)
def generate(
    session_id: str,
    body: GenerateRequest,
    session: VisualizationSession = Depends(get_session),
) -> SessionStateResponse:
    """Generate a document and load it, replacing the current one.

    Returns:
        SessionStateResponse: State in the LOADING phase with a fresh
            `context_id`, or unchanged if a newer request superseded this one.

    Raises:
        HTTPException: Mapped from the generation error (422/502/503).
    """
    document = session.submit(body.to_core())
    error = session.error
    if document is None and isinstance(error, GenerationError):
        raise to_http_exception(error)
    return snapshot(session_id, session)


@router.get(
    "/sessions/{session_id}/document",
    response_class=HTMLResponse,
    summary="Serve the loaded document with the command bridge",
)
def get_document(
    session_id: str, session: VisualizationSession = Depends(get_session)
) -> HTMLResponse:
    """Return the current document, ready to embed in a sandboxed iframe.

    Raises:
        HTTPException: 404 if no document is loaded.
    """
    html = session.iframe_document()
    if html is None:
        raise HTTPException(status_code=404, detail="No document loaded")
    return HTMLResponse(content=html)


@router.post(
    "/sessions/{session_id}/messages",
    response_model=MessageResponse,
    summary="Relay a message from the rendering context",
)
def post_message(
    session_id: str,
    body: MessageRequest,
    session: VisualizationSession = Depends(get_session),
) -> MessageResponse:
    """Apply a VIZ_READY / STEP_UPDATE message.

    Messages from stale or foreign origins and unrecognized messages are
    accepted but not applied (`applied=false`).
    """
    applied = session.handle_message(body.origin, body.data)
    return MessageResponse(applied=applied, state=snapshot(session_id, session))


@router.post(
    "/sessions/{session_id}/commands/{action}",
    response_model=CommandResponse,
    summary="Issue a transport action",
)
def command(
    session_id: str,
    action: TransportAction,
    session: VisualizationSession = Depends(get_session),
) -> CommandResponse:
    """Run a transport action and return the commands to deliver.

    Raises:
        HTTPException: 409 if the document has not reported ready.
    """
    try:
        commands = session.command(action.value)
    except PlayerError as e:
        raise to_http_exception(e)
    return CommandResponse(
        commands=[c.value for c in commands], state=snapshot(session_id, session)
    )


@router.delete(
    "/sessions/{session_id}",
    status_code=204,
    summary="Dispose a session from the registry",
)
def delete_session(
    session_id: str, registry: SessionRegistry = Depends(get_registry)
) -> Response:
    """Remove a session from the in-memory registry.

    Args:
        session_id (str): ID of the session to remove.
        registry (SessionRegistry): Registry dependency.
    """
    registry.remove(session_id)
    return Response(status_code=204)
