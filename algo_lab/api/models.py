"""Pydantic models (request/response schemas) for the API.

Defines the schema used by FastAPI to validate requests and shape
responses. These models also drive the generated OpenAPI spec.

Notes/Assumptions:
    - Keep API contracts stable; changes affect clients and OpenAPI docs.
    - Field names mirror the widget form: algorithm, input data, arguments.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from algo_lab.core.models import VisualizationRequest
from algo_lab.core.playback import PlaybackState, PlayerPhase


class GenerateRequest(BaseModel):
    """Request body to generate a visualization.

    Attributes:
        algorithm (str): Algorithm to visualize. Must not be blank.
        input_data (Optional[str]): Optional data to run the algorithm on.
        extra_arguments (Optional[str]): Optional extra arguments.
    """

    algorithm: str = Field("", examples=["Dijkstra's Algorithm"])
    input_data: Optional[str] = Field(None, examples=["[5, 3, 8, 1]"])
    extra_arguments: Optional[str] = Field(None, examples=["Start node A"])

    def to_core(self) -> VisualizationRequest:
        """Convert to the core request model."""
        return VisualizationRequest(
            algorithm_name=self.algorithm,
            input_data=self.input_data,
            extra_arguments=self.extra_arguments,
        )


class DocumentResponse(BaseModel):
    """A generated visualization document.

    Attributes:
        html (str): Complete HTML document.
        model (str): Model that produced it.
        created_at (datetime): When it was received.
    """

    html: str
    model: str
    created_at: datetime


class CreateSessionResponse(BaseModel):
    """Response after creating a playback session.

    Attributes:
        session_id (str): Unique ID of the session in the registry.
    """

    session_id: str


class SessionStateResponse(BaseModel):
    """Snapshot of a playback session.

    Attributes:
        session_id (str): Session ID.
        phase (PlayerPhase): Controller phase.
        context_id (Optional[str]): Origin the rendering context must use when
            posting messages back.
        playback (PlaybackState): Mirrored step position.
        is_loading (bool): Whether a generation request is in flight.
        has_document (bool): Whether a document is loaded.
        error (Optional[str]): Human-readable error from the last request.
        can_play (bool): Whether play/pause is enabled.
        can_next (bool): Whether next is enabled.
        can_previous (bool): Whether previous is enabled.
    """

    session_id: str
    phase: PlayerPhase
    context_id: Optional[str] = None
    playback: PlaybackState
    is_loading: bool = False
    has_document: bool = False
    error: Optional[str] = None
    can_play: bool = False
    can_next: bool = False
    can_previous: bool = False


class MessageRequest(BaseModel):
    """A message posted by a rendering context.

    Attributes:
        origin (str): Context ID the message came from.
        data (Dict[str, Any]): Raw message object (VIZ_READY / STEP_UPDATE).
    """

    origin: str
    data: Dict[str, Any] = Field(
        ...,
        examples=[{"type": "VIZ_READY", "payload": {"stepInfo": {"current": 0, "total": 5}}}],
    )


class MessageResponse(BaseModel):
    """Result of applying a message.

    Attributes:
        applied (bool): False when the message was stale, foreign or invalid.
        state (SessionStateResponse): Session snapshot after the message.
    """

    applied: bool
    state: SessionStateResponse


class CommandResponse(BaseModel):
    """Commands dispatched for a transport action.

    Attributes:
        commands (List[str]): Entry points to invoke, in order.
        state (SessionStateResponse): Session snapshot after the action.
    """

    commands: List[str] = []
    state: SessionStateResponse
