"""Playback controller for a visualization hosted in an isolated context.

The rendering context owns step progression. The controller only mirrors what
the context reports through messages and sends fire-and-forget commands back,
so transport actions never move the step index locally; they wait for the
resulting STEP_UPDATE.

Phases (host-side view):

    UNINITIALIZED --load--> LOADING --VIZ_READY--> READY <--> PLAYING

Loading a new document from any phase discards the previous context. Messages
carrying the origin of a discarded context are dropped.
"""

from __future__ import annotations

import time
import uuid
from enum import Enum
from typing import Any, Callable, List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from algo_lab.core.errors import PlayerNotReadyError, ReadyTimeoutError
from algo_lab.core.messages import (
    Command,
    ReadyMessage,
    StepChangedMessage,
    parse_message,
)
from algo_lab.core.models import GeneratedDocument

WAITING_TEXT = "Waiting for visualization..."

Dispatch = Callable[[str, Command], None]


class PlayerPhase(str, Enum):
    """Host-side lifecycle of the loaded rendering context."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    PLAYING = "playing"


class PlaybackState(BaseModel):
    """Mirror of the rendering context's step position."""

    model_config = ConfigDict(frozen=True)

    current_step_index: int = Field(default=0, ge=0)
    total_steps: int = Field(default=0, ge=0)
    is_ready: bool = False
    is_playing: bool = False
    explanation: str = ""

    @model_validator(mode="after")
    def _check_invariants(self) -> "PlaybackState":
        """Enforce index bounds and that playing implies ready."""
        if self.current_step_index > max(self.total_steps - 1, 0):
            raise ValueError(
                f"current_step_index {self.current_step_index} out of range"
                f" for total_steps {self.total_steps}"
            )
        if self.is_playing and not self.is_ready:
            raise ValueError("is_playing requires is_ready")
        return self

    @computed_field(return_type=bool)
    def at_first_step(self) -> bool:
        """Whether the index is at the first step."""
        return self.current_step_index == 0

    @computed_field(return_type=bool)
    def at_last_step(self) -> bool:
        """Whether the index is at (or past) the final step."""
        return self.current_step_index >= self.total_steps - 1

    @computed_field(return_type=float)
    def progress_percent(self) -> float:
        """Progress through the animation, 0-100."""
        if self.total_steps <= 0:
            return 0.0
        return (self.current_step_index + 1) / self.total_steps * 100.0

    @computed_field(return_type=str)
    def status_text(self) -> str:
        """Short status line for the controls panel."""
        if not self.is_ready:
            return WAITING_TEXT
        return f"Step {self.current_step_index + 1} of {self.total_steps}"


def _clamp_index(index: int, total: int) -> int:
    return min(max(index, 0), max(total - 1, 0))


class PlayerController:
    """Drives one rendering context at a time through the message protocol."""

    def __init__(
        self,
        dispatch: Optional[Dispatch] = None,
        ready_timeout: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the controller.

        Args:
            dispatch: Optional callback receiving ``(context_id, command)`` for
                every command sent. Commands are also returned to the caller.
            ready_timeout: Seconds to wait for VIZ_READY after a load before
                giving up. None or 0 waits forever.
            clock: Monotonic time source, replaceable in tests.
        """
        self._dispatch = dispatch
        self.ready_timeout = ready_timeout or None
        self._clock = clock
        self.state = PlaybackState()
        self.phase = PlayerPhase.UNINITIALIZED
        self.context_id: Optional[str] = None
        self.document: Optional[GeneratedDocument] = None
        self.loaded_at: Optional[float] = None
        self.error: Optional[ReadyTimeoutError] = None

    # ---------- lifecycle ----------
    def load(self, document: GeneratedDocument) -> str:
        """Attach a new document, discarding any previous context.

        Returns:
            The new context id. Only messages tagged with it are accepted.
        """
        if self.context_id is not None:
            logger.debug(f"Discarding rendering context {self.context_id}")
        self.unload()
        self.document = document
        self.context_id = uuid.uuid4().hex
        self.loaded_at = self._clock()
        self.phase = PlayerPhase.LOADING
        logger.debug(f"Loaded document into context {self.context_id}")
        return self.context_id

    def unload(self) -> None:
        """Drop the current context and reset playback state."""
        self.state = PlaybackState()
        self.phase = PlayerPhase.UNINITIALIZED
        self.context_id = None
        self.document = None
        self.loaded_at = None
        self.error = None

    def check_ready_timeout(self) -> bool:
        """Give up on a context that never reported ready.

        Returns:
            True if the context was dropped by this call.
        """
        if (
            self.phase is not PlayerPhase.LOADING
            or self.ready_timeout is None
            or self.loaded_at is None
        ):
            return False
        waited = self._clock() - self.loaded_at
        if waited < self.ready_timeout:
            return False
        logger.warning(
            f"Context {self.context_id} not ready after {waited:.1f}s; dropping it"
        )
        self.unload()
        self.error = ReadyTimeoutError(
            "The visualization did not start within"
            f" {self.ready_timeout:g} seconds. Try generating it again."
        )
        return True

    # ---------- inbound ----------
    def handle_message(self, origin: Optional[str], data: Any) -> bool:
        """Apply a message from the rendering context.

        Returns:
            True if the message changed (or re-confirmed) playback state.
        """
        if self.context_id is None or origin != self.context_id:
            logger.debug(f"Dropping message from stale or foreign origin {origin!r}")
            return False
        message = parse_message(data)
        if message is None:
            return False
        if isinstance(message, ReadyMessage):
            self._on_ready(message)
            return True
        if isinstance(message, StepChangedMessage):
            return self._on_step_changed(message)
        return False

    def _on_ready(self, message: ReadyMessage) -> None:
        self.state = PlaybackState(
            current_step_index=0,
            total_steps=message.total_steps,
            is_ready=True,
            is_playing=False,
        )
        self.phase = PlayerPhase.READY
        logger.debug(f"Context {self.context_id} ready with {message.total_steps} steps")

    def _on_step_changed(self, message: StepChangedMessage) -> bool:
        if not self.state.is_ready:
            logger.debug("Ignoring STEP_UPDATE received before VIZ_READY")
            return False
        total = message.total_steps
        current = _clamp_index(message.current_step_index, total)
        playing = self.state.is_playing and current < total - 1
        self.state = PlaybackState(
            current_step_index=current,
            total_steps=total,
            is_ready=True,
            is_playing=playing,
            explanation=message.explanation,
        )
        self.phase = PlayerPhase.PLAYING if playing else PlayerPhase.READY
        return True

    # ---------- outbound ----------
    @property
    def is_ready(self) -> bool:
        """Whether transport controls may be used."""
        return self.phase in (PlayerPhase.READY, PlayerPhase.PLAYING)

    @property
    def can_play(self) -> bool:
        """Whether the play/pause control is enabled."""
        return self.is_ready and self.state.total_steps > 0

    @property
    def can_next(self) -> bool:
        """Whether the next control is enabled."""
        return self.can_play and not self.state.at_last_step

    @property
    def can_previous(self) -> bool:
        """Whether the previous control is enabled."""
        return self.can_play and not self.state.at_first_step

    def _require_ready(self, action: str) -> None:
        if not self.can_play:
            raise PlayerNotReadyError(
                f"Cannot {action}: the visualization is not ready"
                f" (phase={self.phase.value}, steps={self.state.total_steps})."
            )

    def _send(self, *commands: Command) -> List[Command]:
        if self.context_id is None:
            raise PlayerNotReadyError("No rendering context is loaded.")
        for command in commands:
            logger.debug(f"Dispatching {command.value} to {self.context_id}")
            if self._dispatch is not None:
                self._dispatch(self.context_id, command)
        return list(commands)

    def _set_playing(self, playing: bool) -> None:
        self.state = self.state.model_copy(update={"is_playing": playing})
        self.phase = PlayerPhase.PLAYING if playing else PlayerPhase.READY

    def play(self) -> List[Command]:
        """Start playback, rewinding first when parked on the last step."""
        self._require_ready("play")
        if self.state.at_last_step:
            sent = self._send(Command.RESTART, Command.PLAY)
        else:
            sent = self._send(Command.PLAY)
        self._set_playing(True)
        return sent

    def pause(self) -> List[Command]:
        """Pause playback."""
        self._require_ready("pause")
        sent = self._send(Command.PAUSE)
        self._set_playing(False)
        return sent

    def toggle(self) -> List[Command]:
        """Play when paused, pause when playing."""
        if self.state.is_playing:
            return self.pause()
        return self.play()

    def next(self) -> List[Command]:
        """Step forward once, stopping playback first."""
        self._require_ready("step forward")
        sent = self._send(Command.PAUSE, Command.NEXT_STEP)
        self._set_playing(False)
        return sent

    def previous(self) -> List[Command]:
        """Step back once, stopping playback first."""
        self._require_ready("step back")
        sent = self._send(Command.PAUSE, Command.PREV_STEP)
        self._set_playing(False)
        return sent

    def restart(self) -> List[Command]:
        """Rewind to the first step without playing."""
        self._require_ready("restart")
        sent = self._send(Command.PAUSE, Command.RESTART)
        self._set_playing(False)
        return sent
