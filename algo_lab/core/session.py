"""Per-user visualization session.

Owns the state a single user sees: the latest request, the current document,
the last error, the loading flag and the playback controller. Requests are
numbered with a monotonic sequence so that a slow response to an older request
can never replace the result of a newer one.
"""

from __future__ import annotations

import threading
from typing import Any, List, Optional, Union

from loguru import logger

from algo_lab.core.document import inject_command_bridge
from algo_lab.core.errors import GenerationError, ReadyTimeoutError, ValidationError
from algo_lab.core.generator import Generator
from algo_lab.core.messages import Command
from algo_lab.core.models import GeneratedDocument, VisualizationRequest
from algo_lab.core.playback import PlayerController

SessionError = Union[GenerationError, ReadyTimeoutError]

UNKNOWN_ERROR_MSG = "Failed to generate visualization. An unknown error occurred."

# Controller methods callable through `command`
TRANSPORT_ACTIONS = ("play", "pause", "toggle", "next", "previous", "restart")


class VisualizationSession:
    """State and transitions for one user's visualizations."""

    def __init__(
        self,
        generator: Generator,
        controller: Optional[PlayerController] = None,
    ) -> None:
        """Initialize an empty session.

        Args:
            generator: Shared generator used for requests.
            controller: Playback controller. Built from the generator's
                settings (ready timeout) when omitted.
        """
        self.generator = generator
        self.controller = controller or PlayerController(
            ready_timeout=generator.settings.ready_timeout
        )
        self.request: Optional[VisualizationRequest] = None
        self.document: Optional[GeneratedDocument] = None
        self._error: Optional[GenerationError] = None
        self.is_loading = False
        self.latest_seq = 0
        self._lock = threading.Lock()

    @property
    def error(self) -> Optional[SessionError]:
        """The error to show, if any (generation or readiness timeout)."""
        return self._error or self.controller.error

    @property
    def error_message(self) -> Optional[str]:
        """Human-readable form of `error`."""
        err = self.error
        if err is None:
            return None
        return getattr(err, "message", None) or str(err)

    def reject(self, error: ValidationError) -> None:
        """Record invalid input without issuing a request.

        The current document and playback are left untouched.
        """
        with self._lock:
            self._error = error
        logger.debug(f"Rejected request: {error.message}")

    def begin(self, request: VisualizationRequest) -> int:
        """Start a new request, discarding the previous result.

        Returns:
            The sequence number the result must be delivered with.
        """
        with self._lock:
            self.latest_seq += 1
            self.request = request
            self.document = None
            self._error = None
            self.is_loading = True
            self.controller.unload()
            logger.debug(
                f"Began request #{self.latest_seq} for '{request.algorithm_name}'"
            )
            return self.latest_seq

    def complete(self, seq: int, document: GeneratedDocument) -> bool:
        """Deliver a document for request `seq`.

        Returns:
            False if a newer request superseded this one and it was discarded.
        """
        with self._lock:
            if seq != self.latest_seq:
                logger.info(
                    f"Discarding stale result for request #{seq}"
                    f" (latest is #{self.latest_seq})"
                )
                return False
            self.document = document
            self.is_loading = False
            self.controller.load(document)
            return True

    def fail(self, seq: int, error: GenerationError) -> bool:
        """Deliver an error for request `seq`.

        Returns:
            False if a newer request superseded this one and it was discarded.
        """
        with self._lock:
            if seq != self.latest_seq:
                logger.info(
                    f"Discarding stale error for request #{seq}"
                    f" (latest is #{self.latest_seq})"
                )
                return False
            self._error = error
            self.is_loading = False
            return True

    def submit(self, request: VisualizationRequest) -> Optional[GeneratedDocument]:
        """Validate, generate and load a document in one call.

        Returns:
            The loaded document, or None if the request failed or was
            superseded. The failure is available as `error`.
        """
        if not request.is_valid:
            self.reject(ValidationError("Please provide an algorithm name."))
            return None
        seq = self.begin(request)
        try:
            document = self.generator.generate(request)
        except GenerationError as e:
            logger.warning(f"Request #{seq} failed: {e.message}")
            self.fail(seq, e)
            return None
        except Exception:
            logger.exception(f"Request #{seq} raised an unexpected exception")
            self.fail(seq, GenerationError(UNKNOWN_ERROR_MSG))
            return None
        if not self.complete(seq, document):
            return None
        return document

    def handle_message(self, origin: Optional[str], data: Any) -> bool:
        """Apply a message from the rendering context to the controller.

        Returns:
            True if the message changed playback state.
        """
        with self._lock:
            return self.controller.handle_message(origin, data)

    def command(self, action: str) -> List[Command]:
        """Run a transport action on the controller.

        Args:
            action: One of `TRANSPORT_ACTIONS`.

        Returns:
            The commands dispatched to the rendering context.

        Raises:
            ValueError: If `action` is not a transport action.
            PlayerNotReadyError: If the document has not reported ready.
        """
        if action not in TRANSPORT_ACTIONS:
            raise ValueError(f"Unknown transport action: {action!r}")
        with self._lock:
            return getattr(self.controller, action)()

    def check_ready_timeout(self) -> bool:
        """Drop the document if its rendering context never reported ready.

        Returns:
            True if the timeout fired on this call.
        """
        with self._lock:
            if not self.controller.check_ready_timeout():
                return False
            self.document = None
            return True

    def close(self) -> None:
        """Drop the document and unload the rendering context."""
        with self._lock:
            self.document = None
            self.is_loading = False
            self.controller.unload()

    def iframe_document(self) -> Optional[str]:
        """Current document with the command bridge injected."""
        document = self.document
        if document is None:
            return None
        return inject_command_bridge(document.html)
