"""Error taxonomy for generation and playback.

Every generation failure is a `GenerationError` carrying a human-readable
message, so callers can surface any of them the same way. Player errors are
kept separate since they never involve the generation service.
"""

from __future__ import annotations

from typing import Optional


class GenerationError(Exception):
    """Base class for failures while producing a visualization document."""

    def __init__(self, message: str) -> None:
        """Initialize with a message that is safe to show to users."""
        super().__init__(message)
        self.message = message


class ValidationError(GenerationError):
    """The request is not valid; no network call was made."""


class TransportError(GenerationError):
    """The generation service could not be reached."""


class UpstreamError(GenerationError):
    """The generation service answered with an error."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[str] = None,
    ) -> None:
        """Initialize with the upstream status code and error body if known."""
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class ParseError(GenerationError):
    """The response did not have the expected shape."""


class EmptyDocumentError(ParseError):
    """The response parsed but held no usable document."""


class PlayerError(Exception):
    """Base class for playback controller errors."""


class PlayerNotReadyError(PlayerError):
    """A transport command was issued before the document reported ready."""


class ReadyTimeoutError(PlayerError):
    """The rendering context never reported ready within the allowed time."""
