"""Public API for the core package."""

from .generator import Generator
from .models import GeneratedDocument, VisualizationRequest
from .playback import PlaybackState, PlayerController, PlayerPhase
from .session import VisualizationSession
from .settings import GeneratorSettings

__all__ = [
    "Generator",
    "GeneratorSettings",
    "GeneratedDocument",
    "PlaybackState",
    "PlayerController",
    "PlayerPhase",
    "VisualizationRequest",
    "VisualizationSession",
]
