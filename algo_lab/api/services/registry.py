"""Simple in-memory registry for VisualizationSession instances.

This module encapsulates a minimal service layer for storing and
retrieving live `VisualizationSession` objects keyed by a generated ID.

Notes/Assumptions:
    - This is *not* persistent. A process restart clears the registry.
    - Not multiprocess-safe. Replace with a DB or shared cache if needed.
    - IDs are random UUID4 hex strings.
    - All sessions share one `Generator` (and its HTTP connection pool).
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Optional
from uuid import uuid4

from loguru import logger

from algo_lab.api.settings import settings
from algo_lab.core.generator import Generator
from algo_lab.core.session import VisualizationSession


class SessionRegistry:
    """In-memory registry of VisualizationSession instances.

    Attributes:
        _store (OrderedDict[str, VisualizationSession]): Map of id -> session,
            oldest first.
    """

    def __init__(
        self, generator: Optional[Generator] = None, max_sessions: int = 256
    ) -> None:
        """Initialize the registry.

        Args:
            generator (Optional[Generator]): Shared generator. Built from the
                environment on first use when omitted.
            max_sessions (int): Oldest sessions are evicted beyond this count.
        """
        self._generator = generator
        self.max_sessions = max_sessions
        self._store: OrderedDict[str, VisualizationSession] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def generator(self) -> Generator:
        """Shared generator, created lazily."""
        if self._generator is None:
            self._generator = Generator()
        return self._generator

    def create(self) -> tuple[str, VisualizationSession]:
        """Create and store a new session.

        Returns:
            tuple[str, VisualizationSession]: The generated ID and the session.
        """
        session = VisualizationSession(self.generator)
        session_id = uuid4().hex
        with self._lock:
            self._store[session_id] = session
            while len(self._store) > self.max_sessions:
                evicted, _ = self._store.popitem(last=False)
                logger.info(f"Evicted session {evicted} (max {self.max_sessions})")
        return session_id, session

    def get(self, session_id: str) -> Optional[VisualizationSession]:
        """Retrieve a session by ID.

        Args:
            session_id (str): Identifier assigned at creation.

        Returns:
            Optional[VisualizationSession]: The found session or None.
        """
        return self._store.get(session_id)

    def remove(self, session_id: str) -> None:
        """Remove a session by ID.

        Args:
            session_id (str): Identifier assigned at creation.
        """
        with self._lock:
            self._store.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._store)


# Notes:
# - Single global registry instance for simplicity; swap for DI container if needed.
_registry = SessionRegistry(max_sessions=settings.max_sessions)


def get_registry() -> SessionRegistry:
    """FastAPI dependency provider for the global registry.

    Returns:
        SessionRegistry: The singleton registry instance.
    """
    return _registry
