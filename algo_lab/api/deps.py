"""Dependency utilities for route handlers.

Provides reusable dependency functions for resolving shared services
and objects (e.g., looking up a VisualizationSession by ID).
"""

from fastapi import Depends, HTTPException

from algo_lab.api.services.registry import SessionRegistry, get_registry
from algo_lab.core.generator import Generator
from algo_lab.core.session import VisualizationSession


def get_session(
    session_id: str, registry: SessionRegistry = Depends(get_registry)
) -> VisualizationSession:
    """Resolve a VisualizationSession from the registry.

    Args:
        session_id (str): Identifier of a session in the registry.
        registry (SessionRegistry): The in-memory registry (injected).

    Returns:
        VisualizationSession: The session instance.

    Raises:
        HTTPException: If the session ID is not found in the registry.
    """
    session = registry.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def get_generator(registry: SessionRegistry = Depends(get_registry)) -> Generator:
    """Resolve the shared Generator.

    Args:
        registry (SessionRegistry): The in-memory registry (injected).

    Returns:
        Generator: The generator shared by all sessions.
    """
    return registry.generator
