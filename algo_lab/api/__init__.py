"""API package for Algo Lab.

This package exposes a FastAPI application that wraps the core `Generator`
and `VisualizationSession` to provide HTTP endpoints for one-shot generation
and for remote-controlled playback sessions.

The package layout follows a standard FastAPI structure with routers,
dependency helpers, service layer (a simple in-memory registry), and
Pydantic models.

Notes:
    - Keep this package lightweight; heavy lifting belongs in `core/`.
"""
