"""FastAPI application for Algo Lab.

Two groups of routes are mounted under `/v1`:

    /visualizations  one-shot generation, returns the HTML document
    /sessions        server-side playback sessions driven over HTTP

The OpenAPI/Swagger UI is served at `/docs` and Redoc at `/redoc`.

Example:
    uvicorn algo_lab.api.main:app --reload

Notes/Assumptions:
    - Sessions are held in process memory; run a single worker.
    - The `app` object is created at import time so uvicorn can discover it.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from algo_lab.api.routers import sessions, visualizations
from algo_lab.api.settings import settings


def create_app() -> FastAPI:
    """Build the FastAPI app with CORS and both routers."""
    app = FastAPI(
        title="Algo Lab API",
        version="0.1.0",
        description="Generate algorithm visualizations and drive their playback",
    )

    # ALGO_LAB_API_CORS_ALLOW_ALL=false turns this off outside development
    if settings.cors_allow_all:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["GET", "POST", "DELETE"],
            allow_headers=["*"],
        )

    app.include_router(visualizations.router, prefix="/v1", tags=["visualizations"])
    app.include_router(sessions.router, prefix="/v1", tags=["sessions"])
    return app


app = create_app()
