"""One-shot generation route.

Generates a visualization document without creating a playback session.
Useful for clients that host the document themselves.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from loguru import logger

from algo_lab.api.deps import get_generator
from algo_lab.api.errors import to_http_exception
from algo_lab.api.models import DocumentResponse, GenerateRequest
from algo_lab.core.errors import GenerationError
from algo_lab.core.generator import Generator

router = APIRouter()


@router.post(
    "/visualizations",
    response_model=DocumentResponse,
    summary="Generate a visualization document",
)
def generate_visualization(
    body: GenerateRequest, generator: Generator = Depends(get_generator)
) -> DocumentResponse:
    """Generate a complete HTML visualization for an algorithm.

    Args:
        body (GenerateRequest): Algorithm name plus optional data/arguments.
        generator (Generator): Shared generator (injected).

    Returns:
        DocumentResponse: The document and the model that produced it.

    Raises:
        HTTPException: 422 for a blank algorithm name, 503 when the service is
            unreachable, 502 for upstream or malformed responses.
    """
    try:
        document = generator.generate(body.to_core())
    except GenerationError as e:
        logger.warning(f"Generation failed: {e.message}")
        raise to_http_exception(e)
    return DocumentResponse(
        html=document.html, model=document.model, created_at=document.created_at
    )
