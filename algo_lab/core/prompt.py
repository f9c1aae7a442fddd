"""Prompt construction for visualization requests."""

from algo_lab.core.constants import (
    D3_CDN_URL,
    NOT_PROVIDED,
    PROMPT_TEMPLATE,
    STEP_DELAY_SECONDS,
)
from algo_lab.core.models import VisualizationRequest


def build_prompt(request: VisualizationRequest) -> str:
    """Render the generation prompt for a request."""
    return PROMPT_TEMPLATE.format(
        algorithm=request.algorithm_name,
        input_data=request.input_data or NOT_PROVIDED,
        extra_arguments=request.extra_arguments or NOT_PROVIDED,
        d3_url=D3_CDN_URL,
        step_delay=STEP_DELAY_SECONDS,
    )


def build_payload(prompt: str) -> dict:
    """Wrap a prompt in the generateContent request body."""
    return {"contents": [{"parts": [{"text": prompt}]}]}
