"""Generator that turns a visualization request into an HTML document.

One call to `Generator.generate` issues exactly one POST to the generation
service and either returns a complete document or raises a
`GenerationError`. There are no retries and no partial results.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

import httpx
from loguru import logger

from algo_lab.core.constants import API_KEY_HEADER
from algo_lab.core.errors import (
    EmptyDocumentError,
    ParseError,
    TransportError,
    UpstreamError,
    ValidationError,
)
from algo_lab.core.models import GeneratedDocument, VisualizationRequest
from algo_lab.core.prompt import build_payload, build_prompt
from algo_lab.core.settings import GeneratorSettings

_OPENING_FENCE = re.compile(r"^```[\w+-]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove a wrapping markdown code fence from model output."""
    cleaned = text.strip()
    cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
    cleaned = _CLOSING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def extract_text(body: Any) -> str:
    """Pull `candidates[0].content.parts[0].text` out of a response body.

    Raises:
        UpstreamError: If the body reports an error or a blocked prompt.
        ParseError: If the expected path is missing or not a string.
    """
    if isinstance(body, dict):
        if body.get("error"):
            details = json.dumps(body["error"])
            raise UpstreamError(
                f"API Error: service reported an error. Details: {details}",
                details=details,
            )
        feedback = body.get("promptFeedback") or {}
        if isinstance(feedback, dict) and feedback.get("blockReason"):
            reason = feedback["blockReason"]
            raise UpstreamError(
                f"API Error: prompt was blocked ({reason}).", details=str(reason)
            )
    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise ParseError(
            "Unexpected response from the generation service: "
            "missing candidates[0].content.parts[0].text."
        ) from e
    if not isinstance(text, str):
        raise ParseError(
            "Unexpected response from the generation service: "
            f"candidate text is {type(text).__name__}, not a string."
        )
    return text


def _error_details(response: httpx.Response) -> str:
    """Best-effort rendering of an error response body."""
    try:
        return json.dumps(response.json())
    except ValueError:
        return response.text


class Generator:
    """Client for the generateContent endpoint.

    Safe to share between sessions; each call is independent.
    """

    def __init__(
        self,
        settings: Optional[GeneratorSettings] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize the generator.

        Args:
            settings: Service settings. Read from the environment when omitted.
            client: HTTP client to use. Tests pass one with a MockTransport.
        """
        self.settings = settings or GeneratorSettings()
        self._client = client or httpx.Client(timeout=self.settings.request_timeout)
        if self.settings.api_key is None:
            logger.warning(
                "No API key configured (GEMINI_API_KEY / ALGO_LAB_API_KEY);"
                " requests will likely be rejected."
            )
        logger.debug(f"Generator using model '{self.settings.model}'")

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.settings.api_key is not None:
            headers[API_KEY_HEADER] = self.settings.api_key.get_secret_value()
        return headers

    def generate(self, request: VisualizationRequest) -> GeneratedDocument:
        """Generate a visualization document for a request.

        Raises:
            ValidationError: If the algorithm name is empty.
            TransportError: If the service cannot be reached.
            UpstreamError: If the service answers with an error.
            ParseError: If the response is malformed or empty.
        """
        if not request.is_valid:
            raise ValidationError("Please provide an algorithm name.")

        prompt = build_prompt(request)
        logger.info(
            f"Requesting visualization for '{request.algorithm_name}'"
            f" ({len(prompt)} prompt chars)"
        )
        try:
            response = self._client.post(
                self.settings.endpoint,
                json=build_payload(prompt),
                headers=self._headers(),
                timeout=self.settings.request_timeout,
            )
        except httpx.RequestError as e:
            logger.warning(f"Transport failure reaching generation service: {e!r}")
            raise TransportError(
                f"Could not reach the generation service: {e}"
            ) from e

        if not response.is_success:
            details = _error_details(response)
            logger.warning(
                f"Generation service returned {response.status_code}: {details}"
            )
            raise UpstreamError(
                f"API Error: {response.status_code} {response.reason_phrase}."
                f" Details: {details}",
                status_code=response.status_code,
                details=details,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ParseError(
                "Unexpected response from the generation service: body is not JSON."
            ) from e

        html = strip_code_fences(extract_text(body))
        if not html:
            raise EmptyDocumentError(
                "The generation service returned an empty document."
            )
        logger.info(f"Received document ({len(html)} chars)")
        return GeneratedDocument(html=html, model=self.settings.model)
