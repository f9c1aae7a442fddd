"""Request and document models shared by every surface."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class VisualizationRequest(BaseModel):
    """What the user asked to see.

    The algorithm name is not required at construction time so that an empty
    form can still be represented; `Generator.generate` rejects it.
    """

    model_config = ConfigDict(frozen=True)

    algorithm_name: str = ""
    input_data: Optional[str] = None
    extra_arguments: Optional[str] = None

    @field_validator("algorithm_name", mode="before")
    @classmethod
    def _strip_name(cls, v):  # type: ignore[no-untyped-def]
        """Normalize None to empty and strip surrounding whitespace."""
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("input_data", "extra_arguments", mode="before")
    @classmethod
    def _blank_to_none(cls, v):  # type: ignore[no-untyped-def]
        """Treat blank optional fields as not provided."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @property
    def is_valid(self) -> bool:
        """Whether the request may be sent to the generation service."""
        return bool(self.algorithm_name)


class GeneratedDocument(BaseModel):
    """A complete renderable HTML document returned by the model.

    Immutable once received. A new request replaces it, never edits it.
    """

    model_config = ConfigDict(frozen=True)

    html: str
    model: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
