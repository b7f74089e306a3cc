"""Typed containers shared across the animation pipeline.

These live in their own module so the stages (`conversion`, `inference`,
`normalization`, `orchestrator`) can import them without creating circular
dependencies.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator


@dataclass(frozen=True)
class ModelProfile:
    """Routing token and client config file for one selectable model."""

    name: str
    external_function_id: str
    config_file_name: str


@dataclass(frozen=True)
class PipelineRequest:
    """Raw caller inputs for one pipeline run."""

    source_audio_path: Path | None
    model_name: str | None
    api_key: str | None


@dataclass(frozen=True)
class ConvertedAudio:
    """Handle to the mono 16 kHz PCM file written by the converter."""

    path: Path


@dataclass(frozen=True)
class InferenceResult:
    """Captured streams of one Audio2Face client process."""

    raw_output: str
    exit_status: int
    diagnostics: str = ""


class AnimationFrame(BaseModel):
    """One blendshape weight at one point in time."""

    name: str = Field(validation_alias=AliasChoices("name", "blendshapeName"))
    value: float = Field(validation_alias=AliasChoices("value", "weight"))
    time: float = Field(validation_alias=AliasChoices("time", "timestampSeconds"))

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("value", "time", mode="before")
    @classmethod
    def null_is_nan(cls, value: Any) -> Any:
        # JSON has no NaN; ``null`` is how a non-numeric weight travels.
        return math.nan if value is None else value

    @field_serializer("value", "time", when_used="json")
    def nan_is_null(self, value: float) -> Optional[float]:
        return None if math.isnan(value) else value


class AnimationData(BaseModel):
    """Ordered blendshape frames returned to the caller."""

    frames: tuple[AnimationFrame, ...] = Field(
        validation_alias=AliasChoices("blendshapes", "frames"),
        serialization_alias="blendshapes",
    )
    duration: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("duration", "durationSeconds"),
    )

    model_config = ConfigDict(frozen=True, extra="allow")

    def to_payload(self) -> dict[str, Any]:
        """JSON-safe dict using the wire keys (``blendshapes``/``name``/``value``/``time``)."""

        return self.model_dump(mode="json", by_alias=True)

    @property
    def blendshape_names(self) -> list[str]:
        seen: dict[str, None] = {}
        for frame in self.frames:
            seen.setdefault(frame.name, None)
        return list(seen)


__all__ = [
    "ModelProfile",
    "PipelineRequest",
    "ConvertedAudio",
    "InferenceResult",
    "AnimationFrame",
    "AnimationData",
]
