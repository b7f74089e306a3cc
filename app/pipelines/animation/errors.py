"""Error taxonomy shared by every stage of the animation pipeline.

Each error carries a ``category`` (the caller-facing tag), a human-readable
message and, once the orchestrator has seen it, the ``stage`` it was raised
in. Controllers render them without knowing which stage failed.
"""

from __future__ import annotations

from typing import Any, Mapping


class PipelineError(RuntimeError):
    """Base class for failures surfaced to the caller as a structured error."""

    category: str = "PipelineError"

    def __init__(
        self,
        message: str,
        *,
        details: Mapping[str, Any] | None = None,
        stage: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details) if details else None
        self.stage = stage

    def to_payload(self) -> dict[str, Any]:
        """Return the ``{error, message[, details]}`` body sent to callers."""

        payload: dict[str, Any] = {"error": self.category, "message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(PipelineError):
    """A required request field (audio, model, apiKey) was missing."""

    category = "ValidationError"


class UnsupportedModelError(PipelineError):
    """The requested model has no registered profile."""

    category = "UnsupportedModelError"


class ConversionError(PipelineError):
    """ffmpeg exited non-zero, timed out, or could not be launched."""

    category = "ConversionError"


class InvocationError(PipelineError):
    """The Audio2Face client exited non-zero, timed out, or could not be launched."""

    category = "InvocationError"

    def __init__(self, message: str, *, stderr: str = "", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.stderr = stderr


class ParseError(PipelineError):
    """The client output was neither a JSON document nor tabular text."""

    category = "ParseError"


__all__ = [
    "PipelineError",
    "ValidationError",
    "UnsupportedModelError",
    "ConversionError",
    "InvocationError",
    "ParseError",
]
