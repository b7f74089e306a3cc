"""High-level map of the animation pipeline.

``POST /api/generate-animation`` walks these states in order:

1. ``Received`` – validate the inputs and resolve the model profile.
2. ``Converting`` – transcode the upload to mono 16 kHz PCM with ffmpeg.
3. ``Invoking`` – run the Audio2Face-3D client for the selected model.
4. ``Normalizing`` – parse JSON or tabular client output into frames.

``Failed`` is reachable from every non-terminal state; ``Done`` only from
``Normalizing``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List


class PipelineState(str, Enum):
    RECEIVED = "received"
    CONVERTING = "converting"
    INVOKING = "invoking"
    NORMALIZING = "normalizing"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (PipelineState.DONE, PipelineState.FAILED)


_TRANSITIONS = {
    PipelineState.RECEIVED: PipelineState.CONVERTING,
    PipelineState.CONVERTING: PipelineState.INVOKING,
    PipelineState.INVOKING: PipelineState.NORMALIZING,
    PipelineState.NORMALIZING: PipelineState.DONE,
}


def next_state(state: PipelineState) -> PipelineState:
    """Successor of ``state`` on the happy path."""

    if state.is_terminal:
        raise ValueError(f"{state.value} is terminal")
    return _TRANSITIONS[state]


@dataclass(frozen=True)
class PipelineStage:
    """Human-readable description of one stage in the animation pipeline."""

    order: int
    state: PipelineState
    module: str
    summary: str


class AnimationPipelineMap:
    """Ordered stage metadata used in logs and for debugging."""

    _STAGES: List[PipelineStage] = [
        PipelineStage(
            1,
            PipelineState.RECEIVED,
            "app.pipelines.animation.orchestrator",
            "Check that audio, model and apiKey are present and the model is registered.",
        ),
        PipelineStage(
            2,
            PipelineState.CONVERTING,
            "app.pipelines.animation.conversion",
            "Transcode the upload to pcm_s16le, 16 kHz, mono via ffmpeg.",
        ),
        PipelineStage(
            3,
            PipelineState.INVOKING,
            "app.pipelines.animation.inference",
            "Run the Audio2Face-3D NIM client and capture stdout/stderr.",
        ),
        PipelineStage(
            4,
            PipelineState.NORMALIZING,
            "app.pipelines.animation.normalization",
            "Parse JSON or tabular client output into blendshape frames.",
        ),
    ]

    @classmethod
    def describe(cls) -> Iterable[PipelineStage]:
        return tuple(cls._STAGES)

    @classmethod
    def stage_for(cls, state: PipelineState) -> PipelineStage | None:
        for stage in cls._STAGES:
            if stage.state is state:
                return stage
        return None


__all__ = ["AnimationPipelineMap", "PipelineStage", "PipelineState", "next_state"]
