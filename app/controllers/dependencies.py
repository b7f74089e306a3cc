"""Common FastAPI dependencies reused across controllers."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from fastapi import Depends

from app.config.settings import settings
from app.pipelines.animation import AnimationPipeline

_PIPELINE = AnimationPipeline()


def get_pipeline() -> AnimationPipeline:
    """Return the shared, stateless pipeline orchestrator."""

    return _PIPELINE


def get_scratch_root() -> Path:
    """Directory under which per-request scratch directories are created."""

    return settings.storage.scratch_root


PipelineDep = Annotated[AnimationPipeline, Depends(get_pipeline)]
ScratchRootDep = Annotated[Path, Depends(get_scratch_root)]


__all__ = ["get_pipeline", "get_scratch_root", "PipelineDep", "ScratchRootDep"]
