"""Animation generation pipeline package.

Modules are organised by the order in which `/api/generate-animation`
executes:

1. `ingestion` – store the upload in a per-run scratch directory.
2. `conversion` – transcode it to mono 16 kHz PCM with ffmpeg.
3. `inference` – run the Audio2Face-3D client for the selected model.
4. `normalization` – parse the client's JSON or tabular output.
5. `orchestrator` – sequence the stages and clean up temporary files.

`flow` documents the stage/state map; `mock` serves the test endpoint.
"""

from .conversion import FormatConverter
from .errors import (
    ConversionError,
    InvocationError,
    ParseError,
    PipelineError,
    UnsupportedModelError,
    ValidationError,
)
from .flow import AnimationPipelineMap, PipelineStage, PipelineState
from .inference import InferenceInvoker
from .ingestion import save_upload, scratch_directory
from .mock import build_mock_animation
from .models import AnimationModel, resolve_model, supported_models
from .normalization import normalize
from .orchestrator import AnimationPipeline
from .types import AnimationData, AnimationFrame, ModelProfile, PipelineRequest

__all__ = [
    "AnimationData",
    "AnimationFrame",
    "AnimationModel",
    "AnimationPipeline",
    "AnimationPipelineMap",
    "ConversionError",
    "FormatConverter",
    "InferenceInvoker",
    "InvocationError",
    "ModelProfile",
    "ParseError",
    "PipelineError",
    "PipelineRequest",
    "PipelineStage",
    "PipelineState",
    "UnsupportedModelError",
    "ValidationError",
    "build_mock_animation",
    "normalize",
    "resolve_model",
    "save_upload",
    "scratch_directory",
    "supported_models",
]
