"""Pydantic schemas used as views in the MVC architecture."""

from .animation import (
    AnimationResponse,
    BlendshapeIdData,
    MockAnimationResponse,
    ModelConfigResponse,
)
from .common import ErrorResponse, HealthResponse

__all__ = [
    "AnimationResponse",
    "BlendshapeIdData",
    "MockAnimationResponse",
    "ModelConfigResponse",
    "ErrorResponse",
    "HealthResponse",
]
