"""Schemas for the animation endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class AnimationResponse(BaseModel):
    success: bool = True
    data: dict[str, Any] = Field(
        description="AnimationData: {'blendshapes': [{'name', 'value', 'time'}], 'duration'}",
    )


class MockAnimationResponse(AnimationResponse):
    note: str


class BlendshapeIdData(BaseModel):
    blendshape_id: str


class ModelConfigResponse(BaseModel):
    success: bool = True
    data: BlendshapeIdData
