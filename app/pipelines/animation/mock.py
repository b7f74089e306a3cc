"""Deterministic-shape mock animation for interface testing without credentials."""

from __future__ import annotations

import math
import random
from typing import Final

from .types import AnimationData, AnimationFrame

MOCK_BLENDSHAPES: Final[tuple[str, ...]] = (
    "jawOpen",
    "mouthSmile",
    "mouthPucker",
    "mouthFrown",
    "eyeBlinkLeft",
    "eyeBlinkRight",
    "browInnerUp",
    "browOuterUpLeft",
)
MOCK_FRAME_COUNT: Final[int] = 30
MOCK_FRAME_STEP: Final[float] = 0.1  # 10 fps


def _mock_weight(name: str, frame: int, rng: random.Random) -> float:
    if name == "jawOpen":
        return abs(math.sin(frame * 0.5)) * 0.8
    if "Smile" in name:
        return rng.random() * 0.3
    return rng.random() * 0.2


def build_mock_animation(rng: random.Random | None = None) -> AnimationData:
    """30 frames x 8 ARKit blendshapes spanning 0.0-2.9 s."""

    rng = rng or random.Random()
    frames = [
        AnimationFrame(
            name=name,
            value=_mock_weight(name, frame, rng),
            time=round(frame * MOCK_FRAME_STEP, 1),
        )
        for frame in range(MOCK_FRAME_COUNT)
        for name in MOCK_BLENDSHAPES
    ]
    return AnimationData(frames=tuple(frames), duration=round(MOCK_FRAME_COUNT * MOCK_FRAME_STEP, 1))


__all__ = ["MOCK_BLENDSHAPES", "MOCK_FRAME_COUNT", "build_mock_animation"]
