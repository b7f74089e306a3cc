"""Closed registry of the Audio2Face models this service can drive."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .errors import UnsupportedModelError
from .types import ModelProfile


class AnimationModel(str, Enum):
    """Selectable facial-animation models."""

    CLAIRE = "claire"
    MARK = "mark"
    JAMES = "james"


_PROFILES: Mapping[AnimationModel, ModelProfile] = MappingProxyType(
    {
        AnimationModel.CLAIRE: ModelProfile(
            name=AnimationModel.CLAIRE.value,
            external_function_id="0961a6da-fb9e-4f2e-8491-247e5fd7bf8d",
            config_file_name="config_claire.yml",
        ),
        AnimationModel.MARK: ModelProfile(
            name=AnimationModel.MARK.value,
            external_function_id="8efc55f5-6f00-424e-afe9-26212cd2c630",
            config_file_name="config_mark.yml",
        ),
        AnimationModel.JAMES: ModelProfile(
            name=AnimationModel.JAMES.value,
            external_function_id="9327c39f-a361-4e02-bd72-e11b4c9b7b5e",
            config_file_name="config_james.yml",
        ),
    }
)


def _check_registry() -> None:
    missing = [model.value for model in AnimationModel if model not in _PROFILES]
    if missing:
        raise RuntimeError(f"Models without a profile: {', '.join(missing)}")
    for model, profile in _PROFILES.items():
        if profile.name != model.value:
            raise RuntimeError(f"Profile name mismatch for {model.value!r}: {profile.name!r}")


_check_registry()


def supported_models() -> tuple[str, ...]:
    return tuple(model.value for model in AnimationModel)


def resolve_model(name: str | AnimationModel) -> ModelProfile:
    """Return the profile for ``name`` or raise ``UnsupportedModelError``."""

    try:
        model = AnimationModel(name)
    except ValueError:
        raise UnsupportedModelError(
            f"Unsupported model {name!r}; expected one of: {', '.join(supported_models())}",
        ) from None
    return _PROFILES[model]


__all__ = ["AnimationModel", "resolve_model", "supported_models"]
