"""Service layer helpers for external integrations."""

from .model_config import (
    ModelConfigError,
    get_blendshape_id,
    load_model_config,
    model_config_path,
)

__all__ = [
    "ModelConfigError",
    "get_blendshape_id",
    "load_model_config",
    "model_config_path",
]
