"""Read per-model Audio2Face client configuration files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

from app.config.settings import settings
from app.pipelines.animation.models import resolve_model

logger = logging.getLogger(__name__)


class ModelConfigError(RuntimeError):
    """Raised when a model config file is unreadable or lacks the blendshape id."""


def model_config_path(model_name: str, config_dir: Path | None = None) -> Path:
    """Resolve the YAML file for ``model_name``; unknown models raise ``UnsupportedModelError``."""

    profile = resolve_model(model_name)
    return (config_dir or settings.a2f.config_dir) / profile.config_file_name


def load_model_config(model_name: str, config_dir: Path | None = None) -> Mapping[str, Any]:
    config_path = model_config_path(model_name, config_dir)
    try:
        with config_path.open("r", encoding="utf-8") as config_file:
            document = yaml.safe_load(config_file)
    except (OSError, yaml.YAMLError) as exc:
        logger.error("Failed to read model config %s: %s", config_path, exc)
        raise ModelConfigError(f"Could not read model config {config_path.name}: {exc}") from exc

    if not isinstance(document, Mapping):
        raise ModelConfigError(f"Model config {config_path.name} is not a mapping")
    return document


def get_blendshape_id(model_name: str, config_dir: Path | None = None) -> str:
    """Return ``a2f.blendshape_id`` from the model's config file."""

    document = load_model_config(model_name, config_dir)
    a2f_section = document.get("a2f")
    blendshape_id = a2f_section.get("blendshape_id") if isinstance(a2f_section, Mapping) else None
    if not blendshape_id:
        raise ModelConfigError("Model config is missing a2f.blendshape_id")
    return str(blendshape_id)


__all__ = ["ModelConfigError", "get_blendshape_id", "load_model_config", "model_config_path"]
