"""Model registry and YAML config lookup."""

from __future__ import annotations

from pathlib import Path

import pytest

from app.pipelines.animation.errors import UnsupportedModelError
from app.pipelines.animation.models import AnimationModel, resolve_model, supported_models
from app.services.model_config import ModelConfigError, get_blendshape_id, model_config_path


def test_every_model_has_a_profile():
    assert supported_models() == ("claire", "mark", "james")
    for model in AnimationModel:
        profile = resolve_model(model)
        assert profile.name == model.value
        assert profile.config_file_name == f"config_{model.value}.yml"


def test_unknown_model_is_a_recoverable_error():
    with pytest.raises(UnsupportedModelError, match="nobody"):
        resolve_model("nobody")


def test_blendshape_id_is_read_from_yaml(tmp_path: Path):
    (tmp_path / "config_james.yml").write_text(
        "a2f:\n  blendshape_id: james_topology\n  fps: 30\n",
        encoding="utf-8",
    )

    assert get_blendshape_id("james", config_dir=tmp_path) == "james_topology"


def test_missing_blendshape_id(tmp_path: Path):
    (tmp_path / "config_mark.yml").write_text("a2f:\n  fps: 30\n", encoding="utf-8")

    with pytest.raises(ModelConfigError, match="blendshape_id"):
        get_blendshape_id("mark", config_dir=tmp_path)


def test_missing_file(tmp_path: Path):
    with pytest.raises(ModelConfigError, match="config_claire.yml"):
        get_blendshape_id("claire", config_dir=tmp_path)


def test_unknown_model_never_touches_disk(tmp_path: Path):
    with pytest.raises(UnsupportedModelError):
        model_config_path("nobody", config_dir=tmp_path)
