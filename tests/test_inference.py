"""Audio2Face client invocation stage."""

from __future__ import annotations

import asyncio
import subprocess
from pathlib import Path

import pytest

from app.pipelines.animation.errors import InvocationError, UnsupportedModelError
from app.pipelines.animation.inference import InferenceInvoker, mask_secret
from app.pipelines.animation.models import AnimationModel, resolve_model


def test_command_carries_paths_key_and_function_id(a2f_config):
    invoker = InferenceInvoker(a2f_config)
    profile = resolve_model("mark")

    command = invoker.build_command(Path("/scratch/clip_pcm.wav"), profile, "nvapi-secret")

    assert command == [
        str(a2f_config.python_path),
        str(a2f_config.client_script),
        "/scratch/clip_pcm.wav",
        str(a2f_config.config_dir / "config_mark.yml"),
        "--apikey", "nvapi-secret",
        "--function-id", "8efc55f5-6f00-424e-afe9-26212cd2c630",
    ]


def test_invoke_returns_stdout(fake_processes, a2f_config):
    fake_processes.client_stdout = "name,value,time\njawOpen,0.5,0.1\n"

    output = asyncio.run(
        InferenceInvoker(a2f_config).invoke(Path("clip_pcm.wav"), AnimationModel.CLAIRE, "key-123")
    )

    assert output == "name,value,time\njawOpen,0.5,0.1\n"
    assert len(fake_processes.client_calls) == 1


def test_nonzero_exit_carries_stderr(fake_processes, a2f_config):
    fake_processes.client_returncode = 2
    fake_processes.client_stderr = "401 Unauthorized"

    with pytest.raises(InvocationError) as excinfo:
        asyncio.run(InferenceInvoker(a2f_config).invoke(Path("clip_pcm.wav"), "james", "bad-key"))

    assert excinfo.value.stderr == "401 Unauthorized"
    assert "401 Unauthorized" in excinfo.value.message


def test_unknown_model_spawns_nothing(fake_processes, a2f_config):
    with pytest.raises(UnsupportedModelError):
        asyncio.run(InferenceInvoker(a2f_config).invoke(Path("clip_pcm.wav"), "nobody", "key"))

    assert fake_processes.calls == []


def test_launch_failure_raises_invocation_error(fake_processes, a2f_config):
    fake_processes.client_error = PermissionError("not executable")

    with pytest.raises(InvocationError, match="Could not launch"):
        asyncio.run(InferenceInvoker(a2f_config).invoke(Path("clip_pcm.wav"), "claire", "key"))


def test_timeout_raises_invocation_error(fake_processes, a2f_config):
    fake_processes.client_error = subprocess.TimeoutExpired(["python"], 30, stderr=b"still waiting")
    invoker = InferenceInvoker(a2f_config.model_copy(update={"timeout_seconds": 30.0}))

    with pytest.raises(InvocationError) as excinfo:
        asyncio.run(invoker.invoke(Path("clip_pcm.wav"), "claire", "key"))

    assert excinfo.value.stderr == "still waiting"


def test_mask_secret_hides_most_of_the_key():
    assert mask_secret("nvapi-abcdef") == "nvap..."
    assert mask_secret("abc") == "***"
