"""Shared fixtures: fake ffmpeg/Audio2Face processes and an isolated app."""

from __future__ import annotations

from pathlib import Path
import subprocess
import sys
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from app.config.settings import Audio2FaceConfig, FfmpegConfig  # noqa: E402

JSON_OUTPUT = '{"blendshapes": [{"name": "jawOpen", "value": 0.25, "time": 0.0}], "duration": 0.5}'


class FakeProcesses:
    """Stand-in for ``subprocess.run`` that records every spawned command.

    ffmpeg calls write the output file (last argument) unless told to fail;
    any other call is treated as the Audio2Face client.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.ffmpeg_returncode = 0
        self.client_returncode = 0
        self.client_stdout = JSON_OUTPUT
        self.client_stderr = ""
        self.client_error: Exception | None = None

    def __call__(self, command, **kwargs) -> subprocess.CompletedProcess:
        self.calls.append(list(command))
        if Path(command[0]).name == "ffmpeg":
            if self.ffmpeg_returncode == 0:
                Path(command[-1]).write_bytes(b"RIFF....WAVE")
            return subprocess.CompletedProcess(command, self.ffmpeg_returncode, b"", b"ffmpeg banner")
        if self.client_error is not None:
            raise self.client_error
        return subprocess.CompletedProcess(
            command,
            self.client_returncode,
            self.client_stdout.encode("utf-8"),
            self.client_stderr.encode("utf-8"),
        )

    @property
    def ffmpeg_calls(self) -> list[list[str]]:
        return [call for call in self.calls if Path(call[0]).name == "ffmpeg"]

    @property
    def client_calls(self) -> list[list[str]]:
        return [call for call in self.calls if Path(call[0]).name != "ffmpeg"]


@pytest.fixture
def fake_processes(monkeypatch: pytest.MonkeyPatch) -> FakeProcesses:
    fake = FakeProcesses()
    monkeypatch.setattr("app.pipelines.animation.conversion.subprocess.run", fake)
    monkeypatch.setattr("app.pipelines.animation.inference.subprocess.run", fake)
    return fake


@pytest.fixture
def ffmpeg_config() -> FfmpegConfig:
    return FfmpegConfig(binary="ffmpeg")


@pytest.fixture
def a2f_config(tmp_path: Path) -> Audio2FaceConfig:
    return Audio2FaceConfig(
        python_path=tmp_path / "venv" / "bin" / "python",
        client_script=tmp_path / "client" / "nim_a2f_3d_client.py",
        config_dir=tmp_path / "config",
    )


@pytest.fixture
def make_audio(tmp_path: Path) -> Callable[[str], Path]:
    def _make(name: str = "clip.mp3") -> Path:
        path = tmp_path / "uploads" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"ID3fake-mp3-bytes")
        return path

    return _make
