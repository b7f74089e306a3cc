"""ffmpeg conversion stage."""

from __future__ import annotations

import asyncio
import subprocess
from pathlib import Path

import pytest

from app.config.settings import FfmpegConfig
from app.pipelines.animation.conversion import FormatConverter, converted_path_for
from app.pipelines.animation.errors import ConversionError


def test_converted_path_replaces_extension():
    assert converted_path_for(Path("/tmp/up/1700-clip.mp3")) == Path("/tmp/up/1700-clip_pcm.wav")
    assert converted_path_for(Path("/tmp/up/noext")) == Path("/tmp/up/noext_pcm.wav")


def test_command_requests_mono_16k_pcm(ffmpeg_config):
    command = FormatConverter(ffmpeg_config).build_command(Path("in.m4a"), Path("in_pcm.wav"))

    assert command == [
        "ffmpeg",
        "-i", "in.m4a",
        "-acodec", "pcm_s16le",
        "-ar", "16000",
        "-ac", "1",
        "-y",
        "in_pcm.wav",
    ]


def test_convert_writes_output_and_keeps_source(fake_processes, ffmpeg_config, make_audio):
    source = make_audio("clip.mp3")

    converted = asyncio.run(FormatConverter(ffmpeg_config).convert(source))

    assert converted.path == source.with_name("clip_pcm.wav")
    assert converted.path.exists()
    assert source.exists()
    assert len(fake_processes.ffmpeg_calls) == 1


def test_nonzero_exit_raises_and_removes_partial_output(fake_processes, ffmpeg_config, make_audio):
    source = make_audio("clip.mp3")
    partial = source.with_name("clip_pcm.wav")
    partial.write_bytes(b"partial")
    fake_processes.ffmpeg_returncode = 1

    with pytest.raises(ConversionError, match="exit code 1"):
        asyncio.run(FormatConverter(ffmpeg_config).convert(source))

    assert not partial.exists()


def test_missing_binary_raises_conversion_error(monkeypatch, ffmpeg_config, make_audio):
    def missing_binary(*args, **kwargs):
        raise FileNotFoundError("ffmpeg")

    monkeypatch.setattr("app.pipelines.animation.conversion.subprocess.run", missing_binary)

    with pytest.raises(ConversionError, match="Could not launch ffmpeg"):
        asyncio.run(FormatConverter(ffmpeg_config).convert(make_audio()))


def test_timeout_raises_conversion_error(monkeypatch, make_audio):
    def too_slow(command, **kwargs):
        raise subprocess.TimeoutExpired(command, kwargs["timeout"])

    monkeypatch.setattr("app.pipelines.animation.conversion.subprocess.run", too_slow)
    converter = FormatConverter(FfmpegConfig(binary="ffmpeg", timeout_seconds=5))

    with pytest.raises(ConversionError, match="within 5.0s"):
        asyncio.run(converter.convert(make_audio()))
