"""Upload storage and scratch directory lifecycle."""

from __future__ import annotations

import asyncio
import io
from pathlib import Path

import pytest
from fastapi import UploadFile

from app.pipelines.animation.ingestion import safe_filename, save_upload, scratch_directory


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("clip.mp3", "clip.mp3"),
        ("../../etc/passwd", "passwd"),
        ("C:\\Users\\me\\voice.m4a", "voice.m4a"),
        ("", "audio"),
        (None, "audio"),
        ("..", "audio"),
    ],
)
def test_safe_filename(raw, expected):
    assert safe_filename(raw) == expected


def test_scratch_directory_is_removed_even_on_error(tmp_path: Path):
    with pytest.raises(RuntimeError):
        with scratch_directory(tmp_path / "root") as scratch:
            (scratch / "leftover.wav").write_bytes(b"data")
            raise RuntimeError("stage failed")

    assert list((tmp_path / "root").iterdir()) == []


def test_concurrent_scratch_directories_are_distinct(tmp_path: Path):
    with scratch_directory(tmp_path) as first, scratch_directory(tmp_path) as second:
        assert first != second


def test_save_upload_writes_prefixed_file(tmp_path: Path):
    upload = UploadFile(file=io.BytesIO(b"ID3" + b"x" * 200_000), filename="nested/dir/clip.mp3")

    stored = asyncio.run(save_upload(upload, tmp_path))

    assert stored is not None
    assert stored.parent == tmp_path
    prefix, _, name = stored.name.partition("-")
    assert prefix.isdigit()
    assert name == "clip.mp3"
    assert stored.stat().st_size == 200_003


def test_save_upload_without_file(tmp_path: Path):
    assert asyncio.run(save_upload(None, tmp_path)) is None
    assert list(tmp_path.iterdir()) == []
