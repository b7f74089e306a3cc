"""Request ingestion helpers: per-run scratch directories and upload storage."""

from __future__ import annotations

import logging
import shutil
import tempfile
import time
from contextlib import contextmanager
from pathlib import Path, PurePath
from typing import Final, Iterator

from fastapi import UploadFile

logger = logging.getLogger("app.pipelines.animation")

_CHUNK_SIZE: Final[int] = 1 << 16
_DEFAULT_FILENAME: Final[str] = "audio"


def _timestamp_ms() -> int:
    return time.time_ns() // 1_000_000


def safe_filename(filename: str | None) -> str:
    """Drop any directory components a client put in the upload name."""

    name = PurePath((filename or "").replace("\\", "/")).name.strip()
    if name in ("", ".", ".."):
        return _DEFAULT_FILENAME
    return name


@contextmanager
def scratch_directory(root: Path) -> Iterator[Path]:
    """Create a uniquely named directory under ``root`` and remove it on exit."""

    root.mkdir(parents=True, exist_ok=True)
    path = Path(tempfile.mkdtemp(prefix=f"{_timestamp_ms()}-", dir=root))
    try:
        yield path
    finally:
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning("Could not remove scratch directory %s", path, exc_info=True)


async def save_upload(upload: UploadFile | None, directory: Path) -> Path | None:
    """Stream ``upload`` to ``directory``; None when nothing was uploaded."""

    if upload is None or not upload.filename:
        return None

    target = directory / f"{_timestamp_ms()}-{safe_filename(upload.filename)}"
    try:
        with target.open("wb") as destination:
            while True:
                chunk = await upload.read(_CHUNK_SIZE)
                if not chunk:
                    break
                destination.write(chunk)
    finally:
        await upload.close()

    logger.info("Stored upload %s (%d bytes)", target.name, target.stat().st_size)
    return target


__all__ = ["safe_filename", "save_upload", "scratch_directory"]
