"""Format conversion stage: normalize any uploaded clip to mono PCM WAV."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

from app.config.settings import FfmpegConfig, settings

from .errors import ConversionError
from .types import ConvertedAudio

logger = logging.getLogger("app.pipelines.animation")


def converted_path_for(source_path: Path, suffix: str = "_pcm.wav") -> Path:
    """``clip.mp3`` -> ``clip_pcm.wav`` next to the source."""

    return source_path.with_name(f"{source_path.stem}{suffix}")


class FormatConverter:
    """Wrap ffmpeg to produce single-channel 16-bit linear PCM."""

    def __init__(self, config: FfmpegConfig | None = None) -> None:
        self._config = config or settings.ffmpeg

    def build_command(self, source_path: Path, output_path: Path) -> list[str]:
        return [
            self._config.binary,
            "-i", str(source_path),
            "-acodec", self._config.codec,
            "-ar", str(self._config.sample_rate),
            "-ac", str(self._config.channels),
            "-y",
            str(output_path),
        ]

    async def convert(self, source_path: Path) -> ConvertedAudio:
        """Transcode ``source_path``; the source file is left in place."""

        return await run_in_threadpool(self._convert_sync, Path(source_path))

    def _convert_sync(self, source_path: Path) -> ConvertedAudio:
        output_path = converted_path_for(source_path, self._config.output_suffix)
        logger.info("Converting audio %s -> %s", source_path.name, output_path.name)

        try:
            process = subprocess.run(
                self.build_command(source_path, output_path),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self._config.timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            _discard(output_path)
            raise ConversionError(
                f"ffmpeg did not finish within {self._config.timeout_seconds}s"
            ) from exc
        except OSError as exc:
            raise ConversionError(f"Could not launch ffmpeg: {exc}") from exc

        diagnostics = (process.stderr or b"").decode("utf-8", errors="replace")
        if diagnostics:
            logger.debug("ffmpeg: %s", diagnostics.strip())

        if process.returncode != 0:
            _discard(output_path)
            logger.error("ffmpeg exited with code %s for %s", process.returncode, source_path.name)
            raise ConversionError(f"ffmpeg conversion failed with exit code {process.returncode}")

        logger.info("Audio conversion succeeded: %s", output_path.name)
        return ConvertedAudio(path=output_path)


def _discard(path: Path) -> None:
    """Remove a partial ffmpeg output if one was written."""

    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.warning("Could not remove partial output %s", path, exc_info=True)


__all__ = ["FormatConverter", "converted_path_for"]
