"""Inference stage: run the Audio2Face-3D NIM client for one converted clip."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

from app.config.settings import Audio2FaceConfig, settings

from .errors import InvocationError
from .models import AnimationModel, resolve_model
from .types import InferenceResult, ModelProfile

logger = logging.getLogger("app.pipelines.animation")


def mask_secret(value: str, visible: int = 4) -> str:
    """Keep a short prefix of a credential for log correlation."""

    if len(value) <= visible:
        return "***"
    return f"{value[:visible]}..."


class InferenceInvoker:
    """Launch the per-model client process and capture its output."""

    def __init__(self, config: Audio2FaceConfig | None = None) -> None:
        self._config = config or settings.a2f

    def config_path_for(self, profile: ModelProfile) -> Path:
        return self._config.config_dir / profile.config_file_name

    def build_command(self, audio_path: Path, profile: ModelProfile, api_key: str) -> list[str]:
        return [
            str(self._config.python_path),
            str(self._config.client_script),
            str(audio_path),
            str(self.config_path_for(profile)),
            "--apikey", api_key,
            "--function-id", profile.external_function_id,
        ]

    async def invoke(
        self,
        audio_path: Path,
        model: ModelProfile | AnimationModel | str,
        api_key: str,
    ) -> str:
        """Return the client's stdout once it exits with status 0."""

        profile = model if isinstance(model, ModelProfile) else resolve_model(model)
        result = await run_in_threadpool(self._run_sync, Path(audio_path), profile, api_key)
        return result.raw_output

    def _run_sync(self, audio_path: Path, profile: ModelProfile, api_key: str) -> InferenceResult:
        command = self.build_command(audio_path, profile, api_key)
        logger.info(
            "Invoking Audio2Face model=%s python=%s script=%s apikey=%s",
            profile.name,
            self._config.python_path,
            self._config.client_script,
            mask_secret(api_key),
        )

        try:
            process = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self._config.timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            stderr = _decode(exc.stderr)
            raise InvocationError(
                f"Audio2Face client did not finish within {self._config.timeout_seconds}s",
                stderr=stderr,
            ) from exc
        except OSError as exc:
            raise InvocationError(f"Could not launch Audio2Face client: {exc}") from exc

        result = InferenceResult(
            raw_output=_decode(process.stdout),
            exit_status=process.returncode,
            diagnostics=_decode(process.stderr),
        )
        if result.diagnostics:
            logger.warning("Audio2Face stderr: %s", result.diagnostics.strip())

        if result.exit_status != 0:
            logger.error("Audio2Face client exited with code %s", result.exit_status)
            raise InvocationError(
                f"Audio2Face client failed (exit code {result.exit_status}): "
                f"{result.diagnostics.strip() or 'no diagnostics'}",
                stderr=result.diagnostics,
            )

        logger.debug("Audio2Face produced %d bytes of output", len(result.raw_output))
        return result


def _decode(stream: bytes | str | None) -> str:
    if stream is None:
        return ""
    if isinstance(stream, str):
        return stream
    return stream.decode("utf-8", errors="replace")


__all__ = ["InferenceInvoker", "mask_secret"]
