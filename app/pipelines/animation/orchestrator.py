"""Pipeline orchestrator: convert -> invoke -> normalize for one request."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator

from app.telemetry import observe_stage, record_pipeline_outcome

from .conversion import FormatConverter
from .errors import PipelineError, ValidationError
from .flow import AnimationPipelineMap, PipelineState, next_state
from .inference import InferenceInvoker, mask_secret
from .models import resolve_model
from .normalization import normalize
from .types import AnimationData, ConvertedAudio, ModelProfile, PipelineRequest

logger = logging.getLogger("app.pipelines.animation")

_STAGE_COUNT = len(tuple(AnimationPipelineMap.describe()))


class AnimationPipeline:
    """Run one request through the stages and clean up after it.

    The orchestrator owns ``request.source_audio_path`` once ``run`` is
    called: the upload and the converted PCM file are deleted as soon as the
    inference stage completes, and in every case before ``run`` returns.
    """

    def __init__(
        self,
        converter: FormatConverter | None = None,
        invoker: InferenceInvoker | None = None,
        normalizer: Callable[[str], AnimationData] = normalize,
    ) -> None:
        self._converter = converter or FormatConverter()
        self._invoker = invoker or InferenceInvoker()
        self._normalize = normalizer

    async def run(self, request: PipelineRequest) -> AnimationData:
        state = PipelineState.RECEIVED
        converted: ConvertedAudio | None = None
        cleaned_up = False
        try:
            profile = self._accept(request)
            logger.info(
                "Pipeline accepted model=%s apikey=%s audio=%s",
                profile.name,
                mask_secret(request.api_key or ""),
                Path(request.source_audio_path).name,
            )

            state = self._advance(state)
            with self._stage(state):
                converted = await self._converter.convert(Path(request.source_audio_path))

            state = self._advance(state)
            try:
                with self._stage(state):
                    raw_output = await self._invoker.invoke(converted.path, profile, request.api_key)
            finally:
                self._cleanup(request.source_audio_path, converted)
                cleaned_up = True

            state = self._advance(state)
            with self._stage(state):
                animation = self._normalize(raw_output)

            state = self._advance(state)
        except PipelineError as exc:
            exc.stage = exc.stage or state.value
            logger.error("Pipeline failed at %s: %s: %s", exc.stage, exc.category, exc.message)
            record_pipeline_outcome(exc.category, exc.stage)
            raise
        except Exception:
            logger.exception("Unexpected failure at %s", state.value)
            record_pipeline_outcome("InternalError", state.value)
            raise
        finally:
            if not cleaned_up:
                self._cleanup(request.source_audio_path, converted)

        record_pipeline_outcome(None)
        logger.info(
            "Pipeline done: %d frames across %d blendshapes",
            len(animation.frames),
            len(animation.blendshape_names),
        )
        return animation

    @staticmethod
    def _accept(request: PipelineRequest) -> ModelProfile:
        """Validate presence of every input, then resolve the model."""

        presence = {
            "hasAudio": bool(request.source_audio_path),
            "hasModel": bool(request.model_name),
            "hasApiKey": bool(request.api_key),
        }
        if not all(presence.values()):
            missing = ", ".join(name[3:] for name, present in presence.items() if not present)
            raise ValidationError(f"Missing required parameters: {missing}", details=presence)
        return resolve_model(request.model_name)

    @staticmethod
    def _advance(state: PipelineState) -> PipelineState:
        new_state = next_state(state)
        stage = AnimationPipelineMap.stage_for(new_state)
        if stage is not None:
            logger.debug("Stage %d/%d %s: %s", stage.order, _STAGE_COUNT, new_state.value, stage.summary)
        return new_state

    @staticmethod
    @contextmanager
    def _stage(state: PipelineState) -> Iterator[None]:
        started = time.perf_counter()
        try:
            yield
        finally:
            observe_stage(state.value, time.perf_counter() - started)

    @staticmethod
    def _cleanup(source_path: Path | str | None, converted: ConvertedAudio | None) -> None:
        """Delete the upload and the PCM file; failures are logged only."""

        targets = [Path(source_path)] if source_path else []
        if converted is not None:
            targets.append(converted.path)
        for target in targets:
            try:
                target.unlink(missing_ok=True)
            except OSError:
                logger.warning("Could not delete temporary file %s", target, exc_info=True)


__all__ = ["AnimationPipeline"]
