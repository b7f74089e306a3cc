"""Animation generation endpoints.

For a stage-by-stage map see `app.pipelines.animation.flow`. The POST
`/api/generate-animation` pipeline performs:

1. Store the upload in a per-request scratch directory.
2. Validate inputs and resolve the model profile.
3. Transcode with ffmpeg, run the Audio2Face-3D client, parse its output.
4. Remove every temporary file and render the result or a structured error.
"""

import logging
from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from app.controllers.dependencies import PipelineDep, ScratchRootDep
from app.pipelines.animation import (
    ConversionError,
    InvocationError,
    ParseError,
    PipelineError,
    PipelineRequest,
    UnsupportedModelError,
    ValidationError,
    build_mock_animation,
    save_upload,
    scratch_directory,
)
from app.pipelines.animation.inference import mask_secret
from app.views import AnimationResponse, ErrorResponse, MockAnimationResponse

router = APIRouter(prefix="/api", tags=["animation"])

logger = logging.getLogger(__name__)

MOCK_NOTE = "Mock data for interface testing"

_STATUS_BY_ERROR: dict[type[PipelineError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    UnsupportedModelError: status.HTTP_400_BAD_REQUEST,
    ConversionError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    InvocationError: status.HTTP_502_BAD_GATEWAY,
    ParseError: status.HTTP_502_BAD_GATEWAY,
}

_AUDIO_UPLOAD = File(None)
_MODEL_FORM = Form(None)
_API_KEY_FORM = Form(None, alias="apiKey")


def status_for(error: PipelineError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@router.post(
    "/generate-animation",
    response_model=AnimationResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def generate_animation(
    pipeline: PipelineDep,
    scratch_root: ScratchRootDep,
    audio: Optional[UploadFile] = _AUDIO_UPLOAD,
    model: Optional[str] = _MODEL_FORM,
    api_key: Optional[str] = _API_KEY_FORM,
):
    """Convert the upload, run Audio2Face for ``model`` and return blendshape frames."""

    logger.info(
        "Animation request model=%s apikey=%s audio=%s",
        model,
        mask_secret(api_key) if api_key else None,
        audio.filename if audio is not None else None,
    )

    with scratch_directory(scratch_root) as scratch_dir:
        source_path = await save_upload(audio, scratch_dir)
        request = PipelineRequest(source_audio_path=source_path, model_name=model, api_key=api_key)
        try:
            animation = await pipeline.run(request)
        except PipelineError as exc:
            return JSONResponse(status_code=status_for(exc), content=exc.to_payload())

    return AnimationResponse(success=True, data=animation.to_payload())


@router.post("/test-animation", response_model=MockAnimationResponse)
async def test_animation(audio: Optional[UploadFile] = _AUDIO_UPLOAD) -> MockAnimationResponse:
    """Return mock blendshape frames without running ffmpeg or Audio2Face."""

    logger.info("Test mode: returning mock animation data")
    if audio is not None:
        await audio.close()

    animation = build_mock_animation()
    return MockAnimationResponse(success=True, data=animation.to_payload(), note=MOCK_NOTE)
