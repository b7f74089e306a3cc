"""Model configuration lookup endpoint."""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.pipelines.animation import UnsupportedModelError
from app.services import ModelConfigError, get_blendshape_id
from app.views import BlendshapeIdData, ErrorResponse, ModelConfigResponse

router = APIRouter(prefix="/api", tags=["models"])

logger = logging.getLogger(__name__)


@router.get(
    "/model-config/{model}",
    response_model=ModelConfigResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def read_model_config(model: str):
    """Return the ``blendshape_id`` declared in the model's client config."""

    try:
        blendshape_id = get_blendshape_id(model)
    except UnsupportedModelError as exc:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.to_payload())
    except ModelConfigError as exc:
        logger.error("Model config lookup failed for %s: %s", model, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "ModelConfigError", "message": str(exc)},
        )

    return ModelConfigResponse(success=True, data=BlendshapeIdData(blendshape_id=blendshape_id))
