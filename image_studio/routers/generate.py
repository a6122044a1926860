"""Image generation router."""

from fastapi import APIRouter, Body, Depends, File, Form, HTTPException, UploadFile
from loguru import logger

from image_studio.config import settings, model_path
from image_studio.models.request import GenerateRequest
from image_studio.models.response import (
    ErrorResponse,
    GenerationResponse,
    ProviderError,
)
from image_studio.services.provider import GeminiImageProvider
from image_studio.services.session import get_provider


router = APIRouter(prefix="/api")


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Bad Request"},
    413: {"model": ErrorResponse, "description": "Image Too Large"},
    500: {"model": ErrorResponse, "description": "Internal Server Error"},
}


def api_error(
    status_code: int,
    message: str,
    details: str | None = None,
    status: int | None = None,
    error_type: str | None = None,
) -> HTTPException:
    """Build an HTTPException whose detail renders as an ErrorResponse body."""
    body = ErrorResponse(
        error=message, details=details, status=status, errorType=error_type
    )
    return HTTPException(
        status_code=status_code, detail=body.model_dump(exclude_none=True)
    )


def require_api_key() -> None:
    if not settings.gemini_api_key:
        logger.error("GEMINI_API_KEY is not configured")
        raise api_error(
            500,
            "GEMINI_API_KEY is not configured",
            "Set GEMINI_API_KEY in the environment or in .env",
        )


def provider_failure(error: ProviderError) -> HTTPException:
    logger.error(f"Generation failed: {error.message} ({(error.details or '')[:200]})")
    return api_error(500, error.message, error.details, error.status)


@router.post(
    "/generate",
    response_model=GenerationResponse,
    responses=ERROR_RESPONSES,
    summary="Generate an image from text",
)
async def generate(
    request: GenerateRequest | None = Body(default=None),
    provider: GeminiImageProvider = Depends(get_provider),
) -> GenerationResponse:
    """Generate an image from a text prompt."""
    logger.info("Received text-to-image request")
    require_api_key()

    # An empty or null body is treated as a missing prompt
    prompt = ((request and request.prompt) or "").strip()
    if not prompt:
        raise api_error(400, "Prompt is required")

    logger.info(f"Prompt: {prompt[:200]}")

    try:
        response, error = await provider.generate_from_text(prompt)
        if error:
            raise provider_failure(error)

        logger.info(f"Generation successful ({response.mimeType})")
        return response

    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error during generation: {e}")
        raise api_error(
            500, "Error during image generation", str(e), error_type=type(e).__name__
        )


@router.post(
    "/generate-from-image",
    response_model=GenerationResponse,
    responses=ERROR_RESPONSES,
    summary="Generate an image from a reference image and text",
)
async def generate_from_image(
    image: UploadFile | None = File(default=None, description="Reference image"),
    prompt: str | None = Form(default=None, description="Text prompt"),
    provider: GeminiImageProvider = Depends(get_provider),
) -> GenerationResponse:
    """Generate an image from an uploaded reference image and a text prompt."""
    logger.info("Received image-to-image request")
    require_api_key()

    if image is None:
        raise api_error(400, "Image is required")

    prompt = (prompt or "").strip()
    if not prompt:
        raise api_error(400, "Prompt is required")

    content_type = image.content_type or "image/png"
    if not content_type.startswith("image/"):
        raise api_error(400, "Uploaded file must be an image", f"Got {content_type}")

    # Read one byte past the limit so oversize uploads are caught without buffering them whole
    data = await image.read(settings.max_upload_bytes + 1)
    if not data:
        raise api_error(400, "Image is required", "Uploaded file is empty")
    if len(data) > settings.max_upload_bytes:
        logger.warning(f"Rejected upload larger than {settings.max_upload_bytes} bytes")
        raise api_error(
            413,
            "Image file is too large",
            f"Maximum size is {settings.max_upload_bytes // (1024 * 1024)}MB",
        )

    logger.info(f"Prompt: {prompt[:200]}")
    logger.info(
        f"Image file: name={image.filename}, type={content_type}, size={len(data)}"
    )

    try:
        response, error = await provider.generate_from_image(prompt, data, content_type)
        if error:
            raise provider_failure(error)

        logger.info(f"Generation successful ({response.mimeType})")
        return response

    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error during generation: {e}")
        raise api_error(
            500, "Error during image generation", str(e), error_type=type(e).__name__
        )


@router.get(
    "/models",
    summary="List configured models",
    description="List the upstream models this server calls.",
)
async def list_models():
    """List the configured upstream models."""
    reference_model = (
        model_path(settings.imagen_model)
        if settings.reference_backend == "imagen"
        else settings.image_model
    )
    return {
        "text": {"model": settings.image_model, "method": "generateContent"},
        "reference": {
            "backend": settings.reference_backend,
            "model": reference_model,
            "method": (
                "generateImages"
                if settings.reference_backend == "imagen"
                else "generateContent"
            ),
        },
        "configured": bool(settings.gemini_api_key),
    }
