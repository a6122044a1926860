"""Gemini / Imagen provider for image generation."""

import base64
import json

from curl_cffi.requests import AsyncSession
from curl_cffi.requests.exceptions import Timeout
from loguru import logger
from pydantic import ValidationError

from image_studio.config import settings, model_path
from image_studio.models.request import (
    Content,
    GenerateContentRequest,
    GenerateImagesRequest,
    GenerationConfig,
    InlineData,
    Part,
    ReferenceImage,
)
from image_studio.models.response import (
    GenerationResponse,
    ProviderError,
    UpstreamResponse,
)
from image_studio.services.extract import ImageRef, describe_missing_image, find_image


TEXT_INSTRUCTION = (
    "Generate one image for the following instructions. Return only the image.\n\n{prompt}"
)
REFERENCE_INSTRUCTION = (
    "Using this image as a base, generate a new image that follows this prompt: {prompt}"
)
IMAGEN_REFERENCE_SUFFIX = ", inspired by the style and composition of the reference image"


class GeminiImageProvider:
    """Provider for the Gemini generateContent and Imagen generateImages APIs."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def generate_from_text(
        self, prompt: str
    ) -> tuple[GenerationResponse | None, ProviderError | None]:
        """
        Generate an image from a text prompt.

        Returns:
            Tuple of (response, error)
        """
        model = settings.image_model
        logger.info(f"Calling generateContent with model: {model}")
        body = self._build_text_body(prompt)
        url = self._endpoint(model, "generateContent")
        return await self._generate(url, body.model_dump(exclude_none=True))

    async def generate_from_image(
        self, prompt: str, image: bytes, mime_type: str
    ) -> tuple[GenerationResponse | None, ProviderError | None]:
        """
        Generate an image from a reference image and a text prompt.

        The upstream operation is chosen by ``settings.reference_backend``.

        Returns:
            Tuple of (response, error)
        """
        image_b64 = base64.b64encode(image).decode("ascii")

        if settings.reference_backend == "imagen":
            model = model_path(settings.imagen_model)
            body = self._build_imagen_body(prompt, image_b64, mime_type)
            url = self._endpoint(model, "generateImages")
        else:
            model = settings.image_model
            body = self._build_reference_body(prompt, image_b64, mime_type)
            url = self._endpoint(model, "generateContent")

        logger.info(
            f"Calling {settings.reference_backend} backend with model: {model}"
        )
        return await self._generate(url, body.model_dump(exclude_none=True))

    async def _generate(
        self, url: str, body: dict
    ) -> tuple[GenerationResponse | None, ProviderError | None]:
        result, error = await self._call_api(url, body)
        if error is not None:
            return None, error

        image = find_image(result)
        if image is None:
            details = describe_missing_image(result)
            logger.warning(f"Request succeeded but no image in response: {details[:200]}")
            return None, ProviderError(
                message="No image data in upstream response", details=details
            )

        if image.data is None:
            return await self._fetch_image_url(image)

        return GenerationResponse(image=image.data, mimeType=image.mime_type), None

    async def _call_api(
        self, url: str, body: dict
    ) -> tuple[UpstreamResponse | None, ProviderError | None]:
        """
        Call the upstream API.

        Returns:
            Tuple of (parsed_response, error)
        """
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": settings.gemini_api_key or "",
        }

        response = None
        try:
            response = await self.session.post(
                url=url,
                headers=headers,
                json=body,
                timeout=settings.timeout,
                proxy=settings.proxy,
            )

            if not 200 <= response.status_code < 300:
                logger.error(
                    f"API request failed - status: {response.status_code}, "
                    f"response: {response.text[:1024]}"
                )
                return None, ProviderError(
                    message="Image generation failed",
                    details=response.text,
                    status=response.status_code,
                )

            return UpstreamResponse.model_validate(response.json()), None

        except Timeout as e:
            logger.error(f"Request timeout: {e}")
            return None, ProviderError(message="Upstream request timed out", details=str(e))
        except json.JSONDecodeError as e:
            logger.error(
                f"JSON decode error: {e}, response text: {response.text[:500] if response.text else 'empty'}"
            )
            return None, ProviderError(
                message="Image generation failed",
                details="Invalid JSON response",
                status=response.status_code,
            )
        except ValidationError as e:
            logger.error(f"Unexpected response format: {e}")
            return None, ProviderError(
                message="Image generation failed",
                details="Unexpected response format",
                status=response.status_code,
            )
        except Exception as e:
            logger.exception(f"Unexpected error: {e}")
            return None, ProviderError(
                message="Error during image generation", details=str(e)
            )

    async def _fetch_image_url(
        self, image: ImageRef
    ) -> tuple[GenerationResponse | None, ProviderError | None]:
        """Download an image the upstream returned by URL and base64-encode it."""
        logger.info("Upstream returned an image URL, fetching image bytes")
        try:
            response = await self.session.get(
                image.url,
                timeout=settings.timeout,
                proxy=settings.proxy,
            )
            if not 200 <= response.status_code < 300:
                logger.error(f"Image fetch failed - status: {response.status_code}")
                return None, ProviderError(
                    message="Failed to fetch generated image",
                    details=response.text,
                    status=response.status_code,
                )

            content_type = (response.headers.get("content-type") or "").split(";")[0].strip()
            mime_type = content_type if content_type.startswith("image/") else image.mime_type
            data = base64.b64encode(response.content).decode("ascii")
            return GenerationResponse(image=data, mimeType=mime_type), None

        except Timeout as e:
            logger.error(f"Image fetch timeout: {e}")
            return None, ProviderError(message="Image fetch timed out", details=str(e))
        except Exception as e:
            logger.exception(f"Unexpected error fetching image: {e}")
            return None, ProviderError(
                message="Failed to fetch generated image", details=str(e)
            )

    def _endpoint(self, model: str, method: str) -> str:
        return f"{settings.gemini_base_api.rstrip('/')}/v1beta/{model}:{method}"

    def _build_text_body(self, prompt: str) -> GenerateContentRequest:
        """Build the generateContent body for a text-only prompt."""
        return GenerateContentRequest(
            contents=[
                Content(
                    role="user",
                    parts=[Part(text=TEXT_INSTRUCTION.format(prompt=prompt))],
                )
            ],
            generationConfig=GenerationConfig(responseModalities=["TEXT", "IMAGE"]),
        )

    def _build_reference_body(
        self, prompt: str, image_b64: str, mime_type: str
    ) -> GenerateContentRequest:
        """Build the generateContent body for an image plus prompt."""
        return GenerateContentRequest(
            contents=[
                Content(
                    role="user",
                    parts=[
                        Part(inlineData=InlineData(mimeType=mime_type, data=image_b64)),
                        Part(text=REFERENCE_INSTRUCTION.format(prompt=prompt)),
                    ],
                )
            ],
            generationConfig=GenerationConfig(responseModalities=["TEXT", "IMAGE"]),
        )

    def _build_imagen_body(
        self, prompt: str, image_b64: str, mime_type: str
    ) -> GenerateImagesRequest:
        """Build the Imagen generateImages body."""
        return GenerateImagesRequest(
            prompt=f"{prompt}{IMAGEN_REFERENCE_SUFFIX}",
            reference_image=ReferenceImage(image_bytes=image_b64, mime_type=mime_type),
            number_of_images=1,
            aspect_ratio="1:1",
        )
