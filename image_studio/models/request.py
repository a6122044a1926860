"""Request models for the public API and the upstream Gemini/Imagen calls."""

from typing import Literal
from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    """Body of ``POST /api/generate``."""

    prompt: str | None = Field(default=None, description="Text prompt for the image")


class InlineData(BaseModel):
    """Inline data for image content."""

    mimeType: str = Field(..., description="MIME type of the data")
    data: str = Field(..., description="Base64 encoded data")


class Part(BaseModel):
    """Part of content, can be text or inline data."""

    text: str | None = Field(default=None, description="Text content")
    inlineData: InlineData | None = Field(default=None, description="Inline data")


class Content(BaseModel):
    """Content with role and parts."""

    role: Literal["user", "model"] = Field(default="user", description="Role of the content")
    parts: list[Part] = Field(default_factory=list, description="Parts of the content")


class GenerationConfig(BaseModel):
    """Generation configuration."""

    responseModalities: list[str] = Field(
        default=["TEXT", "IMAGE"], description="Response modalities"
    )


class GenerateContentRequest(BaseModel):
    """Body of the upstream ``models/{model}:generateContent`` call."""

    contents: list[Content] = Field(..., description="Contents to generate from")
    generationConfig: GenerationConfig | None = Field(
        default=None, description="Generation configuration"
    )


class ReferenceImage(BaseModel):
    """Reference image for the Imagen ``generateImages`` call."""

    image_bytes: str = Field(..., description="Base64 encoded image")
    mime_type: str = Field(..., description="MIME type of the image")


class GenerateImagesRequest(BaseModel):
    """Body of the upstream ``models/{model}:generateImages`` call."""

    prompt: str = Field(..., description="Prompt for generation")
    reference_image: ReferenceImage | None = Field(
        default=None, description="Optional reference image"
    )
    number_of_images: int = Field(default=1, description="Number of images to generate")
    aspect_ratio: str = Field(default="1:1", description="Aspect ratio (e.g., '1:1', '16:9')")
