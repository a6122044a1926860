"""Response models for the public API and the upstream Gemini/Imagen replies."""

from pydantic import BaseModel, ConfigDict, Field


class GenerationResponse(BaseModel):
    """Successful generation result."""

    success: bool = Field(default=True, description="Always true on success")
    image: str = Field(..., description="Base64 encoded image")
    mimeType: str = Field(default="image/png", description="MIME type of the image")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error message")
    details: str | None = Field(default=None, description="Diagnostic detail")
    status: int | None = Field(default=None, description="Upstream HTTP status")
    errorType: str | None = Field(
        default=None, description="Exception class for unexpected errors"
    )


class UpstreamInlineData(BaseModel):
    """Inline image data as returned by the upstream API."""

    model_config = ConfigDict(extra="ignore")

    mimeType: str | None = None
    data: str | None = None


class UpstreamPart(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str | None = None
    inlineData: UpstreamInlineData | None = None


class UpstreamContent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    parts: list[UpstreamPart] = Field(default_factory=list)


class Candidate(BaseModel):
    """Candidate response from the model."""

    model_config = ConfigDict(extra="ignore")

    content: UpstreamContent | None = None
    finishReason: str | None = None


class GeneratedImage(BaseModel):
    """One entry of an Imagen ``generatedImages`` list."""

    model_config = ConfigDict(extra="ignore")

    imageBase64: str | None = None
    imageUrl: str | None = None
    mimeType: str | None = None


class PromptFeedback(BaseModel):
    model_config = ConfigDict(extra="ignore")

    blockReason: str | None = None


class UpstreamResponse(BaseModel):
    """Union of the response shapes the upstream API is known to return."""

    model_config = ConfigDict(extra="ignore")

    candidates: list[Candidate] = Field(default_factory=list)
    generatedImages: list[GeneratedImage] = Field(default_factory=list)
    promptFeedback: PromptFeedback | None = None


class ProviderError(BaseModel):
    """Failure reported by the provider, mapped to an error response by the router."""

    message: str = Field(..., description="Error message")
    details: str | None = Field(default=None, description="Diagnostic detail")
    status: int | None = Field(default=None, description="Upstream HTTP status")
