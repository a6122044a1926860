"""Data models for the application."""

from .request import (
    GenerateRequest,
    Content,
    Part,
    InlineData,
    GenerationConfig,
    GenerateContentRequest,
    GenerateImagesRequest,
    ReferenceImage,
)
from .response import (
    GenerationResponse,
    ErrorResponse,
    UpstreamResponse,
    Candidate,
    GeneratedImage,
    ProviderError,
)

__all__ = [
    "GenerateRequest",
    "Content",
    "Part",
    "InlineData",
    "GenerationConfig",
    "GenerateContentRequest",
    "GenerateImagesRequest",
    "ReferenceImage",
    "GenerationResponse",
    "ErrorResponse",
    "UpstreamResponse",
    "Candidate",
    "GeneratedImage",
    "ProviderError",
]
