"""Locate image payloads in upstream Gemini/Imagen responses."""

from typing import NamedTuple

from image_studio.models.response import UpstreamResponse


DEFAULT_MIME_TYPE = "image/png"


class ImageRef(NamedTuple):
    """An image found in a response: inline base64 data, or a URL to fetch."""

    mime_type: str
    data: str | None = None
    url: str | None = None


def find_image(response: UpstreamResponse) -> ImageRef | None:
    """
    Return the first image payload in the response.

    Imagen ``generatedImages`` entries are checked before Gemini candidates.
    Within an entry inline base64 wins over a URL.
    """
    for generated in response.generatedImages:
        mime_type = generated.mimeType or DEFAULT_MIME_TYPE
        if generated.imageBase64:
            return ImageRef(mime_type, data=generated.imageBase64)
        if generated.imageUrl:
            return ImageRef(mime_type, url=generated.imageUrl)

    for candidate in response.candidates:
        if candidate.content is None:
            continue
        for part in candidate.content.parts:
            if part.inlineData is not None and part.inlineData.data:
                return ImageRef(
                    part.inlineData.mimeType or DEFAULT_MIME_TYPE,
                    data=part.inlineData.data,
                )

    return None


def describe_missing_image(response: UpstreamResponse) -> str:
    """Explain what the upstream returned when it returned no image."""
    if response.promptFeedback and response.promptFeedback.blockReason:
        return f"Prompt blocked: {response.promptFeedback.blockReason}"

    texts = []
    reasons = []
    for candidate in response.candidates:
        if candidate.finishReason and candidate.finishReason != "STOP":
            reasons.append(candidate.finishReason)
        if candidate.content is None:
            continue
        for part in candidate.content.parts:
            if part.text:
                texts.append(part.text)

    if texts:
        return "\n".join(texts)
    if reasons:
        return f"Generation finished without an image: {', '.join(reasons)}"
    return "The model returned no image data"
