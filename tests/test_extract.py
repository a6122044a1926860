"""Tests for locating images in upstream responses."""
from image_studio.models.response import UpstreamResponse
from image_studio.services.extract import describe_missing_image, find_image


def test_inline_data_returned_unmodified():
    response = UpstreamResponse.model_validate({
        "candidates": [{
            "content": {"parts": [
                {"text": "sure"},
                {"inlineData": {"mimeType": "image/jpeg", "data": "AAEC/+8="}},
            ]},
        }],
    })

    image = find_image(response)
    assert image.data == "AAEC/+8="
    assert image.mime_type == "image/jpeg"
    assert image.url is None


def test_inline_data_mime_type_defaults_to_png():
    response = UpstreamResponse.model_validate({
        "candidates": [{"content": {"parts": [{"inlineData": {"data": "AAAA"}}]}}],
    })

    assert find_image(response).mime_type == "image/png"


def test_first_image_across_candidates():
    response = UpstreamResponse.model_validate({
        "candidates": [
            {"content": {"parts": [{"text": "no image here"}]}},
            {"content": {"parts": [
                {"inlineData": {"mimeType": "image/webp", "data": "first"}},
                {"inlineData": {"mimeType": "image/png", "data": "second"}},
            ]}},
        ],
    })

    assert find_image(response).data == "first"


def test_empty_inline_data_is_skipped():
    response = UpstreamResponse.model_validate({
        "candidates": [{"content": {"parts": [
            {"inlineData": {"mimeType": "image/png", "data": ""}},
            {"inlineData": {"mimeType": "image/png", "data": "real"}},
        ]}}],
    })

    assert find_image(response).data == "real"


def test_generated_images_base64_preferred_over_candidates():
    response = UpstreamResponse.model_validate({
        "generatedImages": [{"imageBase64": "imagen"}],
        "candidates": [{"content": {"parts": [{"inlineData": {"data": "gemini"}}]}}],
    })

    image = find_image(response)
    assert image.data == "imagen"
    assert image.mime_type == "image/png"


def test_generated_images_url():
    response = UpstreamResponse.model_validate({
        "generatedImages": [{"imageUrl": "https://cdn.test/out.png"}],
    })

    image = find_image(response)
    assert image.data is None
    assert image.url == "https://cdn.test/out.png"


def test_no_image_found():
    response = UpstreamResponse.model_validate({"candidates": [{"content": {"parts": [{"text": "I can't draw that."}]}}]})

    assert find_image(response) is None
    assert describe_missing_image(response) == "I can't draw that."


def test_describe_missing_image_block_reason():
    response = UpstreamResponse.model_validate({"promptFeedback": {"blockReason": "SAFETY"}})

    assert describe_missing_image(response) == "Prompt blocked: SAFETY"


def test_describe_missing_image_finish_reason():
    response = UpstreamResponse.model_validate({"candidates": [{"finishReason": "IMAGE_SAFETY"}]})

    assert "IMAGE_SAFETY" in describe_missing_image(response)


def test_describe_missing_image_empty_body():
    assert describe_missing_image(UpstreamResponse()) == "The model returned no image data"
