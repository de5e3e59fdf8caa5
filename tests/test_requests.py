"""Contract tests for tool request models."""

import pytest

from seedreammcp.models.errors import ValidationError
from seedreammcp.models.requests import BatchGenerationRequest, ImageGenerationRequest
from seedreammcp.models.sizes import AspectRatio, ImageSize


def test_image_generation_request_defaults():
    """Omitted optional fields take their documented defaults."""
    request = ImageGenerationRequest.from_arguments({"prompt": "A red dragon"})

    assert request.num_images == 1
    assert request.max_images == 1
    assert request.seed is None
    assert request.sync_mode is False
    assert request.enable_safety_checker is True
    assert request.guidance_scale == 2.5
    assert request.resolved_size() == ImageSize(width=1280, height=1280)
    assert request.resolved_aspect_ratio() == AspectRatio.SQUARE


def test_image_generation_request_prompt_required():
    with pytest.raises(ValidationError, match="prompt"):
        ImageGenerationRequest.from_arguments({})

    with pytest.raises(ValidationError):
        ImageGenerationRequest.from_arguments(None)


@pytest.mark.parametrize("prompt", [123, "", "   ", None, ["a"]])
def test_image_generation_request_prompt_must_be_text(prompt):
    with pytest.raises(ValidationError, match="Prompt is required and must be a non-empty string"):
        ImageGenerationRequest.from_arguments({"prompt": prompt})


def test_image_generation_request_num_images_range():
    """num_images and max_images are constrained to 1-6."""
    ImageGenerationRequest.from_arguments({"prompt": "test", "num_images": 1})
    ImageGenerationRequest.from_arguments({"prompt": "test", "num_images": 6, "max_images": 6})

    with pytest.raises(ValidationError, match="num_images"):
        ImageGenerationRequest.from_arguments({"prompt": "test", "num_images": 0})

    with pytest.raises(ValidationError, match="max_images"):
        ImageGenerationRequest.from_arguments({"prompt": "test", "max_images": 7})


def test_image_generation_request_guidance_scale_range():
    ImageGenerationRequest.from_arguments({"prompt": "test", "guidance_scale": 10})

    with pytest.raises(ValidationError, match="guidance_scale"):
        ImageGenerationRequest.from_arguments({"prompt": "test", "guidance_scale": 0.5})


def test_image_generation_request_bad_preset_fails_on_resolution():
    request = ImageGenerationRequest.from_arguments({"prompt": "test", "image_size": "poster"})

    with pytest.raises(ValidationError, match="Invalid image size preset"):
        request.resolved_size()


def test_image_generation_request_custom_size():
    request = ImageGenerationRequest.from_arguments(
        {"prompt": "test", "image_size": {"width": 2048, "height": 1536}}
    )

    assert request.resolved_size() == ImageSize(width=2048, height=1536)


def test_batch_request_accepts_one_to_five_prompts():
    assert len(BatchGenerationRequest.from_arguments({"prompts": ["a"]}).prompts) == 1
    assert len(BatchGenerationRequest.from_arguments({"prompts": list("abcde")}).prompts) == 5


def test_batch_request_rejects_empty_list():
    with pytest.raises(ValidationError, match="must not be empty"):
        BatchGenerationRequest.from_arguments({"prompts": []})


def test_batch_request_rejects_more_than_five():
    with pytest.raises(ValidationError, match="Maximum 5 prompts"):
        BatchGenerationRequest.from_arguments({"prompts": list("abcdef")})


@pytest.mark.parametrize("prompts", ["just one string", 5, {"a": 1}, None])
def test_batch_request_rejects_non_sequence(prompts):
    with pytest.raises(ValidationError):
        BatchGenerationRequest.from_arguments({"prompts": prompts})


def test_batch_request_rejects_blank_prompt():
    with pytest.raises(ValidationError, match="Prompt 2 must be a non-empty string"):
        BatchGenerationRequest.from_arguments({"prompts": ["ok", " "]})
