"""Image size presets, aspect ratios and model versions supported by SeedDream."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

MIN_DIMENSION = 1024
MAX_DIMENSION = 4096


class SeedreamVersion(str, Enum):
    """SeedDream model generations exposed through FAL."""

    V4 = "v4"  # image_size presets / custom dimensions
    V3 = "v3"  # aspect_ratio + guidance_scale

    @property
    def endpoint(self) -> str:
        """FAL application id for this model version."""
        return f"fal-ai/bytedance/seedream/{self.value}/text-to-image"

    @property
    def display_name(self) -> str:
        return f"SeedDream {self.value[1:]}.0"


class ImageSizePreset(str, Enum):
    """Named output sizes accepted by SeedDream 4.0."""

    SQUARE_1024 = "square_1024"
    SQUARE_1280 = "square_1280"
    SQUARE_1536 = "square_1536"
    PORTRAIT_1024 = "portrait_1024"
    PORTRAIT_1280 = "portrait_1280"
    LANDSCAPE_1024 = "landscape_1024"
    LANDSCAPE_1280 = "landscape_1280"
    WIDE_1024 = "wide_1024"
    TALL_1024 = "tall_1024"


PRESET_DIMENSIONS: dict[ImageSizePreset, tuple[int, int]] = {
    ImageSizePreset.SQUARE_1024: (1024, 1024),
    ImageSizePreset.SQUARE_1280: (1280, 1280),
    ImageSizePreset.SQUARE_1536: (1536, 1536),
    ImageSizePreset.PORTRAIT_1024: (1024, 1280),
    ImageSizePreset.PORTRAIT_1280: (1280, 1600),
    ImageSizePreset.LANDSCAPE_1024: (1280, 1024),
    ImageSizePreset.LANDSCAPE_1280: (1600, 1280),
    ImageSizePreset.WIDE_1024: (1536, 1024),
    ImageSizePreset.TALL_1024: (1024, 1536),
}

DEFAULT_PRESET = ImageSizePreset.SQUARE_1280


class AspectRatio(str, Enum):
    """Aspect ratio tokens accepted by SeedDream 3.0."""

    ULTRA_WIDE = "21:9"
    WIDE = "16:9"
    LANDSCAPE_4_3 = "4:3"
    LANDSCAPE_3_2 = "3:2"
    SQUARE = "1:1"
    PORTRAIT_2_3 = "2:3"
    PORTRAIT_3_4 = "3:4"
    TALL = "9:16"


DEFAULT_ASPECT_RATIO = AspectRatio.SQUARE


class ImageSize(BaseModel):
    """Concrete output dimensions sent to the model."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., ge=MIN_DIMENSION, le=MAX_DIMENSION, description="Image width in pixels")
    height: int = Field(..., ge=MIN_DIMENSION, le=MAX_DIMENSION, description="Image height in pixels")

    @property
    def label(self) -> str:
        return f"{self.width}x{self.height}"

    def as_dict(self) -> dict[str, int]:
        return {"width": self.width, "height": self.height}
