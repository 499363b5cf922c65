"""Endpoint 模型。

llm-sdk/api v0.1.0
"""

from __future__ import annotations

from .base import ApiRequest, IntoRequest
from .create_image import (
    IMAGE_GENERATIONS_PATH,
    ImageGenerationRequest,
    ImageGenerationResponse,
    ImageModel,
    ImageQuality,
    ImageResponseFormat,
    ImageResult,
    ImageSize,
    ImageStyle,
)

__all__ = [
    # Base
    "ApiRequest",
    "IntoRequest",
    # Image generation
    "IMAGE_GENERATIONS_PATH",
    "ImageModel",
    "ImageQuality",
    "ImageResponseFormat",
    "ImageSize",
    "ImageStyle",
    "ImageGenerationRequest",
    "ImageResult",
    "ImageGenerationResponse",
]
