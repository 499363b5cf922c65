"""llm-sdk: OpenAI 兼容 API 的最小异步客户端。

llm-sdk v0.1.0
"""

from __future__ import annotations

from .api import (
    ApiRequest,
    ImageGenerationRequest,
    ImageGenerationResponse,
    ImageModel,
    ImageQuality,
    ImageResponseFormat,
    ImageResult,
    ImageSize,
    ImageStyle,
    IntoRequest,
)
from .client import LLMSDK
from .config import SDKConfig, get_sdk_config
from .errors import (
    ConfigError,
    DecodeError,
    LLMSDKError,
    RemoteAPIError,
    TransportError,
    TransportTimeoutError,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "LLMSDK",
    # Config
    "SDKConfig",
    "get_sdk_config",
    # Errors
    "LLMSDKError",
    "ConfigError",
    "TransportError",
    "TransportTimeoutError",
    "DecodeError",
    "RemoteAPIError",
    # Types
    "ApiRequest",
    "IntoRequest",
    "ImageModel",
    "ImageQuality",
    "ImageResponseFormat",
    "ImageSize",
    "ImageStyle",
    "ImageGenerationRequest",
    "ImageResult",
    "ImageGenerationResponse",
]
