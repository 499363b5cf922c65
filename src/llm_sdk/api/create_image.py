"""Image generation endpoint: ``POST /v1/images/generations``.

llm-sdk/api v0.1.0

请求字段为 None 时不会出现在请求体中；显式设置的枚举值（即使等于
API 默认值）总会被发送。
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import DecodeError
from .base import ApiRequest

__all__ = [
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

IMAGE_GENERATIONS_PATH = "/v1/images/generations"

# created 为 u64 时间戳
U64_MAX = 2**64 - 1


class ImageModel(str, Enum):
    """图像生成模型（仅支持 dall-e-3）。"""
    DALL_E_3 = "dall-e-3"


class ImageQuality(str, Enum):
    """图片质量。hd 细节更丰富、整体一致性更好。"""
    STANDARD = "standard"
    HD = "hd"

    @classmethod
    def default(cls) -> ImageQuality:
        return cls.STANDARD


class ImageResponseFormat(str, Enum):
    """返回格式：URL 或 base64 编码的 JSON 字符串。"""
    URL = "url"
    B64_JSON = "b64_json"

    @classmethod
    def default(cls) -> ImageResponseFormat:
        return cls.URL


class ImageSize(str, Enum):
    """输出尺寸（dall-e-3 支持的三种）。"""
    LARGE = "1024x1024"
    LARGE_WIDE = "1792x1024"
    LARGE_TALL = "1024x1792"

    @classmethod
    def default(cls) -> ImageSize:
        return cls.LARGE


class ImageStyle(str, Enum):
    """风格。vivid 偏超现实、戏剧化；natural 更自然。"""
    VIVID = "vivid"
    NATURAL = "natural"

    @classmethod
    def default(cls) -> ImageStyle:
        return cls.VIVID


@dataclass(frozen=True)
class ImageGenerationRequest:
    """图像生成请求。

    Attributes:
        prompt: 图片描述（dall-e-3 最长 4000 字符，本地不校验）
        model: 模型，固定为 dall-e-3
        count: 生成数量（序列化为 n；dall-e-3 仅支持 1）
        quality: 图片质量
        response_format: 返回格式
        size: 输出尺寸
        style: 风格
        user: 终端用户标识，便于 OpenAI 监控滥用
    """
    prompt: str
    model: ImageModel = ImageModel.DALL_E_3
    count: int | None = None
    quality: ImageQuality | None = None
    response_format: ImageResponseFormat | None = None
    size: ImageSize | None = None
    style: ImageStyle | None = None
    user: str | None = None

    def __post_init__(self) -> None:
        # bool 是 int 的子类
        if self.count is None:
            return
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise TypeError(f"count must be an int, got {type(self.count).__name__}")
        if self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}")

    @classmethod
    def new(cls, prompt: str) -> ImageGenerationRequest:
        """只设置 prompt，其余可选字段均不设置。"""
        return cls(prompt=prompt)

    def to_dict(self) -> dict[str, Any]:
        """构建请求体。"""
        body: dict[str, Any] = {
            "prompt": self.prompt,
            "model": self.model.value,
        }
        if self.count is not None:
            body["n"] = self.count
        if self.quality is not None:
            body["quality"] = self.quality.value
        if self.response_format is not None:
            body["response_format"] = self.response_format.value
        if self.size is not None:
            body["size"] = self.size.value
        if self.style is not None:
            body["style"] = self.style.value
        if self.user is not None:
            body["user"] = self.user
        return body

    def into_request(self, base_url: str) -> ApiRequest:
        return ApiRequest(
            method="POST",
            url=f"{base_url.rstrip('/')}{IMAGE_GENERATIONS_PATH}",
            body=self.to_dict(),
        )


@dataclass
class ImageResult:
    """单张生成结果。

    base64_json 和 url 由请求的 response_format 决定，只会有一个有值。

    Attributes:
        revised_prompt: 实际使用的（改写后的）提示词
        base64_json: base64 编码的图片
        url: 图片 URL
    """
    revised_prompt: str
    base64_json: str | None = None
    url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ImageResult:
        if not isinstance(data, dict):
            raise ValueError(f"image result must be an object, got {type(data).__name__}")
        revised_prompt = data.get("revised_prompt")
        if not isinstance(revised_prompt, str):
            raise ValueError("missing or invalid field 'revised_prompt'")
        return cls(
            revised_prompt=revised_prompt,
            base64_json=_opt_str(data, "b64_json"),
            url=_opt_str(data, "url"),
        )

    def image_bytes(self) -> bytes | None:
        """解码 base64_json，未设置时返回 None。

        Raises:
            DecodeError: base64_json 不是合法的 base64
        """
        if self.base64_json is None:
            return None
        try:
            return base64.b64decode(self.base64_json, validate=True)
        except binascii.Error as e:
            raise DecodeError(f"Invalid base64 image data: {e}") from e


@dataclass
class ImageGenerationResponse:
    """图像生成响应。

    Attributes:
        created: 创建时间戳（Unix 秒）
        images: 生成结果，顺序与响应 data 一致
    """
    created: int
    images: list[ImageResult] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> ImageGenerationResponse:
        """解析 API 响应。

        Raises:
            ValueError: 结构与预期不符
        """
        if not isinstance(data, dict):
            raise ValueError(f"response must be an object, got {type(data).__name__}")
        created = data.get("created")
        # bool 是 int 的子类
        if isinstance(created, bool) or not isinstance(created, int):
            raise ValueError("missing or invalid field 'created'")
        if not 0 <= created <= U64_MAX:
            raise ValueError("missing or invalid field 'created'")
        items = data.get("data")
        if not isinstance(items, list):
            raise ValueError("missing or invalid field 'data'")
        return cls(
            created=created,
            images=[ImageResult.from_dict(item) for item in items],
        )


def _opt_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field '{key}' must be a string")
    return value
