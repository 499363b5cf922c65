"""图像生成请求/响应模型测试。"""

from __future__ import annotations

import base64
import dataclasses
import json

import pytest

from llm_sdk.api import (
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
from llm_sdk.errors import DecodeError


class TestRequestSerialize:
    """测试请求序列化。"""

    def test_prompt_only(self):
        """只设置 prompt 时仅包含 prompt 和 model。"""
        req = ImageGenerationRequest.new("draw a cute caterpillar")
        assert req.to_dict() == {
            "prompt": "draw a cute caterpillar",
            "model": "dall-e-3",
        }

    def test_prompt_only_json(self):
        """JSON 文本与预期完全一致。"""
        req = ImageGenerationRequest.new("draw a cute caterpillar")
        assert json.dumps(req.to_dict(), separators=(",", ":")) == (
            '{"prompt":"draw a cute caterpillar","model":"dall-e-3"}'
        )

    def test_custom_fields(self):
        """设置 quality 和 style。"""
        req = ImageGenerationRequest(
            prompt="draw a cute caterpillar",
            quality=ImageQuality.HD,
            style=ImageStyle.NATURAL,
        )
        assert req.to_dict() == {
            "prompt": "draw a cute caterpillar",
            "model": "dall-e-3",
            "quality": "hd",
            "style": "natural",
        }

    def test_all_fields(self):
        """全部字段，count 序列化为 n。"""
        req = ImageGenerationRequest(
            prompt="p",
            count=1,
            quality=ImageQuality.STANDARD,
            response_format=ImageResponseFormat.B64_JSON,
            size=ImageSize.LARGE_WIDE,
            style=ImageStyle.VIVID,
            user="user-42",
        )
        assert req.to_dict() == {
            "prompt": "p",
            "model": "dall-e-3",
            "n": 1,
            "quality": "standard",
            "response_format": "b64_json",
            "size": "1792x1024",
            "style": "vivid",
            "user": "user-42",
        }

    def test_unset_fields_never_null(self):
        """未设置的字段不会以 null 出现。"""
        body = ImageGenerationRequest.new("p").to_dict()
        assert None not in body.values()
        for key in ("n", "quality", "response_format", "size", "style", "user"):
            assert key not in body

    def test_default_variant_is_emitted(self):
        """显式设置的默认枚举值会被发送。"""
        req = ImageGenerationRequest(prompt="p", quality=ImageQuality.default())
        assert req.to_dict()["quality"] == "standard"

    def test_empty_user_is_emitted(self):
        """空字符串是已设置的值。"""
        req = ImageGenerationRequest(prompt="p", user="")
        assert req.to_dict()["user"] == ""

    def test_empty_prompt_not_validated(self):
        """本地不校验 prompt。"""
        assert ImageGenerationRequest.new("").to_dict()["prompt"] == ""

    @pytest.mark.parametrize("count", [True, 1.0, "1"])
    def test_count_must_be_int(self, count):
        """count 只接受整数（bool 除外）。"""
        with pytest.raises(TypeError):
            ImageGenerationRequest(prompt="p", count=count)

    def test_count_negative(self):
        with pytest.raises(ValueError):
            ImageGenerationRequest(prompt="p", count=-1)

    def test_frozen(self):
        """构造后不可修改。"""
        req = ImageGenerationRequest.new("p")
        with pytest.raises(dataclasses.FrozenInstanceError):
            req.prompt = "other"  # type: ignore[misc]


class TestEnumValues:
    """测试枚举字面值。"""

    @pytest.mark.parametrize("member,value", [
        (ImageModel.DALL_E_3, "dall-e-3"),
        (ImageQuality.STANDARD, "standard"),
        (ImageQuality.HD, "hd"),
        (ImageResponseFormat.URL, "url"),
        (ImageResponseFormat.B64_JSON, "b64_json"),
        (ImageSize.LARGE, "1024x1024"),
        (ImageSize.LARGE_WIDE, "1792x1024"),
        (ImageSize.LARGE_TALL, "1024x1792"),
        (ImageStyle.VIVID, "vivid"),
        (ImageStyle.NATURAL, "natural"),
    ])
    def test_literal(self, member, value):
        assert member.value == value

    def test_closed_set(self):
        """非法值无法构造枚举。"""
        with pytest.raises(ValueError):
            ImageSize("512x512")

    def test_api_defaults(self):
        assert ImageQuality.default() is ImageQuality.STANDARD
        assert ImageResponseFormat.default() is ImageResponseFormat.URL
        assert ImageSize.default() is ImageSize.LARGE
        assert ImageStyle.default() is ImageStyle.VIVID


class TestIntoRequest:
    """测试转换为传输层请求。"""

    def test_method_url_body(self):
        req = ImageGenerationRequest.new("p")
        api_request = req.into_request("https://api.openai.com")
        assert api_request == ApiRequest(
            method="POST",
            url="https://api.openai.com/v1/images/generations",
            body={"prompt": "p", "model": "dall-e-3"},
        )

    def test_trailing_slash(self):
        api_request = ImageGenerationRequest.new("p").into_request("http://localhost:8080/")
        assert api_request.url == "http://localhost:8080/v1/images/generations"

    def test_protocol(self):
        assert isinstance(ImageGenerationRequest.new("p"), IntoRequest)


class TestResponseDecode:
    """测试响应解析。"""

    def test_preserves_values(self):
        """created、数量和每个字段都被保留。"""
        data = {
            "created": 18446744073709551615,
            "data": [
                {"url": "https://example.com/a.png", "revised_prompt": "a"},
                {"b64_json": "aGVsbG8=", "revised_prompt": "b"},
            ],
        }
        res = ImageGenerationResponse.from_dict(data)
        assert res.created == 18446744073709551615
        assert len(res.images) == 2
        assert res.images[0] == ImageResult(
            revised_prompt="a", url="https://example.com/a.png"
        )
        assert res.images[1].base64_json == "aGVsbG8="
        assert res.images[1].url is None

    def test_image_bytes(self):
        payload = base64.b64encode(b"\x89PNG fake").decode()
        result = ImageResult(revised_prompt="x", base64_json=payload)
        assert result.image_bytes() == b"\x89PNG fake"
        assert ImageResult(revised_prompt="x", url="u").image_bytes() is None

    def test_invalid_base64(self):
        """非法 base64 以 DecodeError 抛出。"""
        result = ImageResult(revised_prompt="x", base64_json="not*base64!")
        with pytest.raises(DecodeError, match="base64"):
            result.image_bytes()

    def test_max_u64_created(self):
        res = ImageGenerationResponse.from_dict({"created": 2**64 - 1, "data": []})
        assert res.created == 2**64 - 1

    def test_empty_data(self):
        res = ImageGenerationResponse.from_dict({"created": 1, "data": []})
        assert res.images == []

    @pytest.mark.parametrize("data", [
        [],
        {"data": []},
        {"created": "1", "data": []},
        {"created": -1, "data": []},
        {"created": True, "data": []},
        {"created": 2**64, "data": []},
        {"created": 1},
        {"created": 1, "data": {}},
        {"created": 1, "data": ["x"]},
        {"created": 1, "data": [{"url": "u"}]},
        {"created": 1, "data": [{"url": 3, "revised_prompt": "p"}]},
    ])
    def test_invalid_shape(self, data):
        with pytest.raises(ValueError):
            ImageGenerationResponse.from_dict(data)
