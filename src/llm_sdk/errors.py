"""llm-sdk 异常类。

llm-sdk v0.1.0

所有异常都继承自 LLMSDKError，调用方可按需捕获。本层不做任何重试。
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "LLMSDKError",
    "ConfigError",
    "TransportError",
    "TransportTimeoutError",
    "DecodeError",
    "RemoteAPIError",
]

# 异常消息中保留的响应体最大长度
_BODY_PREVIEW = 200


class LLMSDKError(Exception):
    """llm-sdk 基础异常。"""
    pass


class ConfigError(LLMSDKError):
    """配置错误（如 LLM_SDK_TIMEOUT 不是正数）。"""
    pass


class TransportError(LLMSDKError):
    """网络调用未能完成（连接失败、DNS、TLS、超时）。

    Attributes:
        message: 错误消息
        api_url: 请求的 API 完整路径
    """

    def __init__(self, message: str, api_url: str = "") -> None:
        self.message = message
        self.api_url = api_url
        super().__init__(message)


class TransportTimeoutError(TransportError):
    """请求超过客户端超时时间。

    Attributes:
        timeout: 超时时间（秒）
    """

    def __init__(self, timeout: float, api_url: str = "") -> None:
        self.timeout = timeout
        super().__init__(f"Request timed out after {timeout}s", api_url)


class DecodeError(LLMSDKError):
    """响应体不是合法 JSON，或结构与预期不符。

    Attributes:
        message: 错误消息
        body: 原始响应体
        api_url: 请求的 API 完整路径
    """

    def __init__(self, message: str, body: str = "", api_url: str = "") -> None:
        self.message = message
        self.body = body
        self.api_url = api_url
        super().__init__(message)


class RemoteAPIError(LLMSDKError):
    """远端返回非 2xx 状态。

    响应体符合 ``{"error": {...}}`` 结构时解析出 message/type/code/param，
    否则 message 为原始响应体。

    Attributes:
        status_code: HTTP 状态码
        message: 错误消息
        error_type: 错误类型（如 invalid_request_error）
        code: 错误代码
        param: 出错的参数名
        body: 原始响应体
        api_url: 请求的 API 完整路径
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        error_type: str | None = None,
        code: str | None = None,
        param: str | None = None,
        body: str = "",
        api_url: str = "",
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.error_type = error_type
        self.code = code
        self.param = param
        self.body = body
        self.api_url = api_url
        super().__init__(f"[{status_code}] {message}")

    @classmethod
    def from_response(
        cls, status_code: int, body: str, payload: Any = None, api_url: str = ""
    ) -> RemoteAPIError:
        """根据状态码和（可能已解析的）响应体构建异常。"""
        error = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return cls(
                status_code,
                error["message"],
                error_type=_opt_str(error.get("type")),
                code=_opt_str(error.get("code")),
                param=_opt_str(error.get("param")),
                body=body,
                api_url=api_url,
            )
        return cls(status_code, body[:_BODY_PREVIEW] or "(empty body)", body=body, api_url=api_url)


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
