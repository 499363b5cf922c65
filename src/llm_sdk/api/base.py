"""Endpoint 请求的公共抽象。

llm-sdk/api v0.1.0

每个 endpoint 提供一对请求/响应模型：请求模型实现 IntoRequest，
客户端统一负责认证、超时和发送，调用方式不随 endpoint 变化。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

__all__ = ["ApiRequest", "IntoRequest"]


@dataclass(frozen=True)
class ApiRequest:
    """传输层请求描述。

    Attributes:
        method: HTTP 方法
        url: 完整请求 URL
        body: JSON 请求体
    """
    method: str
    url: str
    body: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class IntoRequest(Protocol):
    """可转换为传输层请求的请求模型。"""

    def into_request(self, base_url: str) -> ApiRequest:
        ...
