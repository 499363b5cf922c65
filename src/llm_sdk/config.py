"""llm-sdk 配置。

llm-sdk v0.1.0

环境变量:
    OPENAI_API_KEY: API 认证 token（为空时不发送 Authorization 头）
    OPENAI_BASE_URL: API 基础 URL（默认 https://api.openai.com）
    LLM_SDK_TIMEOUT: 请求超时时间（秒，默认 30）
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ConfigError

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "SDKConfig",
    "get_sdk_config",
    "normalize_base_url",
]

# 默认 API 基础 URL（不含版本路径，由各 endpoint 自行拼接 /v1/...）
DEFAULT_BASE_URL = "https://api.openai.com"

# 默认超时（秒）
DEFAULT_TIMEOUT = 30.0


def normalize_base_url(url: str) -> str:
    """规范化 BASE_URL，去掉末尾的 / 和 /v1。"""
    url = url.strip().rstrip("/")
    if url.endswith("/v1"):
        url = url[: -len("/v1")]
    return url or DEFAULT_BASE_URL


def _parse_timeout(value: str) -> float:
    """解析超时时间。"""
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigError(f"LLM_SDK_TIMEOUT must be a number, got {value!r}") from None
    if timeout <= 0:
        raise ConfigError(f"LLM_SDK_TIMEOUT must be positive, got {value!r}")
    return timeout


@dataclass
class SDKConfig:
    """llm-sdk 环境配置。

    Attributes:
        token: API 认证 token
        base_url: API 基础 URL
        timeout: 请求超时时间（秒）
    """
    token: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    @property
    def is_configured(self) -> bool:
        """检查是否已配置 API token。"""
        return bool(self.token)


def get_sdk_config() -> SDKConfig:
    """从环境变量加载配置。

    Returns:
        SDKConfig 实例

    Raises:
        ConfigError: LLM_SDK_TIMEOUT 无效
    """
    token = os.environ.get("OPENAI_API_KEY", "")
    raw_url = os.environ.get("OPENAI_BASE_URL", DEFAULT_BASE_URL)

    raw_timeout = os.environ.get("LLM_SDK_TIMEOUT", "").strip()
    timeout = _parse_timeout(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT

    return SDKConfig(
        token=token,
        base_url=normalize_base_url(raw_url),
        timeout=timeout,
    )
