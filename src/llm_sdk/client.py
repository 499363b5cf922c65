"""llm-sdk API 客户端。

llm-sdk v0.1.0

使用 aiohttp 异步调用 OpenAI 兼容 API。每次调用只发一次请求，
不做重试；所有失败都以 LLMSDKError 子类抛出。
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Callable, TypeVar

import aiohttp

from .api import ApiRequest, ImageGenerationRequest, ImageGenerationResponse, IntoRequest
from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, SDKConfig, get_sdk_config, normalize_base_url
from .debug_utils import sanitize_for_debug, sanitize_headers
from .errors import DecodeError, RemoteAPIError, TransportError, TransportTimeoutError

__all__ = ["LLMSDK"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LLMSDK:
    """API 客户端。

    持有 token 和一个共享的 aiohttp 会话，可被多个并发调用复用。

    Example:
        async with LLMSDK(os.environ["OPENAI_API_KEY"]) as sdk:
            response = await sdk.create_image(
                ImageGenerationRequest.new("draw a cute caterpillar")
            )
    """

    def __init__(
        self,
        token: str = "",
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """初始化客户端。

        Args:
            token: API 认证 token（为空时不发送 Authorization 头）
            base_url: API 基础 URL
            timeout: 单次请求超时时间（秒）
            session: 外部传入的会话（可选，由调用方负责关闭）
        """
        self.token = token
        self.base_url = normalize_base_url(base_url)
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    @classmethod
    def from_env(cls, config: SDKConfig | None = None) -> LLMSDK:
        """从环境变量（或给定配置）创建客户端。"""
        config = config or get_sdk_config()
        return cls(config.token, base_url=config.base_url, timeout=config.timeout)

    async def __aenter__(self) -> LLMSDK:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """获取或创建 HTTP 会话。"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """关闭 HTTP 会话（外部传入的会话不关闭）。"""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def create_image(self, request: ImageGenerationRequest) -> ImageGenerationResponse:
        """调用图像生成 API。

        Args:
            request: 请求对象

        Returns:
            ImageGenerationResponse 响应对象

        Raises:
            TransportError: 网络失败或超时
            DecodeError: 响应体不是合法 JSON 或结构不符
            RemoteAPIError: 远端返回非 2xx 状态
        """
        return await self._send(request, ImageGenerationResponse.from_dict)

    def _build_headers(self) -> dict[str, str]:
        """构建认证头，token 为空时不附加。"""
        if not self.token:
            return {}
        if self.token.startswith("Bearer "):
            return {"Authorization": self.token}
        return {"Authorization": f"Bearer {self.token}"}

    def prepare_request(self, request: IntoRequest) -> tuple[ApiRequest, dict[str, str]]:
        """将请求模型转换为传输层请求和请求头。"""
        return request.into_request(self.base_url), self._build_headers()

    async def _send(self, request: IntoRequest, decode: Callable[[Any], T]) -> T:
        """发送请求并用 decode 解析 JSON 响应体。"""
        api_request, headers = self.prepare_request(request)
        url = api_request.url

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"{api_request.method} {url} headers={sanitize_headers(headers)} "
                f"body={sanitize_for_debug(api_request.body)}"
            )

        session = await self._get_session()
        start_time = time.time()
        try:
            async with session.request(
                api_request.method,
                url,
                json=api_request.body,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as resp:
                status = resp.status
                raw = await resp.read()
        except asyncio.TimeoutError:
            logger.warning(f"Request to {url} timed out after {self.timeout}s")
            raise TransportTimeoutError(self.timeout, url) from None
        except aiohttp.ClientError as e:
            logger.warning(f"Network error calling {url}: {e}")
            raise TransportError(f"Network error: {e}", url) from e

        duration_ms = int((time.time() - start_time) * 1000)
        text = raw.decode("utf-8", errors="replace")

        try:
            payload = json.loads(raw) if raw else None
            parsed = True
        except ValueError:
            payload = None
            parsed = False

        if not 200 <= status < 300:
            logger.warning(f"API error {status} from {url} ({duration_ms}ms): {text[:200]}")
            raise RemoteAPIError.from_response(status, text, payload, url)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Response {status} from {url} ({duration_ms}ms): {sanitize_for_debug(payload)}"
            )

        if not parsed:
            raise DecodeError(f"Response body is not valid JSON: {text[:200]}", text, url)
        try:
            return decode(payload)
        except ValueError as e:
            raise DecodeError(f"Unexpected response shape: {e}", text, url) from e
