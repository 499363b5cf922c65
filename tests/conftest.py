"""Pytest 配置和 fixtures。"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

# 项目根目录
PROJECT_ROOT = Path(__file__).parent.parent

# 添加 src 目录到 Python 路径
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from llm_sdk import LLMSDK  # noqa: E402

SAMPLE_RESPONSE: dict[str, Any] = {
    "created": 1700000000,
    "data": [
        {
            "url": "https://example.com/caterpillar.png",
            "revised_prompt": "A cute green caterpillar on a leaf",
        }
    ],
}


class FakeImagesAPI:
    """本地 /v1/images/generations 替身，记录收到的请求。"""

    def __init__(self) -> None:
        self.base_url = ""
        self.requests: list[dict[str, Any]] = []
        self.status = 200
        self.body = json.dumps(SAMPLE_RESPONSE)
        self.content_type = "application/json"
        self.delay = 0.0

    def reply(self, payload: Any, status: int = 200) -> None:
        self.status = status
        self.body = json.dumps(payload)

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append({
            "method": request.method,
            "path": request.path,
            "headers": dict(request.headers),
            "json": await request.json(),
        })
        if self.delay:
            await asyncio.sleep(self.delay)
        return web.Response(status=self.status, text=self.body, content_type=self.content_type)


@pytest_asyncio.fixture
async def fake_api():
    """启动本地 API 替身。"""
    api = FakeImagesAPI()
    app = web.Application()
    app.router.add_post("/v1/images/generations", api.handle)
    server = TestServer(app)
    await server.start_server()
    api.base_url = f"http://{server.host}:{server.port}"
    try:
        yield api
    finally:
        await server.close()


@pytest_asyncio.fixture
async def sdk(fake_api: FakeImagesAPI):
    """指向本地替身的客户端。"""
    client = LLMSDK("sk-test-token", base_url=fake_api.base_url, timeout=5)
    try:
        yield client
    finally:
        await client.close()


@pytest.fixture
def sample_response() -> dict[str, Any]:
    """成功响应样本。"""
    return json.loads(json.dumps(SAMPLE_RESPONSE))
