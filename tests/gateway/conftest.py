"""gateway 测试配置 -- FastAPI app + httpx AsyncClient

ASGITransport 不触发 lifespan，服务实例在 fixture 中手动装配。
"""

import json
import os
from collections.abc import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from todoai.core.analysis import TodoAnalyzer
from todoai.core.pipeline import TodoParsePipeline


def echo_title(segment: str) -> str:
    """默认响应：以分段本身作为标题"""
    return json.dumps({"title": segment or "분석", "summary": "좋아요."}, ensure_ascii=False)


@pytest_asyncio.fixture
async def app():
    """创建测试用 FastAPI app 实例"""
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    from todoai.gateway.main import create_app

    application = create_app()
    application.state.generation_client = None
    yield application

    os.environ.pop("LOGFIRE_SEND_TO_LOGFIRE", None)


@pytest.fixture
def install_generator(app, make_generator, reference_clock) -> Callable:
    """用 FakeGenerator 装配解析管道与分析服务，返回 generator"""

    def install(responder: Callable[[str], object] = echo_title):
        generator = make_generator(responder)
        app.state.pipeline = TodoParsePipeline(generator, clock=reference_clock)
        app.state.analyzer = TodoAnalyzer(generator, clock=reference_clock)
        return generator

    return install


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
