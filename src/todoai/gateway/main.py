"""FastAPI 应用主文件

app 创建 + lifespan 管理：生成服务客户端、解析管道、分析服务初始化 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse
from todoai.core.analysis import TodoAnalyzer
from todoai.core.errors import Failure
from todoai.core.models import ErrorCode
from todoai.core.pipeline import TodoParsePipeline
from todoai.provider import GenerationClient, ProfileRegistry, load_provider_config

from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .responses import failure_response
from .routes import analyze, health, parse

log = structlog.get_logger()

INVALID_REQUEST = Failure(
    ErrorCode.INVALID_INPUT,
    400,
    "잘못된 요청 형식입니다.",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化生成服务与管道"""
    provider_config = load_provider_config()
    app.state.provider_config = provider_config

    client = GenerationClient(
        model=provider_config.model,
        api_key=provider_config.api_key.get_secret_value(),
        api_base=provider_config.api_base,
        timeout_s=provider_config.timeout_s,
        profiles=ProfileRegistry(),
    )
    app.state.generation_client = client
    app.state.pipeline = TodoParsePipeline(client)
    app.state.analyzer = TodoAnalyzer(client)

    log.info(
        "generation_service_initialized",
        model=provider_config.model,
        timeout_s=provider_config.timeout_s,
        configured=client.configured,
    )

    yield


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """请求体无法解析时返回统一的失败结构"""
    log.info("request_validation_failed", error_count=len(exc.errors()))
    return failure_response(INVALID_REQUEST)


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="TodoAI",
        version="0.1.0",
        description="자연어 할 일 파싱 및 분석 API",
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    setup_logging()
    setup_logfire()

    app.include_router(parse.router, tags=["parse"])
    app.include_router(analyze.router, tags=["analyze"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
