"""失败响应封装

所有路由的失败统一为 {"success": false, "error": <韩语提示>, "code": <错误码>}。
"""

import structlog
from starlette.responses import JSONResponse
from todoai.core.errors import Failure, PipelineError, classify_failure
from todoai.provider import ProviderError

log = structlog.get_logger()


def failure_response(failure: Failure) -> JSONResponse:
    return JSONResponse(status_code=failure.status_code, content=failure.to_payload())


def error_response(error: Exception) -> JSONResponse:
    """把异常转换为失败响应

    已知异常记 warning；未知异常带堆栈记录后按 UNKNOWN_ERROR 返回。
    """
    failure = classify_failure(error)
    if isinstance(error, (PipelineError, ProviderError)):
        log.warning(
            "request_failed",
            code=failure.code.value,
            status_code=failure.status_code,
            error_type=type(error).__name__,
            error=str(error),
        )
    else:
        log.exception("request_failed_unexpected", error_type=type(error).__name__)
    return failure_response(failure)
