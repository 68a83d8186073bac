"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，profile=llm 时真实探测生成服务。
"""

import structlog
from fastapi import APIRouter, Query, Request
from starlette.responses import JSONResponse

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(
    request: Request,
    profile: str | None = Query(
        default=None,
        description="检查配置：core（默认）只检查 API 密钥；llm 额外探测生成服务",
    ),
):
    """Readiness 检查

    检查项：
    1. api_key: 是否配置了生成服务密钥
    2. generation_service: profile=llm 时调用 health_check()，否则 skipped
    """
    effective_profile = profile or "core"

    checks: dict[str, str] = {}
    all_ok = True

    client = getattr(request.app.state, "generation_client", None)
    if client is not None and client.configured:
        checks["api_key"] = "ok"
    else:
        checks["api_key"] = "missing"
        all_ok = False

    if effective_profile == "llm":
        if client is None:
            checks["generation_service"] = "unreachable"
            all_ok = False
        else:
            try:
                healthy = await client.health_check()
            except Exception as e:
                log.warning("health_check_error", error=str(e))
                healthy = False
            checks["generation_service"] = "ok" if healthy else "unreachable"
            all_ok = all_ok and healthy
    else:
        checks["generation_service"] = "skipped"

    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={
            "status": "ready" if all_ok else "not_ready",
            "profile": effective_profile,
            "checks": checks,
        },
    )
