"""待办分析路由

POST /api/analyze-todos: 对已有待办列表生成总结、紧急任务、洞察与建议。
"""

from typing import Any

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, TypeAdapter, ValidationError
from starlette.responses import JSONResponse
from todoai.core.analysis import TodoAnalyzer
from todoai.core.errors import Failure
from todoai.core.models import AnalysisPeriod, ErrorCode, TodoItem

from ..deps import get_analyzer
from ..responses import error_response, failure_response

log = structlog.get_logger()

router = APIRouter()

INVALID_TODOS = Failure(
    ErrorCode.INVALID_INPUT,
    400,
    "할 일 목록 데이터가 올바르지 않습니다.",
)
INVALID_PERIOD = Failure(
    ErrorCode.INVALID_INPUT,
    400,
    "분석 기간을 지정해주세요. (today 또는 week)",
)

_todo_list_adapter = TypeAdapter(list[TodoItem])


class AnalyzeTodosRequest(BaseModel):
    """分析请求体（字段在路由内逐项校验，以返回对应的提示）"""

    todos: Any = Field(default=None, description="待办记录列表")
    period: Any = Field(default=None, description="分析周期：today 或 week")


@router.post("/api/analyze-todos")
async def analyze_todos(
    body: AnalyzeTodosRequest,
    analyzer: TodoAnalyzer = Depends(get_analyzer),
):
    """分析待办列表

    - 成功: {"success": true, "data": {summary, urgentTasks, insights, recommendations}}
    - 失败: {"success": false, "error": "...", "code": "..."}
    """
    if not isinstance(body.todos, list):
        return failure_response(INVALID_TODOS)

    try:
        period = AnalysisPeriod(body.period)
    except ValueError:
        return failure_response(INVALID_PERIOD)

    try:
        todos = _todo_list_adapter.validate_python(body.todos)
    except ValidationError as e:
        log.info("analysis_todos_invalid", error_count=e.error_count())
        return failure_response(INVALID_TODOS)

    try:
        result = await analyzer.analyze(todos, period)
    except Exception as e:
        return error_response(e)
    return JSONResponse(status_code=200, content={"success": True, "data": result.to_payload()})
