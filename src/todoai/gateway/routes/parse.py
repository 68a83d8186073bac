"""待办解析路由

POST /api/parse-todo: 自然语言 -> 结构化待办（单条或多条）。
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from starlette.responses import JSONResponse
from todoai.core.pipeline import TodoParsePipeline

from ..deps import get_pipeline
from ..responses import error_response

router = APIRouter()


class ParseTodoRequest(BaseModel):
    """解析请求体

    text 不限定类型：缺失或非字符串由拒绝闸门统一给出提示。
    """

    text: Any = Field(default=None, description="待办的自然语言描述，多条用逗号分隔")


@router.post("/api/parse-todo")
async def parse_todo(
    body: ParseTodoRequest,
    pipeline: TodoParsePipeline = Depends(get_pipeline),
):
    """解析自然语言待办

    - 单条: {"success": true, "data": {...}}
    - 多条: {"success": true, "multiple": true, "items": [...]}
    - 失败: {"success": false, "error": "...", "code": "..."}
    """
    try:
        result = await pipeline.run(body.text)
    except Exception as e:
        return error_response(e)
    return JSONResponse(status_code=200, content=result.to_payload())
