"""依赖注入模块 -- 通过 FastAPI Depends 注入服务实例

服务实例保存在 app.state，在 lifespan 中初始化。
"""

from fastapi import Request
from todoai.core.analysis import TodoAnalyzer
from todoai.core.pipeline import TodoParsePipeline


def get_pipeline(request: Request) -> TodoParsePipeline:
    """从 app.state 获取解析管道"""
    return request.app.state.pipeline


def get_analyzer(request: Request) -> TodoAnalyzer:
    """从 app.state 获取分析服务"""
    return request.app.state.analyzer
