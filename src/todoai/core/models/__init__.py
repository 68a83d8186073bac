"""TodoAI Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .analysis import AnalysisResult, AnalysisStats, TodoItem
from .anchor import DateAnchor
from .enums import VALID_PRIORITIES, AnalysisPeriod, Category, ErrorCode, Priority
from .task import MultiResult, ParseResult, SingleResult, TaskDraft, ValidatedInput

__all__ = [
    # 枚举
    "Priority",
    "Category",
    "ErrorCode",
    "AnalysisPeriod",
    "VALID_PRIORITIES",
    # 日期
    "DateAnchor",
    # 解析结果
    "TaskDraft",
    "ValidatedInput",
    "SingleResult",
    "MultiResult",
    "ParseResult",
    # 分析
    "TodoItem",
    "AnalysisStats",
    "AnalysisResult",
]
