"""枚举定义 -- 优先级、固定分类词表、对外错误码、分析周期"""

from enum import StrEnum


class Priority(StrEnum):
    """任务优先级"""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Category(StrEnum):
    """固定分类词表

    TaskDraft.category 也允许词表之外的自定义标签。
    """

    WORK = "업무"
    PERSONAL = "개인"
    HEALTH = "건강"
    LEARNING = "학습"
    HOBBY = "취미"
    OTHER = "기타"


class ErrorCode(StrEnum):
    """对外稳定的机器可读错误码"""

    INVALID_INPUT = "INVALID_INPUT"
    PAST_DATE_NOT_ALLOWED = "PAST_DATE_NOT_ALLOWED"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    AUTH_FAILED = "AUTH_FAILED"
    NETWORK_ERROR = "NETWORK_ERROR"
    PARSING_ERROR = "PARSING_ERROR"
    AI_PROCESSING_ERROR = "AI_PROCESSING_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class AnalysisPeriod(StrEnum):
    """分析周期"""

    TODAY = "today"
    WEEK = "week"


VALID_PRIORITIES: frozenset[str] = frozenset(p.value for p in Priority)
