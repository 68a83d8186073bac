"""响应修复与字段规范化

生成服务的输出视为不可信、可能缺字段的记录：
先去掉 Markdown 代码块，再解析为 JSON 对象，最后逐字段校验/默认化为 TaskDraft。
JSON 解析失败是致命错误（MalformedGenerationError）；字段缺失只触发默认值。
"""

import json
import re
from datetime import date
from typing import Any

import structlog

from .config import (
    DESCRIPTION_MAX_LENGTH,
    FALLBACK_TITLE_LENGTH,
    RAW_OUTPUT_PREVIEW_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    TRUNCATION_SUFFIX,
)
from .errors import MalformedGenerationError
from .models import VALID_PRIORITIES, Category, Priority, TaskDraft

log = structlog.get_logger()

# 完整代码块（可带语言标签）
FENCED_BLOCK_PATTERN = re.compile(r"```[\w-]*[ \t]*\n?(.*?)```", re.DOTALL)
# 残留的单个围栏标记
FENCE_MARKER_PATTERN = re.compile(r"```[\w-]*")

STRICT_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
STRICT_TIME_PATTERN = re.compile(r"[0-9]{2}:[0-9]{2}")


def strip_code_fences(text: str) -> str:
    """去掉 Markdown 代码块装饰

    有完整代码块时取第一个代码块的内容，否则删除残留的围栏标记。
    """
    stripped = text.strip()
    match = FENCED_BLOCK_PATTERN.search(stripped)
    if match:
        return match.group(1).strip()
    return FENCE_MARKER_PATTERN.sub("", stripped).strip()


def parse_json_object(raw_text: str) -> dict[str, Any]:
    """去掉代码块后解析为单个 JSON 对象

    Raises:
        MalformedGenerationError: 不是合法 JSON，或顶层不是对象
    """
    body = strip_code_fences(raw_text)
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        log.warning(
            "generation_json_parse_failed",
            error=str(e),
            raw_preview=raw_text[:RAW_OUTPUT_PREVIEW_LENGTH],
        )
        raise MalformedGenerationError(raw_text, reason=str(e)) from e

    if not isinstance(data, dict):
        log.warning(
            "generation_json_not_object",
            json_type=type(data).__name__,
            raw_preview=raw_text[:RAW_OUTPUT_PREVIEW_LENGTH],
        )
        raise MalformedGenerationError(raw_text, reason="top-level value is not an object")

    return data


def _truncate(value: str, limit: int) -> str:
    if len(value) <= limit:
        return value
    return value[: limit - len(TRUNCATION_SUFFIX)] + TRUNCATION_SUFFIX


def _optional_text(value: Any) -> str | None:
    """空字符串 / 非字符串视为缺失"""
    if isinstance(value, str) and value.strip():
        return value
    return None


def normalize_title(value: Any, segment: str) -> str:
    """标题：空 -> 原文前缀；过长 -> 截断；过短 -> 再次用原文兜底"""
    fallback = segment[:FALLBACK_TITLE_LENGTH]
    title = value if isinstance(value, str) and value.strip() else fallback
    title = _truncate(title, TITLE_MAX_LENGTH)
    if len(title) < TITLE_MIN_LENGTH:
        title = fallback
    return title


def normalize_priority(value: Any) -> Priority:
    if isinstance(value, str) and value in VALID_PRIORITIES:
        return Priority(value)
    return Priority.MEDIUM


def normalize_category(value: Any) -> list[str]:
    """分类：缺失、非列表或为空 -> ["기타"]；丢弃非字符串和空白条目"""
    if isinstance(value, list):
        labels = [item for item in value if isinstance(item, str) and item.strip()]
        if labels:
            return labels
    return [Category.OTHER.value]


def normalize_schedule(
    due_date: Any,
    due_time: Any,
    today: date | None = None,
) -> tuple[str | None, str | None]:
    """校验 due_date / due_time

    due_date 形状不合法时连同 due_time 一起丢弃；due_time 不合法只丢弃自身。
    过去的日期只记录日志，不拒绝。
    """
    date_value = _optional_text(due_date)
    time_value = _optional_text(due_time)

    if date_value is not None:
        if STRICT_DATE_PATTERN.fullmatch(date_value) is None:
            log.warning("invalid_due_date_dropped", due_date=date_value)
            return None, None
        if today is not None:
            _flag_past_date(date_value, today)

    if time_value is not None and STRICT_TIME_PATTERN.fullmatch(time_value) is None:
        log.warning("invalid_due_time_dropped", due_time=time_value)
        time_value = None

    return date_value, time_value


def _flag_past_date(value: str, today: date) -> None:
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        log.warning("unparseable_due_date_kept", due_date=value)
        return
    if parsed < today:
        log.warning("past_due_date_detected", due_date=value, today=today.isoformat())


def repair(raw_text: str, segment: str, today: date | None = None) -> TaskDraft:
    """把生成的原始文本修复为 TaskDraft

    Args:
        raw_text: 生成服务返回的文本
        segment: 原始待办描述（标题兜底来源）
        today: 参考日历日，仅用于过去日期诊断

    Raises:
        MalformedGenerationError: 文本无法解析为 JSON 对象
    """
    data = parse_json_object(raw_text)
    due_date, due_time = normalize_schedule(data.get("due_date"), data.get("due_time"), today)

    description = _optional_text(data.get("description"))
    if description is not None:
        description = _truncate(description, DESCRIPTION_MAX_LENGTH)

    return TaskDraft(
        title=normalize_title(data.get("title"), segment),
        description=description,
        due_date=due_date,
        due_time=due_time,
        priority=normalize_priority(data.get("priority")),
        category=normalize_category(data.get("category")),
    )
