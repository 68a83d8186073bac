"""待办列表分析

compute_stats() 统计完成率、优先级分布与到期情况；
TodoAnalyzer 把统计与列表交给生成服务，修复缺失字段后返回 AnalysisResult。
"""

import time
from collections.abc import Sequence
from datetime import date, timedelta
from typing import Any

import structlog
from todoai.provider import ANALYSIS

from .dates import Clock, resolve_dates, utc_now
from .models import AnalysisPeriod, AnalysisResult, AnalysisStats, Priority, TodoItem
from .pipeline import TextGenerator
from .prompt import build_analysis_prompt
from .repair import parse_json_object

log = structlog.get_logger()

UPCOMING_WINDOW_DAYS = 3

EMPTY_SUMMARIES: dict[AnalysisPeriod, str] = {
    AnalysisPeriod.TODAY: "오늘 등록된 할 일이 없습니다.",
    AnalysisPeriod.WEEK: "이번 주 등록된 할 일이 없습니다.",
}
EMPTY_INSIGHTS = ["새로운 할 일을 추가하여 계획을 세워보세요!"]
EMPTY_RECOMMENDATIONS = ["AI 기능을 활용하여 할 일을 빠르게 추가할 수 있습니다."]

DEFAULT_INSIGHTS = ["할 일 목록을 꾸준히 관리하고 계시네요!"]
DEFAULT_RECOMMENDATIONS = ["오늘 하루도 화이팅하세요!"]


def _due_day(todo: TodoItem) -> date | None:
    """due_date 取日期部分；无法解析时视为无截止日"""
    if not todo.due_date:
        return None
    try:
        return date.fromisoformat(todo.due_date[:10])
    except ValueError:
        return None


def compute_stats(todos: Sequence[TodoItem], today: date) -> AnalysisStats:
    """统计待办列表

    overdue: 未完成且截止日早于 today
    upcoming: 未完成且截止日在 [today, today+3] 内
    """
    total = len(todos)
    completed = sum(1 for todo in todos if todo.completed)
    horizon = today + timedelta(days=UPCOMING_WINDOW_DAYS)

    overdue = 0
    upcoming = 0
    for todo in todos:
        if todo.completed:
            continue
        due = _due_day(todo)
        if due is None:
            continue
        if due < today:
            overdue += 1
        elif due <= horizon:
            upcoming += 1

    return AnalysisStats(
        total=total,
        completed=completed,
        completion_rate=round(completed / total * 100) if total else 0,
        high_priority=sum(1 for todo in todos if todo.priority == Priority.HIGH),
        medium_priority=sum(1 for todo in todos if todo.priority == Priority.MEDIUM),
        low_priority=sum(1 for todo in todos if todo.priority == Priority.LOW),
        overdue=overdue,
        upcoming=upcoming,
    )


def _string_list(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, str) and item.strip()]


def empty_result(period: AnalysisPeriod) -> AnalysisResult:
    """空列表时的固定结果"""
    return AnalysisResult(
        summary=EMPTY_SUMMARIES[period],
        urgent_tasks=[],
        insights=list(EMPTY_INSIGHTS),
        recommendations=list(EMPTY_RECOMMENDATIONS),
    )


def repair_analysis(raw_text: str, total: int) -> AnalysisResult:
    """把生成文本修复为 AnalysisResult

    Raises:
        MalformedGenerationError: 文本无法解析为 JSON 对象
    """
    data = parse_json_object(raw_text)

    summary = data.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        summary = f"총 {total}개의 할 일이 있습니다."

    return AnalysisResult(
        summary=summary,
        urgent_tasks=_string_list(data.get("urgentTasks")) or [],
        insights=_string_list(data.get("insights")) or list(DEFAULT_INSIGHTS),
        recommendations=(
            _string_list(data.get("recommendations")) or list(DEFAULT_RECOMMENDATIONS)
        ),
    )


class TodoAnalyzer:
    """待办分析服务"""

    def __init__(self, generator: TextGenerator, clock: Clock = utc_now) -> None:
        self._generator = generator
        self._clock = clock

    async def analyze(
        self,
        todos: Sequence[TodoItem],
        period: AnalysisPeriod,
    ) -> AnalysisResult:
        """分析待办列表

        Raises:
            MalformedGenerationError: 生成结果无法解析为 JSON
            ProviderError: 生成服务调用失败
        """
        if not todos:
            log.info("analysis_skipped_empty", period=period.value)
            return empty_result(period)

        anchor = resolve_dates(self._clock())
        stats = compute_stats(todos, date.fromisoformat(anchor.today))
        prompt = build_analysis_prompt(todos, period, anchor, stats)
        start_time = time.monotonic()

        generation = await self._generator.generate(prompt, profile=ANALYSIS)
        result = repair_analysis(generation.content, stats.total)

        log.info(
            "analysis_completed",
            period=period.value,
            total=stats.total,
            completion_rate=stats.completion_rate,
            duration_ms=int((time.monotonic() - start_time) * 1000),
        )
        return result
