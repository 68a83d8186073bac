"""待办分析单元测试"""

import json
from datetime import date

import pytest
from todoai.core.analysis import (
    DEFAULT_INSIGHTS,
    DEFAULT_RECOMMENDATIONS,
    TodoAnalyzer,
    compute_stats,
    repair_analysis,
)
from todoai.core.errors import MalformedGenerationError
from todoai.core.models import AnalysisPeriod, TodoItem
from todoai.provider import ANALYSIS

TODAY = date(2024, 1, 1)


def _todos() -> list[TodoItem]:
    return [
        TodoItem(id="1", title="보고서 작성", priority="high", due_date="2023-12-30"),
        TodoItem(id="2", title="병원 예약", priority="medium", due_date="2024-01-03T09:00:00"),
        TodoItem(id="3", title="책 읽기", priority="low", due_date="2024-01-10"),
        TodoItem(id="4", title="운동하기", priority="high", completed=True, due_date="2023-12-01"),
    ]


class TestComputeStats:
    def test_counts(self):
        """完成率、优先级分布、逾期与即将到期"""
        stats = compute_stats(_todos(), TODAY)

        assert stats.total == 4
        assert stats.completed == 1
        assert stats.pending == 3
        assert stats.completion_rate == 25
        assert (stats.high_priority, stats.medium_priority, stats.low_priority) == (2, 1, 1)
        # 已完成的逾期待办不计入
        assert stats.overdue == 1
        assert stats.upcoming == 1

    def test_empty_list(self):
        """空列表完成率为 0"""
        stats = compute_stats([], TODAY)
        assert stats.total == 0
        assert stats.completion_rate == 0

    def test_rate_is_rounded(self):
        """完成率四舍五入"""
        todos = [TodoItem(title="a1", completed=True), TodoItem(title="a2"), TodoItem(title="a3")]
        assert compute_stats(todos, TODAY).completion_rate == 33

    def test_unparseable_due_date_ignored(self):
        """无法解析的截止日视为无截止日"""
        stats = compute_stats([TodoItem(title="a1", due_date="someday")], TODAY)
        assert stats.overdue == 0
        assert stats.upcoming == 0


class TestRepairAnalysis:
    def test_full_response(self):
        """完整响应原样采用"""
        raw = json.dumps(
            {
                "summary": "잘하고 있어요.",
                "urgentTasks": ["보고서 작성"],
                "insights": ["완료율이 높습니다."],
                "recommendations": ["오전에 집중하세요."],
            },
            ensure_ascii=False,
        )
        result = repair_analysis(raw, total=4)

        assert result.summary == "잘하고 있어요."
        assert result.urgent_tasks == ["보고서 작성"]
        assert result.to_payload()["urgentTasks"] == ["보고서 작성"]

    def test_missing_fields_defaulted(self):
        """缺失字段取默认值"""
        result = repair_analysis('```json\n{"insights": []}\n```', total=4)

        assert result.summary == "총 4개의 할 일이 있습니다."
        assert result.urgent_tasks == []
        assert result.insights == DEFAULT_INSIGHTS
        assert result.recommendations == DEFAULT_RECOMMENDATIONS

    def test_malformed(self):
        """不是 JSON"""
        with pytest.raises(MalformedGenerationError):
            repair_analysis("분석 결과 없음", total=1)


class TestTodoAnalyzer:
    async def test_empty_list_skips_generation(self, make_generator, reference_clock):
        """空列表直接返回固定结果"""
        generator = make_generator(lambda segment: "{}")
        analyzer = TodoAnalyzer(generator, clock=reference_clock)

        result = await analyzer.analyze([], AnalysisPeriod.TODAY)

        assert result.summary == "오늘 등록된 할 일이 없습니다."
        assert result.urgent_tasks == []
        assert generator.call_count == 0

    async def test_analyze_uses_analysis_profile(self, make_generator, reference_clock):
        """使用 analysis profile，并把统计写入指令"""
        generator = make_generator(
            lambda segment: json.dumps({"summary": "좋아요.", "urgentTasks": ["보고서 작성"]})
        )
        analyzer = TodoAnalyzer(generator, clock=reference_clock)

        result = await analyzer.analyze(_todos(), AnalysisPeriod.WEEK)

        assert generator.profiles == [ANALYSIS]
        assert "완료: 1개 (25%)" in generator.prompts[0]
        assert "2024-01-01 (월요일)" in generator.prompts[0]
        assert result.summary == "좋아요."
        assert result.insights == DEFAULT_INSIGHTS
