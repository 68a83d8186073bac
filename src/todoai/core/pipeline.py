"""TodoParsePipeline -- 自然语言 -> TaskDraft 批量编排

流程：
1. 拒绝闸门校验并拆分分段
2. 读取一次参考时刻，计算共享的 DateAnchor
3. 每个分段：构建提示词 -> 调用生成服务 -> 修复为 TaskDraft
4. 单条返回 SingleResult，多条并发执行并按输入顺序返回 MultiResult

多条输入中任一分段失败即整批失败：TaskGroup 取消仍在进行的兄弟调用，
首个失败原样抛出。
"""

import asyncio
import time
from datetime import date
from typing import Protocol

import structlog
from todoai.provider import EXTRACTION, GenerationResult

from .dates import Clock, resolve_dates, utc_now
from .models import DateAnchor, MultiResult, SingleResult, TaskDraft
from .prompt import build_prompt
from .repair import repair
from .sanitizer import Sanitizer

log = structlog.get_logger()


class TextGenerator(Protocol):
    """生成服务接口（GenerationClient 或测试替身）"""

    async def generate(self, prompt: str, profile: str = EXTRACTION) -> GenerationResult: ...


class TodoParsePipeline:
    """待办解析管道

    无跨请求共享的可变状态，同一实例可被并发请求复用。
    """

    def __init__(
        self,
        generator: TextGenerator,
        clock: Clock = utc_now,
        sanitizer: Sanitizer | None = None,
    ) -> None:
        """
        Args:
            generator: 文本生成服务
            clock: 参考时钟，每次 run() 只读取一次
            sanitizer: 拒绝闸门，None 时使用默认规则表
        """
        self._generator = generator
        self._clock = clock
        self._sanitizer = sanitizer or Sanitizer()

    async def run(self, raw_text: object) -> SingleResult | MultiResult:
        """解析一次用户输入

        Raises:
            InputRejectedError: 输入被闸门拒绝（不会调用生成服务）
            MalformedGenerationError: 生成结果无法解析为 JSON
            ProviderError: 生成服务调用失败
        """
        validated = self._sanitizer.validate(raw_text)
        reference = self._clock()
        anchor = resolve_dates(reference)
        segment_count = len(validated.segments)
        start_time = time.monotonic()

        log.info(
            "parse_started",
            segment_count=segment_count,
            reference_date=anchor.today,
        )

        try:
            if validated.is_multiple:
                items = await self._parse_concurrently(validated.segments, anchor)
                result: SingleResult | MultiResult = MultiResult(items=items)
            else:
                draft = await self._parse_segment(validated.segments[0], anchor, index=0)
                result = SingleResult(data=draft)
        except Exception as e:
            log.warning(
                "parse_failed",
                segment_count=segment_count,
                error_type=type(e).__name__,
                duration_ms=int((time.monotonic() - start_time) * 1000),
            )
            raise

        log.info(
            "parse_completed",
            segment_count=segment_count,
            multiple=validated.is_multiple,
            duration_ms=int((time.monotonic() - start_time) * 1000),
        )
        return result

    async def _parse_segment(self, segment: str, anchor: DateAnchor, index: int) -> TaskDraft:
        """单个分段：提示词 -> 生成 -> 修复"""
        prompt = build_prompt(segment, anchor)
        generation = await self._generator.generate(prompt, profile=EXTRACTION)
        draft = repair(
            generation.content,
            segment,
            today=date.fromisoformat(anchor.today),
        )
        log.debug(
            "segment_parsed",
            index=index,
            duration_ms=generation.duration_ms,
            has_due_date=draft.due_date is not None,
        )
        return draft

    async def _parse_concurrently(
        self,
        segments: list[str],
        anchor: DateAnchor,
    ) -> list[TaskDraft]:
        """并发解析所有分段，结果按输入下标归位"""
        slots: list[TaskDraft | None] = [None] * len(segments)

        async def fill(index: int, segment: str) -> None:
            slots[index] = await self._parse_segment(segment, anchor, index)

        try:
            async with asyncio.TaskGroup() as group:
                for index, segment in enumerate(segments):
                    group.create_task(fill(index, segment))
        except BaseExceptionGroup as eg:
            # errors 按失败发生顺序排列，首个即整批失败原因
            first = eg.exceptions[0]
            log.warning(
                "batch_aborted",
                segment_count=len(segments),
                failed_count=len(eg.exceptions),
                error_type=type(first).__name__,
            )
            raise first from None

        return [draft for draft in slots if draft is not None]
