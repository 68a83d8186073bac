"""全局 pytest 配置 -- 固定参考时钟 + 生成服务测试替身"""

import asyncio
import re
from collections.abc import Callable
from datetime import UTC, datetime

import pytest
from todoai.provider import EXTRACTION, GenerationResult

# 2024-01-01 00:00 UTC（本地 UTC+9 同样是 2024-01-01，周一）
REFERENCE_INSTANT = datetime(2024, 1, 1, 0, 0, tzinfo=UTC)

_SEGMENT_IN_PROMPT = re.compile(r'\*\*입력 텍스트:\*\*\n"(.*)"')


def segment_of(prompt: str) -> str:
    """从抽取指令中取回嵌入的原始分段"""
    match = _SEGMENT_IN_PROMPT.search(prompt)
    return match.group(1) if match else ""


class FakeGenerator:
    """记录调用的生成服务替身

    responder 接收从指令中取回的分段（分析指令为空串），返回文本或抛出异常；
    可为 async 以模拟不同耗时。
    """

    def __init__(self, responder: Callable[[str], object]) -> None:
        self._responder = responder
        self.prompts: list[str] = []
        self.segments: list[str] = []
        self.profiles: list[str] = []
        self.cancelled: list[str] = []

    async def generate(self, prompt: str, profile: str = EXTRACTION) -> GenerationResult:
        self.prompts.append(prompt)
        self.profiles.append(profile)
        segment = segment_of(prompt)
        self.segments.append(segment)
        try:
            outcome = self._responder(segment)
            if asyncio.iscoroutine(outcome):
                outcome = await outcome
        except asyncio.CancelledError:
            self.cancelled.append(segment)
            raise
        return GenerationResult(
            content=str(outcome), profile=profile, model_name="fake", duration_ms=0
        )

    @property
    def call_count(self) -> int:
        return len(self.prompts)


@pytest.fixture
def reference_clock() -> Callable[[], datetime]:
    """固定参考时钟"""
    return lambda: REFERENCE_INSTANT


@pytest.fixture
def make_generator() -> Callable[[Callable[[str], object]], FakeGenerator]:
    """构造 FakeGenerator 的工厂"""
    return FakeGenerator
