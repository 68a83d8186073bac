"""输入规范化与拒绝闸门

在任何生成服务调用之前拦截低信息量或违反策略的输入。
内容类检查是一张有序规则表（RejectionRule），扩展词表不需要改动控制流。
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import NoReturn

import structlog

from .config import (
    MAX_INPUT_LENGTH,
    MAX_SEGMENTS,
    MIN_INPUT_LENGTH,
    SEGMENT_DELIMITER,
)
from .errors import InputRejectedError
from .models import ErrorCode, ValidatedInput

log = structlog.get_logger()

EMPTY_INPUT_MESSAGE = "텍스트를 입력해주세요."
TOO_SHORT_MESSAGE = "할 일은 최소 2자 이상 입력해주세요."
SEGMENT_TOO_SHORT_MESSAGE = "각 할 일은 최소 2자 이상 입력해주세요."
TOO_MANY_SEGMENTS_MESSAGE = "한 번에 최대 10개까지만 추가할 수 있습니다."
MEANINGLESS_MESSAGE = "잘못된 입력입니다. 의미 있는 할 일을 입력해주세요."
EMOJI_MESSAGE = "허용되지 않은 입력입니다. 이모지를 제거하고 다시 시도해주세요."
INCOMPLETE_SYLLABLE_MESSAGE = "잘못된 입력입니다. 완성된 문장을 입력해주세요."
PAST_DATE_MESSAGE = "과거 날짜는 사용할 수 없습니다. 오늘 이후의 날짜를 입력해주세요."

# 表情、符号、象形文字、旗帜、装饰符号、补充符号区块
EMOJI_PATTERN = re.compile(
    "["
    "\U0001F600-\U0001F64F"
    "\U0001F300-\U0001F5FF"
    "\U0001F680-\U0001F6FF"
    "\U0001F1E0-\U0001F1FF"
    "\u2600-\u26FF"
    "\u2700-\u27BF"
    "\U0001F900-\U0001F9FF"
    "\U0001FA00-\U0001FA6F"
    "\U0001FA70-\U0001FAFF"
    "]"
)

DIGITS_ONLY_PATTERN = re.compile(r"[0-9]+")
REPEATED_CHAR_PATTERN = re.compile(r"(.)\1{2,}")
# 只有韩文字母（子音/母音），没有完整音节
BARE_JAMO_PATTERN = re.compile(r"[ㄱ-ㅎㅏ-ㅣ]+")
WHITESPACE_PATTERN = re.compile(r"\s+")

KEYBOARD_MASH_PATTERNS: tuple[str, ...] = (
    "qwer", "asdf", "zxcv", "qaz", "wsx", "edc",
    "ㅂㅈㄷㄱ", "ㅁㄴㅇㄹ", "ㅋㅌㅊㅍ",
    "1234", "5678", "9012",
)

PAST_DATE_KEYWORDS: tuple[str, ...] = (
    "어제", "그제", "그저께", "엊그제",
    "지난주", "지난달", "지난해", "작년",
    "yesterday", "last week", "last month", "last year",
)


@dataclass(frozen=True)
class RejectionRule:
    """单条内容拒绝规则：predicate 返回 True 即拒绝"""

    name: str
    predicate: Callable[[str], bool]
    message: str
    code: ErrorCode = ErrorCode.INVALID_INPUT


def _contains_any(patterns: Sequence[str]) -> Callable[[str], bool]:
    lowered = tuple(p.lower() for p in patterns)

    def predicate(text: str) -> bool:
        lower_text = text.lower()
        return any(p in lower_text for p in lowered)

    return predicate


DEFAULT_RULES: tuple[RejectionRule, ...] = (
    RejectionRule(
        name="emoji",
        predicate=lambda text: EMOJI_PATTERN.search(text) is not None,
        message=EMOJI_MESSAGE,
    ),
    RejectionRule(
        name="digits_only",
        predicate=lambda text: DIGITS_ONLY_PATTERN.fullmatch(text) is not None,
        message=MEANINGLESS_MESSAGE,
    ),
    RejectionRule(
        name="repeated_char",
        predicate=lambda text: REPEATED_CHAR_PATTERN.search(text) is not None,
        message=MEANINGLESS_MESSAGE,
    ),
    RejectionRule(
        name="keyboard_mash",
        predicate=_contains_any(KEYBOARD_MASH_PATTERNS),
        message=MEANINGLESS_MESSAGE,
    ),
    RejectionRule(
        name="bare_jamo",
        predicate=lambda text: BARE_JAMO_PATTERN.fullmatch(text) is not None,
        message=INCOMPLETE_SYLLABLE_MESSAGE,
    ),
    RejectionRule(
        name="past_date",
        predicate=_contains_any(PAST_DATE_KEYWORDS),
        message=PAST_DATE_MESSAGE,
        code=ErrorCode.PAST_DATE_NOT_ALLOWED,
    ),
)


def normalize(text: str) -> str:
    """去掉首尾空白，连续空白合并为一个空格"""
    return WHITESPACE_PATTERN.sub(" ", text.strip())


def split_segments(text: str) -> list[str]:
    """按逗号拆分，去掉空白片段"""
    pieces = (piece.strip() for piece in text.split(SEGMENT_DELIMITER))
    return [piece for piece in pieces if piece]


class Sanitizer:
    """拒绝闸门

    检查顺序：空输入 -> 长度 -> 分段约束 -> 内容规则（按规则表顺序）。
    先失败的检查短路后面的检查。
    """

    def __init__(self, rules: Sequence[RejectionRule] | None = None) -> None:
        self._rules: tuple[RejectionRule, ...] = (
            tuple(rules) if rules is not None else DEFAULT_RULES
        )

    @property
    def rules(self) -> tuple[RejectionRule, ...]:
        return self._rules

    def validate(self, raw: object) -> ValidatedInput:
        """规范化并校验原始输入

        Returns:
            ValidatedInput，单条输入时 segments 只有规范化后的全文

        Raises:
            InputRejectedError: 任一检查不通过
        """
        if not isinstance(raw, str):
            self._reject("missing", EMPTY_INPUT_MESSAGE)

        text = normalize(raw)
        segments = split_segments(text)
        if not segments:
            self._reject("empty", EMPTY_INPUT_MESSAGE)

        is_multiple = len(segments) > 1
        if not is_multiple and len(text) < MIN_INPUT_LENGTH:
            self._reject("too_short", TOO_SHORT_MESSAGE)

        if len(text) > MAX_INPUT_LENGTH:
            self._reject(
                "too_long",
                f"할 일은 최대 {MAX_INPUT_LENGTH}자까지 입력 가능합니다. (현재: {len(text)}자)",
            )

        if is_multiple:
            if any(len(segment) < MIN_INPUT_LENGTH for segment in segments):
                self._reject("segment_too_short", SEGMENT_TOO_SHORT_MESSAGE)
            if len(segments) > MAX_SEGMENTS:
                self._reject("too_many_segments", TOO_MANY_SEGMENTS_MESSAGE)

        for rule in self._rules:
            if rule.predicate(text):
                self._reject(rule.name, rule.message, rule.code)

        return ValidatedInput(
            text=text,
            segments=segments if is_multiple else [text],
        )

    @staticmethod
    def _reject(
        rule: str,
        message: str,
        code: ErrorCode = ErrorCode.INVALID_INPUT,
    ) -> NoReturn:
        log.info("input_rejected", rule=rule, code=code.value)
        raise InputRejectedError(message, code=code, rule=rule)


_default_sanitizer = Sanitizer()


def validate(raw: object) -> ValidatedInput:
    """使用默认规则表校验输入"""
    return _default_sanitizer.validate(raw)
