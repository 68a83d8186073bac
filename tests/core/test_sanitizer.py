"""拒绝闸门单元测试

覆盖：空输入、长度、分段约束、内容规则顺序、规则表可扩展。
"""

import pytest
from todoai.core.errors import InputRejectedError
from todoai.core.models import ErrorCode
from todoai.core.sanitizer import (
    DEFAULT_RULES,
    EMPTY_INPUT_MESSAGE,
    INCOMPLETE_SYLLABLE_MESSAGE,
    MEANINGLESS_MESSAGE,
    PAST_DATE_MESSAGE,
    RejectionRule,
    Sanitizer,
    normalize,
    split_segments,
    validate,
)


def _rejected(raw: object) -> InputRejectedError:
    with pytest.raises(InputRejectedError) as exc_info:
        validate(raw)
    return exc_info.value


class TestNormalize:
    def test_collapses_whitespace(self):
        """首尾空白去除，连续空白合并"""
        assert normalize("  내일   회의 \n 준비  ") == "내일 회의 준비"

    def test_split_drops_blank_pieces(self):
        """空白片段被丢弃"""
        assert split_segments("세탁하기, , 병원 예약,") == ["세탁하기", "병원 예약"]


class TestEmptyAndLength:
    @pytest.mark.parametrize("raw", [None, 123, "", "   ", ", ,"])
    def test_missing_or_blank(self, raw):
        """缺失、非字符串或只有空白/逗号"""
        err = _rejected(raw)
        assert err.code == ErrorCode.INVALID_INPUT
        assert err.message == EMPTY_INPUT_MESSAGE
        assert err.status_code == 400

    def test_single_char_too_short(self):
        """单条少于 2 字"""
        err = _rejected("a")
        assert err.rule == "too_short"
        assert "최소 2자" in err.message

    def test_too_long_reports_length(self):
        """超过 500 字，提示中带当前长度"""
        err = _rejected("가나" * 251)
        assert err.rule == "too_long"
        assert "502" in err.message

    def test_exactly_max_length_accepted(self):
        """恰好 500 字可以通过"""
        text = "가나다라마" * 100
        assert validate(text).text == text


class TestSegments:
    def test_single_segment(self):
        """无逗号时 segments 只含规范化全文"""
        result = validate("  내일  오후 3시 팀 회의 준비 ")
        assert result.is_multiple is False
        assert result.segments == ["내일 오후 3시 팀 회의 준비"]

    def test_multiple_segments_keep_order(self):
        """多条按输入顺序返回"""
        result = validate("세탁하기, 병원 예약, 책 읽기")
        assert result.is_multiple is True
        assert result.segments == ["세탁하기", "병원 예약", "책 읽기"]

    def test_short_segment_rejected(self):
        """任一分段少于 2 字"""
        err = _rejected("세탁하기, a")
        assert err.rule == "segment_too_short"

    def test_ten_segments_accepted(self):
        """10 条是上限"""
        text = ", ".join(f"할일 {chr(0xAC00 + i)}" for i in range(10))
        assert len(validate(text).segments) == 10

    def test_eleven_segments_rejected(self):
        """超过 10 条"""
        text = ", ".join(f"할일 {chr(0xAC00 + i)}" for i in range(11))
        err = _rejected(text)
        assert err.rule == "too_many_segments"
        assert "10개" in err.message


class TestContentRules:
    def test_digits_only(self):
        """纯数字"""
        err = _rejected("1234")
        assert err.code == ErrorCode.INVALID_INPUT
        assert err.message == MEANINGLESS_MESSAGE

    def test_repeated_char(self):
        """同一字符连续 3 次以上"""
        err = _rejected("ㅋㅋㅋ 회의")
        assert err.rule == "repeated_char"

    def test_keyboard_mash_case_insensitive(self):
        """键盘乱按，大小写不敏感"""
        err = _rejected("QWER 하기")
        assert err.rule == "keyboard_mash"

    def test_bare_jamo(self):
        """只有韩文字母"""
        err = _rejected("ㄱㄴㄷ")
        assert err.message == INCOMPLETE_SYLLABLE_MESSAGE

    def test_emoji(self):
        """包含表情符号"""
        err = _rejected("회의 준비 😀")
        assert err.rule == "emoji"

    @pytest.mark.parametrize("text", ["지난주 회의록 정리", "어제 못한 운동", "Yesterday report"])
    def test_past_date_keywords(self, text):
        """过去时间表达使用专用错误码"""
        err = _rejected(text)
        assert err.code == ErrorCode.PAST_DATE_NOT_ALLOWED
        assert err.message == PAST_DATE_MESSAGE

    def test_rule_order_first_match_wins(self):
        """多个规则命中时按规则表顺序取第一个"""
        err = _rejected("어제 1234")
        assert err.rule == "keyboard_mash"

    def test_ordinary_text_passes(self):
        """普通待办通过"""
        assert validate("내일 오후 3시 팀 회의 준비").text == "내일 오후 3시 팀 회의 준비"


class TestRuleTable:
    def test_default_rule_order(self):
        """默认规则表顺序"""
        assert [rule.name for rule in DEFAULT_RULES] == [
            "emoji",
            "digits_only",
            "repeated_char",
            "keyboard_mash",
            "bare_jamo",
            "past_date",
        ]

    def test_custom_rule_extends_table(self):
        """追加规则不需要改动控制流"""
        rule = RejectionRule(
            name="no_test",
            predicate=lambda text: "테스트" in text,
            message="테스트 금지",
        )
        sanitizer = Sanitizer(rules=[*DEFAULT_RULES, rule])

        with pytest.raises(InputRejectedError) as exc_info:
            sanitizer.validate("테스트 작성")
        assert exc_info.value.rule == "no_test"
        assert exc_info.value.message == "테스트 금지"

    def test_empty_rule_table_only_checks_shape(self):
        """空规则表只做形状检查"""
        assert Sanitizer(rules=[]).validate("1234").text == "1234"
