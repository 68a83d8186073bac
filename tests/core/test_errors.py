"""失败映射单元测试"""

import pytest
from todoai.core.errors import (
    UNKNOWN_FAILURE,
    InputRejectedError,
    MalformedGenerationError,
    classify_failure,
)
from todoai.core.models import ErrorCode
from todoai.provider import (
    AuthFailedError,
    EmptyGenerationError,
    ProviderError,
    ProviderUnreachableError,
    RateLimitedError,
)


class TestClassifyFailure:
    def test_input_rejected(self):
        """闸门拒绝 -> 400，保留原提示"""
        failure = classify_failure(
            InputRejectedError("과거 날짜", code=ErrorCode.PAST_DATE_NOT_ALLOWED)
        )
        assert failure.status_code == 400
        assert failure.code == ErrorCode.PAST_DATE_NOT_ALLOWED
        assert failure.message == "과거 날짜"

    def test_malformed(self):
        """JSON 解析失败 -> PARSING_ERROR / 500"""
        failure = classify_failure(MalformedGenerationError("not json"))
        assert failure.code == ErrorCode.PARSING_ERROR
        assert failure.status_code == 500

    @pytest.mark.parametrize(
        ("error", "code", "status"),
        [
            (RateLimitedError(), ErrorCode.RATE_LIMIT_EXCEEDED, 429),
            (AuthFailedError(), ErrorCode.AUTH_FAILED, 500),
            (
                ProviderUnreachableError("https://example.test", ConnectionError("refused")),
                ErrorCode.NETWORK_ERROR,
                500,
            ),
            (EmptyGenerationError(), ErrorCode.AI_PROCESSING_ERROR, 500),
            (ProviderError("boom"), ErrorCode.AI_PROCESSING_ERROR, 500),
        ],
    )
    def test_provider_failures(self, error, code, status):
        """生成服务失败分类"""
        failure = classify_failure(error)
        assert failure.code == code
        assert failure.status_code == status

    def test_upstream_text_not_exposed(self):
        """上游原始错误文本不进入对外提示"""
        failure = classify_failure(ProviderError("secret upstream detail"))
        assert "secret" not in failure.message

    def test_unknown(self):
        """其他异常 -> UNKNOWN_ERROR"""
        assert classify_failure(KeyError("x")) == UNKNOWN_FAILURE

    def test_payload_shape(self):
        """对外结构"""
        payload = classify_failure(RateLimitedError()).to_payload()
        assert payload["success"] is False
        assert payload["code"] == "RATE_LIMIT_EXCEEDED"
        assert payload["error"]
