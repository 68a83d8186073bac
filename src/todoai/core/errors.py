"""管道异常体系与对外失败映射

输入闸门与响应修复层抛出 PipelineError 子类；生成服务失败沿用 Provider 异常。
classify_failure() 统一映射为 (错误码, HTTP 状态码, 面向用户的韩语提示)，
上游原始错误文本只进日志。
"""

from dataclasses import dataclass

from todoai.provider import FailureKind, ProviderError

from .models import ErrorCode

PARSING_ERROR_MESSAGE = "AI 응답을 처리하는 중 오류가 발생했습니다. 입력을 조금 다르게 표현해보세요."


class PipelineError(Exception):
    """管道基础异常"""

    code: ErrorCode = ErrorCode.UNKNOWN_ERROR
    status_code: int = 500

    def __init__(self, message: str, code: ErrorCode | None = None) -> None:
        """
        Args:
            message: 面向用户的提示文本
            code: 错误码，None 时使用类默认值
        """
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class InputRejectedError(PipelineError):
    """输入在调用生成服务之前被闸门拒绝（用户可自行修正）"""

    code = ErrorCode.INVALID_INPUT
    status_code = 400

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INVALID_INPUT,
        rule: str = "",
    ) -> None:
        super().__init__(message, code)
        self.rule = rule


class MalformedGenerationError(PipelineError):
    """去掉代码块后仍不是合法 JSON 对象

    与“字段缺失”不同：字段缺失走默认值，不算错误。
    """

    code = ErrorCode.PARSING_ERROR
    status_code = 500

    def __init__(self, raw_text: str, reason: str = "") -> None:
        super().__init__(PARSING_ERROR_MESSAGE)
        self.raw_text = raw_text
        self.reason = reason


@dataclass(frozen=True)
class Failure:
    """对外失败描述"""

    code: ErrorCode
    status_code: int
    message: str

    def to_payload(self) -> dict:
        return {"success": False, "error": self.message, "code": self.code.value}


_PROVIDER_FAILURES: dict[FailureKind, Failure] = {
    FailureKind.RATE_LIMIT: Failure(
        ErrorCode.RATE_LIMIT_EXCEEDED,
        429,
        "API 호출 한도를 초과했습니다. 잠시 후 다시 시도해주세요.",
    ),
    FailureKind.AUTH: Failure(
        ErrorCode.AUTH_FAILED,
        500,
        "AI 서비스 인증에 실패했습니다. 관리자에게 문의해주세요.",
    ),
    FailureKind.NETWORK: Failure(
        ErrorCode.NETWORK_ERROR,
        500,
        "AI 서비스에 연결할 수 없습니다. 인터넷 연결을 확인하고 다시 시도해주세요.",
    ),
    FailureKind.UPSTREAM_ERROR: Failure(
        ErrorCode.AI_PROCESSING_ERROR,
        500,
        "AI 처리 중 오류가 발생했습니다. 잠시 후 다시 시도해주세요.",
    ),
}

UNKNOWN_FAILURE = Failure(
    ErrorCode.UNKNOWN_ERROR,
    500,
    "예상치 못한 오류가 발생했습니다. 다시 시도해주세요.",
)


def classify_failure(error: BaseException) -> Failure:
    """把任意异常映射为对外失败描述"""
    if isinstance(error, PipelineError):
        return Failure(error.code, error.status_code, error.message)
    if isinstance(error, ProviderError):
        return _PROVIDER_FAILURES[error.kind]
    return UNKNOWN_FAILURE
