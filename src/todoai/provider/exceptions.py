"""Provider 异常体系

所有生成服务调用失败都归入四类 FailureKind，由上层映射为对外错误码。
"""

from enum import StrEnum


class FailureKind(StrEnum):
    """上游失败分类"""

    RATE_LIMIT = "RATE_LIMIT"
    AUTH = "AUTH"
    NETWORK = "NETWORK"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"


class ProviderError(Exception):
    """Provider 包基础异常（默认归类为 UPSTREAM_ERROR）"""

    kind: FailureKind = FailureKind.UPSTREAM_ERROR

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述（仅用于日志，不直接展示给终端用户）
            recoverable: 调用方稍后重试是否可能成功
        """
        super().__init__(message)
        self.recoverable = recoverable


class RateLimitedError(ProviderError):
    """配额耗尽 / 请求过于频繁"""

    kind = FailureKind.RATE_LIMIT

    def __init__(self, message: str = "生成服务调用频率超限") -> None:
        super().__init__(message, recoverable=True)


class AuthFailedError(ProviderError):
    """API key 缺失或无效，需要运维介入"""

    kind = FailureKind.AUTH

    def __init__(self, message: str = "生成服务认证失败") -> None:
        super().__init__(message, recoverable=False)


class ProviderUnreachableError(ProviderError):
    """生成服务不可达（连接失败、超时、DNS 解析失败等）"""

    kind = FailureKind.NETWORK

    def __init__(self, api_base: str, original_error: Exception) -> None:
        """
        Args:
            api_base: 尝试连接的服务地址
            original_error: 原始异常
        """
        super().__init__(
            f"生成服务不可达: {api_base} -- {original_error}",
            recoverable=True,
        )
        self.api_base = api_base
        self.original_error = original_error


class EmptyGenerationError(ProviderError):
    """调用成功但没有生成任何文本

    与 JSON 格式错误不同：后者属于响应修复层的问题。
    """

    def __init__(self, message: str = "生成服务返回了空内容") -> None:
        super().__init__(message, recoverable=True)
