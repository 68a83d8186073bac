"""GenerationClient -- 文本生成服务调用封装

通过 litellm.acompletion() 发起单次请求，把各种失败归类为 Provider 异常。
不做重试、缓存或降级：重试由调用方决定。
"""

import time

import httpx
import structlog
from litellm import acompletion

from .config import DEFAULT_API_BASE, DEFAULT_MODEL, DEFAULT_TIMEOUT_S
from .exceptions import (
    AuthFailedError,
    EmptyGenerationError,
    ProviderError,
    ProviderUnreachableError,
    RateLimitedError,
)
from .models import GenerationResult, TokenUsage
from .profiles import EXTRACTION, ProfileRegistry

log = structlog.get_logger()

# 健康检查超时（硬编码，应快速响应）
HEALTH_CHECK_TIMEOUT_S = 5

# 日志中保留的上游错误文本长度
ERROR_LOG_PREVIEW = 500

# 连接类异常类型集合
_CONNECTION_ERROR_TYPES = (
    ConnectionError,
    OSError,
    TimeoutError,
    httpx.ConnectError,
    httpx.ConnectTimeout,
    httpx.TimeoutException,
)

_RATE_LIMIT_PHRASES = ("quota", "rate limit", "too many requests", "resource_exhausted")
_AUTH_PHRASES = ("api key", "api_key", "unauthorized", "forbidden", "permission denied")


def _is_connection_error(e: Exception) -> bool:
    """判断异常是否为连接类错误（服务不可达）"""
    if isinstance(e, _CONNECTION_ERROR_TYPES):
        return True
    # LiteLLM 的 APIConnectionError / Timeout 也属于连接类错误
    error_name = type(e).__name__
    return error_name in ("APIConnectionError", "APITimeoutError", "Timeout")


def classify_upstream_error(e: Exception, api_base: str) -> ProviderError:
    """把 litellm / 传输层异常映射为 Provider 异常

    优先级：连接类 > 状态码 > 错误文本关键字 > UPSTREAM_ERROR。
    """
    if isinstance(e, ProviderError):
        return e

    if _is_connection_error(e):
        return ProviderUnreachableError(api_base=api_base, original_error=e)

    status_code = getattr(e, "status_code", None)
    text = str(e).lower()

    if status_code == 429 or any(p in text for p in _RATE_LIMIT_PHRASES):
        return RateLimitedError(f"生成服务限流: {e}")

    if status_code in (401, 403) or any(p in text for p in _AUTH_PHRASES):
        return AuthFailedError(f"生成服务认证失败: {e}")

    return ProviderError(f"生成服务调用失败: {e}", recoverable=True)


def _parse_usage(response) -> TokenUsage:
    """从 LiteLLM 响应解析 token 使用数据（失败时返回全零）"""
    usage = getattr(response, "usage", None)
    if usage is None:
        return TokenUsage()
    try:
        return TokenUsage(
            prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
            total_tokens=getattr(usage, "total_tokens", 0) or 0,
        )
    except (TypeError, ValueError) as e:
        log.debug("parse_usage_failed", error=str(e))
        return TokenUsage()


def _extract_content(response) -> str:
    """取第一个 choice 的文本；结构缺失视为空"""
    choices = getattr(response, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content if isinstance(content, str) else ""


class GenerationClient:
    """文本生成服务客户端

    每次 generate() 恰好一次出站调用。
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str = "",
        api_base: str = DEFAULT_API_BASE,
        timeout_s: int = DEFAULT_TIMEOUT_S,
        profiles: ProfileRegistry | None = None,
    ) -> None:
        """初始化生成服务客户端

        Args:
            model: LiteLLM 模型标识（如 gemini/gemini-2.5-flash）
            api_key: 生成服务 API key
            api_base: 服务基础 URL（健康检查使用）
            timeout_s: 请求超时（秒）
            profiles: 生成参数注册表，None 时使用默认配置
        """
        self._model = model
        self._api_key = api_key
        self._api_base = api_base.rstrip("/")
        self._timeout_s = timeout_s
        self._profiles = profiles or ProfileRegistry()

    @property
    def configured(self) -> bool:
        """是否已配置 API key"""
        return bool(self._api_key)

    async def generate(self, prompt: str, profile: str = EXTRACTION) -> GenerationResult:
        """发送单条指令文档并返回生成文本

        Args:
            prompt: 完整的指令文档
            profile: 生成 profile 名称（决定 temperature / max_tokens）

        Returns:
            GenerationResult，content 非空

        Raises:
            AuthFailedError: 未配置 API key 或认证被拒
            RateLimitedError: 配额耗尽 / 限流
            ProviderUnreachableError: 连接失败或超时
            EmptyGenerationError: 调用成功但没有文本
            ProviderError: 其他上游错误
        """
        if not self._api_key:
            log.error("generation_api_key_missing", model=self._model)
            raise AuthFailedError("未配置 GOOGLE_GENERATIVE_AI_API_KEY")

        params = self._profiles.resolve(profile)
        start_time = time.monotonic()

        log.debug(
            "generation_call_start",
            model=self._model,
            profile=params.name,
            prompt_length=len(prompt),
        )

        try:
            response = await acompletion(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                api_key=self._api_key,
                temperature=params.temperature,
                max_tokens=params.max_tokens,
                timeout=self._timeout_s,
            )
        except Exception as e:
            duration_ms = int((time.monotonic() - start_time) * 1000)
            error = classify_upstream_error(e, self._api_base)
            log.error(
                "generation_call_failed",
                model=self._model,
                profile=params.name,
                failure_kind=error.kind.value,
                error=str(e)[:ERROR_LOG_PREVIEW],
                error_type=type(e).__name__,
                duration_ms=duration_ms,
            )
            raise error from e

        duration_ms = int((time.monotonic() - start_time) * 1000)
        content = _extract_content(response)
        if not content.strip():
            log.error(
                "generation_empty_content",
                model=self._model,
                profile=params.name,
                duration_ms=duration_ms,
            )
            raise EmptyGenerationError()

        model_name = getattr(response, "model", None)
        result = GenerationResult(
            content=content,
            profile=params.name,
            model_name=model_name if isinstance(model_name, str) and model_name else self._model,
            duration_ms=duration_ms,
            token_usage=_parse_usage(response),
        )

        log.info(
            "generation_call_completed",
            model=result.model_name,
            profile=params.name,
            duration_ms=duration_ms,
            total_tokens=result.token_usage.total_tokens,
        )
        return result

    async def health_check(self) -> bool:
        """检查生成服务可达性与 key 有效性

        发送 GET {api_base}/v1beta/models，key 放在 x-goog-api-key 头中。
        此方法不抛出异常，所有异常内部捕获并返回 False。
        """
        if not self._api_key:
            return False

        url = f"{self._api_base}/v1beta/models"
        try:
            async with httpx.AsyncClient() as http_client:
                resp = await http_client.get(
                    url,
                    headers={"x-goog-api-key": self._api_key},
                    timeout=HEALTH_CHECK_TIMEOUT_S,
                )
                return resp.status_code == 200
        except Exception as e:
            log.debug("health_check_failed", url=url, error=str(e))
            return False
