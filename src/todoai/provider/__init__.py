"""TodoAI Provider -- 文本生成服务调用层

todoai.provider 的公开接口导出。
"""

# 核心组件
from .client import GenerationClient, classify_upstream_error

# 配置
from .config import ProviderConfig, load_provider_config

# 异常
from .exceptions import (
    AuthFailedError,
    EmptyGenerationError,
    FailureKind,
    ProviderError,
    ProviderUnreachableError,
    RateLimitedError,
)
from .models import GenerationResult, TokenUsage
from .profiles import ANALYSIS, EXTRACTION, GenerationProfile, ProfileRegistry

__all__ = [
    "GenerationResult",
    "TokenUsage",
    "GenerationClient",
    "classify_upstream_error",
    "GenerationProfile",
    "ProfileRegistry",
    "EXTRACTION",
    "ANALYSIS",
    "ProviderConfig",
    "load_provider_config",
    "FailureKind",
    "ProviderError",
    "RateLimitedError",
    "AuthFailedError",
    "ProviderUnreachableError",
    "EmptyGenerationError",
]
