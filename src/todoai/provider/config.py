"""ProviderConfig -- Provider 配置加载

从环境变量加载配置，API key 只存在于进程环境中。
"""

import os

import structlog
from pydantic import BaseModel, Field, SecretStr

log = structlog.get_logger()

DEFAULT_MODEL = "gemini/gemini-2.5-flash"
DEFAULT_API_BASE = "https://generativelanguage.googleapis.com"
DEFAULT_TIMEOUT_S = 30


class ProviderConfig(BaseModel):
    """Provider 包配置 -- 从环境变量加载

    环境变量:
        GOOGLE_GENERATIVE_AI_API_KEY: 生成服务 API key
        TODOAI_LLM_MODEL: LiteLLM 模型名（默认 gemini/gemini-2.5-flash）
        TODOAI_LLM_API_BASE: 健康检查使用的服务地址
        TODOAI_LLM_TIMEOUT_S: 调用超时（秒，默认 30）
    """

    api_key: SecretStr = Field(
        default=SecretStr(""),
        description="生成服务 API key",
    )
    model: str = Field(
        default=DEFAULT_MODEL,
        description="LiteLLM 模型标识（provider/model）",
    )
    api_base: str = Field(
        default=DEFAULT_API_BASE,
        description="生成服务基础 URL（健康检查）",
    )
    timeout_s: int = Field(
        default=DEFAULT_TIMEOUT_S,
        ge=1,
        description="生成调用超时（秒）",
    )


def load_provider_config() -> ProviderConfig:
    """从环境变量加载 Provider 配置

    Returns:
        ProviderConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("GOOGLE_GENERATIVE_AI_API_KEY"):
        kwargs["api_key"] = SecretStr(val)

    if val := os.environ.get("TODOAI_LLM_MODEL"):
        kwargs["model"] = val

    if val := os.environ.get("TODOAI_LLM_API_BASE"):
        kwargs["api_base"] = val

    if val := os.environ.get("TODOAI_LLM_TIMEOUT_S"):
        try:
            kwargs["timeout_s"] = int(val)
        except ValueError:
            log.warning(
                "invalid_timeout_config",
                env_var="TODOAI_LLM_TIMEOUT_S",
                value=val,
                fallback=DEFAULT_TIMEOUT_S,
            )

    if "api_key" not in kwargs:
        log.warning("api_key_missing", env_var="GOOGLE_GENERATIVE_AI_API_KEY")

    return ProviderConfig(**kwargs)
