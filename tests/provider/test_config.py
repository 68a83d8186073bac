"""ProviderConfig + load_provider_config 单元测试

验证环境变量映射、默认值、非法超时降级。
"""

import pytest
from pydantic import SecretStr, ValidationError
from todoai.provider.config import (
    DEFAULT_API_BASE,
    DEFAULT_MODEL,
    DEFAULT_TIMEOUT_S,
    ProviderConfig,
    load_provider_config,
)

ENV_VARS = (
    "GOOGLE_GENERATIVE_AI_API_KEY",
    "TODOAI_LLM_MODEL",
    "TODOAI_LLM_API_BASE",
    "TODOAI_LLM_TIMEOUT_S",
)


@pytest.fixture
def clean_env(monkeypatch):
    """清除相关环境变量"""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestProviderConfig:
    """ProviderConfig 数据模型测试"""

    def test_default_values(self):
        """默认值验证"""
        config = ProviderConfig()
        assert config.api_key.get_secret_value() == ""
        assert config.model == DEFAULT_MODEL
        assert config.api_base == DEFAULT_API_BASE
        assert config.timeout_s == DEFAULT_TIMEOUT_S

    def test_key_not_in_repr(self):
        """API key 不出现在 repr 中"""
        config = ProviderConfig(api_key=SecretStr("super-secret"))
        assert "super-secret" not in repr(config)

    def test_timeout_min_value(self):
        """超时最小值为 1"""
        with pytest.raises(ValidationError):
            ProviderConfig(timeout_s=0)


class TestLoadProviderConfig:
    """load_provider_config() 环境变量映射测试"""

    def test_default_when_no_env(self, clean_env):
        """无环境变量时使用默认值"""
        config = load_provider_config()
        assert config.api_key.get_secret_value() == ""
        assert config.model == DEFAULT_MODEL
        assert config.timeout_s == DEFAULT_TIMEOUT_S

    def test_env_mapping(self, clean_env):
        """环境变量映射到配置字段"""
        clean_env.setenv("GOOGLE_GENERATIVE_AI_API_KEY", "key-123")
        clean_env.setenv("TODOAI_LLM_MODEL", "gemini/gemini-2.0-flash")
        clean_env.setenv("TODOAI_LLM_API_BASE", "http://localhost:9999")
        clean_env.setenv("TODOAI_LLM_TIMEOUT_S", "10")

        config = load_provider_config()
        assert config.api_key.get_secret_value() == "key-123"
        assert config.model == "gemini/gemini-2.0-flash"
        assert config.api_base == "http://localhost:9999"
        assert config.timeout_s == 10

    def test_invalid_timeout_falls_back(self, clean_env):
        """非数字超时降级为默认值"""
        clean_env.setenv("TODOAI_LLM_TIMEOUT_S", "soon")
        assert load_provider_config().timeout_s == DEFAULT_TIMEOUT_S
