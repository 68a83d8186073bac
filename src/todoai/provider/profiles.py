"""ProfileRegistry -- 生成参数 profile 注册表

结构化抽取使用低温度，自由文本的分析摘要使用稍高温度和更长的输出上限。
"""

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

EXTRACTION = "extraction"
ANALYSIS = "analysis"


class GenerationProfile(BaseModel):
    """单个 profile 的生成参数"""

    name: str = Field(description="profile 名称（如 extraction, analysis）")
    description: str = Field(default="", description="用途描述")
    temperature: float = Field(default=0.2, ge=0.0, le=2.0, description="采样温度")
    max_tokens: int = Field(default=1024, ge=1, description="最大输出 token 数")


def _get_default_profiles() -> list[GenerationProfile]:
    """默认 profile 配置"""
    return [
        GenerationProfile(
            name=EXTRACTION,
            temperature=0.2,
            max_tokens=1024,
            description="自然语言 -> 待办 JSON 抽取",
        ),
        GenerationProfile(
            name=ANALYSIS,
            temperature=0.3,
            max_tokens=4096,
            description="待办列表分析与建议",
        ),
    ]


class ProfileRegistry:
    """Profile 注册表 -- 启动时加载，运行期间不变"""

    def __init__(self, profiles: list[GenerationProfile] | None = None) -> None:
        """
        Args:
            profiles: profile 列表，None 时使用默认配置
        """
        profile_list = profiles if profiles is not None else _get_default_profiles()
        self._profiles: dict[str, GenerationProfile] = {}
        for profile in profile_list:
            self._profiles[profile.name] = profile

    def resolve(self, name: str) -> GenerationProfile:
        """按名称解析 profile

        未知名称降级到 extraction（低温度是更安全的默认值），并记录 warning。
        注册表里没有 extraction 时使用内置默认参数。
        """
        if name in self._profiles:
            return self._profiles[name]

        log.warning("unknown_profile_fallback_to_extraction", profile=name)
        return self._profiles.get(EXTRACTION) or GenerationProfile(name=EXTRACTION)

    def get(self, name: str) -> GenerationProfile | None:
        """按名称查询，不存在返回 None"""
        return self._profiles.get(name)

    def list_all(self) -> list[GenerationProfile]:
        """列出所有 profile（按 name 排序）"""
        return sorted(self._profiles.values(), key=lambda p: p.name)
