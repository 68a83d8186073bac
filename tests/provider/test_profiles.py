"""ProfileRegistry 单元测试"""

from todoai.provider.profiles import ANALYSIS, EXTRACTION, GenerationProfile, ProfileRegistry


class TestProfileRegistry:
    """ProfileRegistry 核心功能测试"""

    def test_default_profiles(self):
        """默认注册 extraction 与 analysis"""
        names = [p.name for p in ProfileRegistry().list_all()]
        assert names == [ANALYSIS, EXTRACTION]

    def test_default_parameters(self):
        """抽取低温度，分析更长输出"""
        registry = ProfileRegistry()
        extraction = registry.resolve(EXTRACTION)
        analysis = registry.resolve(ANALYSIS)

        assert (extraction.temperature, extraction.max_tokens) == (0.2, 1024)
        assert (analysis.temperature, analysis.max_tokens) == (0.3, 4096)

    def test_unknown_falls_back_to_extraction(self):
        """未知名称降级到 extraction"""
        assert ProfileRegistry().resolve("planner").name == EXTRACTION

    def test_get_unknown_returns_none(self):
        """get() 不降级"""
        assert ProfileRegistry().get("planner") is None

    def test_custom_profiles_without_extraction(self):
        """自定义注册表缺少 extraction 时使用内置默认参数"""
        registry = ProfileRegistry([GenerationProfile(name="creative", temperature=1.0)])
        profile = registry.resolve("unknown")

        assert profile.name == EXTRACTION
        assert profile.temperature == 0.2
