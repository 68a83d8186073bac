"""数据模型 -- TokenUsage + GenerationResult"""

from pydantic import BaseModel, Field


class TokenUsage(BaseModel):
    """Token 使用统计

    key 命名对齐 OpenAI/LiteLLM 行业标准：
    prompt_tokens / completion_tokens / total_tokens
    """

    prompt_tokens: int = Field(default=0, ge=0, description="输入 token 数")
    completion_tokens: int = Field(default=0, ge=0, description="输出 token 数")
    total_tokens: int = Field(default=0, ge=0, description="总 token 数")


class GenerationResult(BaseModel):
    """单次生成调用结果

    content 保证非空；空响应在 GenerationClient 内部已转为 EmptyGenerationError。
    """

    content: str = Field(description="生成的原始文本（可能带 Markdown 代码块）")
    profile: str = Field(description="本次调用使用的生成 profile")
    model_name: str = Field(default="", description="实际调用的模型名称")
    duration_ms: int = Field(ge=0, description="端到端耗时（毫秒）")
    token_usage: TokenUsage = Field(
        default_factory=TokenUsage,
        description="Token 使用详情",
    )
