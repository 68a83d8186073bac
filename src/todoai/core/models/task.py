"""TaskDraft 与批量结果模型

TaskDraft 是管道的输出单元：由响应修复层逐字段校验后构造，返回后不可变。
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..config import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH
from .anchor import DATE_PATTERN
from .enums import Priority

TIME_PATTERN = r"^[0-9]{2}:[0-9]{2}$"


class TaskDraft(BaseModel):
    """结构化的待办草稿，交给调用方持久化"""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH, description="简洁的行动短语")
    description: str | None = Field(
        default=None,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="标题之外的补充信息",
    )
    due_date: str | None = Field(default=None, pattern=DATE_PATTERN, description="YYYY-MM-DD")
    due_time: str | None = Field(default=None, pattern=TIME_PATTERN, description="HH:MM（24 小时制）")
    priority: Priority = Field(default=Priority.MEDIUM)
    category: list[str] = Field(min_length=1, description="分类标签，至少一个")

    def to_payload(self) -> dict:
        """序列化为对外 JSON，省略缺失的可选字段"""
        return self.model_dump(mode="json", exclude_none=True)


class ValidatedInput(BaseModel):
    """通过拒绝闸门的输入"""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="规范化后的完整文本")
    segments: list[str] = Field(min_length=1, description="按顺序拆分出的待办描述")

    @property
    def is_multiple(self) -> bool:
        return len(self.segments) > 1


class SingleResult(BaseModel):
    """单条输入的解析结果"""

    multiple: Literal[False] = False
    data: TaskDraft

    def to_payload(self) -> dict:
        return {"success": True, "data": self.data.to_payload()}


class MultiResult(BaseModel):
    """多条输入的解析结果，顺序与输入分段一致"""

    multiple: Literal[True] = True
    items: list[TaskDraft]

    def to_payload(self) -> dict:
        return {
            "success": True,
            "multiple": True,
            "items": [item.to_payload() for item in self.items],
        }


ParseResult = Annotated[SingleResult | MultiResult, Field(discriminator="multiple")]
