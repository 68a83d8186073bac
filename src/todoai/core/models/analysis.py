"""分析功能的数据模型"""

from pydantic import BaseModel, ConfigDict, Field

from .enums import Priority


class TodoItem(BaseModel):
    """已持久化的待办记录（分析输入）

    只声明分析用到的字段，其余字段忽略。
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default="", description="记录 ID")
    title: str = Field(description="标题")
    description: str | None = Field(default=None, description="描述")
    due_date: str | None = Field(default=None, description="截止时间（ISO 日期或日期时间）")
    priority: Priority = Field(default=Priority.MEDIUM)
    category: list[str] = Field(default_factory=list)
    completed: bool = Field(default=False)


class AnalysisStats(BaseModel):
    """提示词中使用的统计数据"""

    total: int = 0
    completed: int = 0
    completion_rate: int = Field(default=0, description="完成率（四舍五入的百分比）")
    high_priority: int = 0
    medium_priority: int = 0
    low_priority: int = 0
    overdue: int = 0
    upcoming: int = Field(default=0, description="3 天内到期的未完成待办")

    @property
    def pending(self) -> int:
        return self.total - self.completed


class AnalysisResult(BaseModel):
    """分析结果（对外字段使用 camelCase）"""

    model_config = ConfigDict(populate_by_name=True)

    summary: str
    urgent_tasks: list[str] = Field(default_factory=list, alias="urgentTasks")
    insights: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
