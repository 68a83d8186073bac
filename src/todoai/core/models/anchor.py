"""DateAnchor -- 相对日期标签 -> 绝对日期表

每个请求按同一个参考时刻计算一次，不跨请求缓存。
"""

from pydantic import BaseModel, ConfigDict, Field

DATE_PATTERN = r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$"


class DateAnchor(BaseModel):
    """相对时间标签对应的 YYYY-MM-DD 日期"""

    model_config = ConfigDict(frozen=True)

    today: str = Field(pattern=DATE_PATTERN, description="参考日历日")
    weekday: str = Field(description="参考日的星期（韩语全称，如 월요일）")
    tomorrow: str = Field(pattern=DATE_PATTERN)
    day_after_tomorrow: str = Field(pattern=DATE_PATTERN)
    days_later: dict[int, str] = Field(description="N 日后（N=1..7）")
    one_week_later: str = Field(pattern=DATE_PATTERN)
    two_weeks_later: str = Field(pattern=DATE_PATTERN)
    one_month_later: str = Field(pattern=DATE_PATTERN, description="固定 30 天")
    next_monday: str = Field(pattern=DATE_PATTERN, description="严格晚于今天的最近周一")

    def table(self) -> list[tuple[str, str]]:
        """按提示词中的展示顺序返回 (标签, 日期) 列表"""
        rows = [
            ("오늘", f"{self.today} ({self.weekday})"),
            ("내일", self.tomorrow),
            ("모레", self.day_after_tomorrow),
        ]
        for n in range(1, 7):
            rows.append((f"{n}일 후", self.days_later[n]))
        rows.extend(
            [
                ("7일 후 (일주일 후)", self.one_week_later),
                ("2주 후", self.two_weeks_later),
                ("한달 후", self.one_month_later),
                ("다음 주 월요일", self.next_monday),
            ]
        )
        return rows
