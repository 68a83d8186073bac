"""相对日期解析

参考时刻必须显式传入：同一批次的所有分段共享一个参考时刻，测试可注入固定时刻。
"""

from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta

from .config import LOCAL_UTC_OFFSET_HOURS
from .models import DateAnchor

# 参考时钟：返回带时区的 UTC 时刻
Clock = Callable[[], datetime]

KOREAN_WEEKDAYS: tuple[str, ...] = (
    "월요일", "화요일", "수요일", "목요일", "금요일", "토요일", "일요일",
)

ONE_WEEK_DAYS = 7
TWO_WEEKS_DAYS = 14
ONE_MONTH_DAYS = 30


def utc_now() -> datetime:
    """默认时钟"""
    return datetime.now(UTC)


def to_local_date(reference: datetime) -> date:
    """把参考时刻平移固定偏移后取日历日

    naive datetime 视为 UTC。
    """
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=UTC)
    shifted = reference.astimezone(UTC) + timedelta(hours=LOCAL_UTC_OFFSET_HOURS)
    return shifted.date()


def days_until_next_monday(day: date) -> int:
    """到下一个周一的天数，范围 1..7，今天是周一时返回 7"""
    # 0=周日 .. 6=周六
    sunday_based = (day.weekday() + 1) % 7
    return (8 - sunday_based) % 7 or 7


def _fmt(day: date) -> str:
    return day.strftime("%Y-%m-%d")


def resolve_dates(reference: datetime) -> DateAnchor:
    """计算所有相对时间标签对应的绝对日期

    纯函数：结果只取决于 reference。
    """
    today = to_local_date(reference)

    def later(days: int) -> str:
        return _fmt(today + timedelta(days=days))

    return DateAnchor(
        today=_fmt(today),
        weekday=KOREAN_WEEKDAYS[today.weekday()],
        tomorrow=later(1),
        day_after_tomorrow=later(2),
        days_later={n: later(n) for n in range(1, 8)},
        one_week_later=later(ONE_WEEK_DAYS),
        two_weeks_later=later(TWO_WEEKS_DAYS),
        one_month_later=later(ONE_MONTH_DAYS),
        next_monday=later(days_until_next_monday(today)),
    )
