"""配置常量模块 -- 可通过环境变量覆盖

输入长度限制、批量上限、字段截断阈值等常量。
"""

import os

# 本地日历相对 UTC 的固定偏移（小时），所有相对日期都按此日历计算
LOCAL_UTC_OFFSET_HOURS: int = int(os.environ.get("TODOAI_UTC_OFFSET_HOURS", "9"))

# 输入长度限制（规范化后）
MIN_INPUT_LENGTH: int = 2
MAX_INPUT_LENGTH: int = 500

# 逗号分隔的批量输入最多拆成多少条
MAX_SEGMENTS: int = 10

# 多条输入的分隔符
SEGMENT_DELIMITER: str = ","

# TaskDraft 字段限制
TITLE_MIN_LENGTH: int = 2
TITLE_MAX_LENGTH: int = 100
DESCRIPTION_MAX_LENGTH: int = 1000
TRUNCATION_SUFFIX: str = "..."

# 标题兜底时从原始输入截取的长度
FALLBACK_TITLE_LENGTH: int = 50

# 日志中保留的模型原始输出长度
RAW_OUTPUT_PREVIEW_LENGTH: int = 300
