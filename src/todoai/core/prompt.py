"""提示词构建

build_prompt(): 单条待办抽取指令，日期表逐项写成字面量，模型只需复制不需计算。
build_analysis_prompt(): 待办列表分析指令。
两者都是纯函数，相同输入得到相同文本。
"""

from collections.abc import Sequence

from .models import AnalysisPeriod, AnalysisStats, DateAnchor, Priority, TodoItem

# 时段 -> 默认时间
PART_OF_DAY_TIMES: tuple[tuple[str, str], ...] = (
    ("아침", "09:00"),
    ("점심", "12:00"),
    ("오후", "14:00"),
    ("저녁", "18:00"),
    ("밤", "21:00"),
)
DEFAULT_DUE_TIME = "09:00"

HIGH_PRIORITY_KEYWORDS: tuple[str, ...] = ("급하게", "중요한", "빨리", "꼭", "반드시", "긴급")
MEDIUM_PRIORITY_KEYWORDS: tuple[str, ...] = ("보통", "적당히")
LOW_PRIORITY_KEYWORDS: tuple[str, ...] = ("여유롭게", "천천히", "언젠가", "나중에")

CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("업무", ("회의", "보고서", "프로젝트", "업무", "일", "팀")),
    ("개인", ("쇼핑", "친구", "가족", "개인", "약속")),
    ("건강", ("운동", "병원", "건강", "요가", "헬스", "조깅")),
    ("학습", ("공부", "책", "강의", "학습", "독서", "코스")),
    ("취미", ("영화", "게임", "여행", "취미")),
)
FALLBACK_CATEGORY = "기타"

TASK_JSON_SHAPE = """{
  "title": "할 일 제목",
  "description": "상세 설명 (선택, 시간 정보 포함 가능. 예: '오후 3시에 진행')",
  "due_date": "YYYY-MM-DD (선택)",
  "due_time": "HH:MM (선택)",
  "priority": "high|medium|low",
  "category": ["카테고리1", "카테고리2"]
}"""

ANALYSIS_JSON_SHAPE = """{
  "summary": "긍정적이고 자연스러운 한 줄 요약",
  "urgentTasks": ["긴급 작업 제목1", "긴급 작업 제목2"],
  "insights": ["완료율 관련 인사이트", "시간 관리 인사이트", "생산성 패턴 인사이트"],
  "recommendations": ["우선순위 조정 제안", "시간 관리 팁", "동기부여 메시지"]
}"""


def _quoted(words: Sequence[str]) -> str:
    return ", ".join(f'"{w}"' for w in words)


def _date_section(anchor: DateAnchor) -> str:
    return "\n".join(f"- {label}: {value}" for label, value in anchor.table())


def _date_mapping_rules(anchor: DateAnchor) -> str:
    d = anchor.days_later
    rules = [
        f'- "오늘" → {anchor.today}',
        f'- "내일" → {anchor.tomorrow}',
        f'- "모레" → {anchor.day_after_tomorrow}',
        f'- "1일 후", "하루 후" → {d[1]}',
        f'- "2일 후", "이틀 후" → {d[2]}',
        f'- "3일 후", "사흘 후" → {d[3]}',
        f'- "4일 후" → {d[4]}',
        f'- "5일 후" → {d[5]}',
        f'- "6일 후" → {d[6]}',
        f'- "7일 후", "일주일 후", "1주일 후" → {anchor.one_week_later}',
        f'- "2주 후", "2주일 후" → {anchor.two_weeks_later}',
        f'- "한달 후", "1달 후", "1개월 후" → {anchor.one_month_later}',
        f'- "다음 주 월요일" → {anchor.next_monday}',
        '- "월요일", "화요일" 등 요일만 있으면 → 오늘 이후 가장 가까운 해당 요일',
        "- 날짜 언급이 없으면 due_date를 생략",
    ]
    return "\n".join(rules)


def _time_mapping_rules() -> str:
    rules = [f'- "{phrase}" → "{hhmm}"' for phrase, hhmm in PART_OF_DAY_TIMES]
    rules.extend(
        [
            '- "오후 3시", "15시" → "15:00"',
            '- "저녁 7시", "19시" → "19:00"',
            "- 시각은 항상 24시간제로 변환",
            f'- 시간 언급 없이 마감일만 있으면 → "{DEFAULT_DUE_TIME}" (기본값)',
            "- 마감일도 없으면 due_time을 생략",
        ]
    )
    return "\n".join(rules)


def _category_rules() -> str:
    lines = [
        f'- ["{name}"]: {_quoted(keywords)} 포함 시' for name, keywords in CATEGORY_KEYWORDS
    ]
    lines.append(f'- ["{FALLBACK_CATEGORY}"]: 위 카테고리에 해당하지 않을 때')
    return "\n".join(lines)


def build_prompt(segment: str, anchor: DateAnchor) -> str:
    """构建单条待办抽取的指令文档

    Args:
        segment: 一条待办描述（原样嵌入）
        anchor: 本次请求的日期表

    Returns:
        纯文本指令文档
    """
    d = anchor.days_later
    return f"""당신은 할 일을 구조화하는 AI 전문가입니다. 사용자의 자연어 입력을 분석하여 정확한 JSON 형식으로 할 일 데이터를 생성하세요.

**현재 날짜 정보:**
{_date_section(anchor)}

**입력 텍스트:**
"{segment}"

**분석 규칙 (반드시 준수):**

**1. 제목 (title) - 필수**
- 핵심 행동만 간결하게 추출
- 예시: "팀 회의 준비", "보고서 작성", "운동하기"

**2. 설명 (description) - 선택**
- 제목에 포함되지 않은 추가 정보나 세부사항만 작성
- 시간 정보가 있으면 자연스럽게 포함 (예: "오후 3시에 진행", "저녁 7시 약속")
- 추가 정보가 없으면 생략

**3. 마감일 (due_date) - 선택, YYYY-MM-DD 형식**
날짜 표현 변환 규칙 (위 날짜 정보의 값을 그대로 복사하세요, 직접 계산하지 마세요):
{_date_mapping_rules(anchor)}

**4. 마감시간 (due_time) - 선택, HH:MM 형식 (24시간제)**
{_time_mapping_rules()}

**5. 우선순위 (priority) - 필수**
- "high": {_quoted(HIGH_PRIORITY_KEYWORDS)} 포함 시
- "medium": 특별한 키워드가 없거나 {_quoted(MEDIUM_PRIORITY_KEYWORDS)} 포함 시 (기본값)
- "low": {_quoted(LOW_PRIORITY_KEYWORDS)} 포함 시

**6. 카테고리 (category) - 필수, 배열 형식 (복수 선택 가능)**
{_category_rules()}

**중요 지침:**
1. 입력에 명시되지 않은 정보는 생략하세요 (추측하지 마세요)
2. JSON 객체만 출력하고 다른 텍스트는 절대 포함하지 마세요
3. priority 값은 소문자로 작성하세요
4. category는 반드시 배열 형식입니다

**출력 형식 (JSON만 출력):**
{TASK_JSON_SHAPE}

**예시 1: "내일 오후 3시 팀 회의 준비"**
{{
  "title": "팀 회의 준비",
  "description": "오후 3시에 진행",
  "due_date": "{anchor.tomorrow}",
  "due_time": "15:00",
  "priority": "medium",
  "category": ["업무"]
}}

**예시 2: "모레 저녁 7시 친구랑 저녁 약속"**
{{
  "title": "친구랑 저녁 약속",
  "description": "저녁 7시 약속",
  "due_date": "{anchor.day_after_tomorrow}",
  "due_time": "19:00",
  "priority": "medium",
  "category": ["개인"]
}}

**예시 3: "3일 후 오후 2시에 꼭 병원 예약"**
{{
  "title": "병원 예약",
  "description": "오후 2시 진료",
  "due_date": "{d[3]}",
  "due_time": "14:00",
  "priority": "high",
  "category": ["건강"]
}}

**예시 4: "책 읽기"**
{{
  "title": "책 읽기",
  "priority": "medium",
  "category": ["학습"]
}}"""


PERIOD_LABELS: dict[AnalysisPeriod, str] = {
    AnalysisPeriod.TODAY: "오늘",
    AnalysisPeriod.WEEK: "이번 주",
}

PERIOD_GUIDANCE: dict[AnalysisPeriod, str] = {
    AnalysisPeriod.TODAY: """**오늘의 요약 특화 분석:**
- 당일 집중해야 할 핵심 작업 식별
- 남은 시간 내 완료 가능한 작업 우선순위 제시
- 오늘 완료하기 어려운 작업은 내일로 연기 제안
- 당일 생산성을 높이는 즉각적인 실행 팁 제공""",
    AnalysisPeriod.WEEK: """**이번 주 요약 특화 분석:**
- 주간 업무 패턴 및 생산성 흐름 분석
- 요일별 작업 분포와 균형도 평가
- 다음 주를 위한 개선 전략 제안
- 주간 목표 달성을 위한 장기적 조언 제공""",
}

PRIORITY_LABELS: dict[Priority, str] = {
    Priority.HIGH: "높음",
    Priority.MEDIUM: "중간",
    Priority.LOW: "낮음",
}


def _todo_listing(todos: Sequence[TodoItem]) -> str:
    blocks = []
    for index, todo in enumerate(todos, start=1):
        status = "완료" if todo.completed else "미완료"
        due = todo.due_date[:10] if todo.due_date else "마감일 없음"
        category = ", ".join(todo.category) if todo.category else "카테고리 없음"
        blocks.append(
            f"{index}. [{status}] {todo.title}\n"
            f"   - 우선순위: {PRIORITY_LABELS[todo.priority]}\n"
            f"   - 마감일: {due}\n"
            f"   - 카테고리: {category}"
        )
    return "\n\n".join(blocks)


def build_analysis_prompt(
    todos: Sequence[TodoItem],
    period: AnalysisPeriod,
    anchor: DateAnchor,
    stats: AnalysisStats,
) -> str:
    """构建待办列表分析的指令文档"""
    return f"""당신은 생산성 코치이자 데이터 분석 전문가입니다. 사용자의 할 일 목록을 분석하여 실용적이고 동기부여가 되는 인사이트를 제공하세요.

**기본 정보**
- 현재 날짜: {anchor.today} ({anchor.weekday})
- 분석 기간: {PERIOD_LABELS[period]}
- 전체 할 일: {stats.total}개
- 완료: {stats.completed}개 ({stats.completion_rate}%)
- 미완료: {stats.pending}개

**우선순위 분포**
- 높음: {stats.high_priority}개
- 중간: {stats.medium_priority}개
- 낮음: {stats.low_priority}개

**마감일 현황**
- 지연된 할 일: {stats.overdue}개
- 3일 내 마감: {stats.upcoming}개

**할 일 목록 상세**
{_todo_listing(todos)}

{PERIOD_GUIDANCE[period]}

**분석 가이드**
1. summary: 전체 할 일 개수와 완료율을 긍정적인 톤의 한 문장으로 요약
2. urgentTasks: 우선순위가 높거나 마감일이 임박한 작업의 제목만 최대 5개 (지연된 작업 우선, 없으면 [])
3. insights: 완료율, 시간 관리, 생산성 패턴, 긍정적 피드백, 주목할 점을 3-5개의 자연스러운 한국어 문장으로
4. recommendations: 바로 실행할 수 있는 구체적인 조언 3-5개

**필수 규칙**
- JSON 객체만 출력 (설명 텍스트 없이)
- 모든 배열은 반드시 포함 (빈 배열이라도 [])
- 문장은 완결된 형태로 (존댓말, 마침표 포함)

**출력 형식 (JSON만 출력):**
{ANALYSIS_JSON_SHAPE}"""
