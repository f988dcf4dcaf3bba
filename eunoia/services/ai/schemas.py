"""
Input and output models for the AI flows.

Inputs are validated before a flow runs and model replies are validated
before a flow reads them. Datetimes accept ISO-8601 strings and are
normalized to aware datetimes in the configured timezone.
"""

from datetime import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator

from eunoia.core.models import Mood
from eunoia.utils.datetime_utils import parse_iso

IsoDatetime = Annotated[datetime, BeforeValidator(parse_iso)]

LifeAreaName = Literal[
    "Work/Career", "Personal Growth", "Health/Wellness", "Social/Relationships",
    "Finance", "Hobbies/Leisure", "Responsibilities/Chores",
]
TaskStatusName = Literal["Pending", "In Progress", "Completed"]
GoalStatusName = Literal["Not Started", "In Progress", "Achieved", "On Hold"]
GrowthPaceName = Literal["Slow", "Moderate", "Aggressive"]


class SchemaModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


def coerce_focus_level(value):
    """Focus levels outside 1-5 become None"""
    if value is None or isinstance(value, bool):
        return None
    try:
        level = int(value)
    except (TypeError, ValueError):
        return None
    return level if 1 <= level <= 5 else None


FocusLevel = Annotated[Optional[int], BeforeValidator(coerce_focus_level)]


class DateRangeInput(SchemaModel):
    start_date: IsoDatetime
    end_date: IsoDatetime

    @model_validator(mode="after")
    def check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

# ===== DATA ITEMS =====

class LogItem(SchemaModel):
    id: Optional[str] = None
    date: IsoDatetime
    activity: str
    mood: Optional[str] = None
    focus_level: FocusLevel = None
    notes: Optional[str] = None
    diary_entry: Optional[str] = None


class TaskItem(SchemaModel):
    id: Optional[str] = None
    title: str
    description: Optional[str] = None
    status: TaskStatusName = "Pending"
    due_date: Optional[IsoDatetime] = None
    created_at: Optional[IsoDatetime] = None


class EventItem(SchemaModel):
    id: Optional[str] = None
    title: str
    start: IsoDatetime
    end: IsoDatetime
    description: Optional[str] = None


class GoalItem(SchemaModel):
    id: Optional[str] = None
    title: str
    description: Optional[str] = None
    status: GoalStatusName = "Not Started"
    target_date: Optional[IsoDatetime] = None
    updated_at: Optional[IsoDatetime] = None


class HabitItem(SchemaModel):
    id: Optional[str] = None
    title: str
    description: Optional[str] = None
    frequency: str = "Daily"
    streak: int = Field(0, ge=0)
    last_completed: Optional[IsoDatetime] = None


class ExpenseItem(SchemaModel):
    id: Optional[str] = None
    description: str
    amount: float = Field(ge=0, allow_inf_nan=False)
    date: IsoDatetime
    category: str


class NoteItem(SchemaModel):
    id: Optional[str] = None
    title: str
    content: str
    created_at: IsoDatetime
    updated_at: Optional[IsoDatetime] = None


class ReminderItem(SchemaModel):
    id: Optional[str] = None
    title: str
    date_time: IsoDatetime
    description: Optional[str] = None

# ===== LIFE BALANCE =====

class AssessLifeBalanceInput(SchemaModel):
    start_date: Optional[IsoDatetime] = None
    end_date: Optional[IsoDatetime] = None
    logs: List[LogItem] = Field(default_factory=list)
    tasks: List[TaskItem] = Field(default_factory=list)
    events: List[EventItem] = Field(default_factory=list)
    notes: List[NoteItem] = Field(default_factory=list)
    expenses: List[ExpenseItem] = Field(default_factory=list)
    habits: List[HabitItem] = Field(default_factory=list)
    goals: List[GoalItem] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_range(self):
        if (self.start_date is None) != (self.end_date is None):
            raise ValueError("start_date and end_date must be given together")
        if self.start_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class AreaScore(SchemaModel):
    area: LifeAreaName
    score: int = Field(ge=0, le=100)


class LifeBalanceAssessment(SchemaModel):
    """What the model writes; scores are computed locally"""
    balance_summary: str
    neglected_areas: List[LifeAreaName] = Field(min_length=1, max_length=3)


class AssessLifeBalanceOutput(SchemaModel):
    area_scores: List[AreaScore]
    balance_summary: str
    neglected_areas: List[LifeAreaName]

# ===== BURNOUT =====

class LogSummary(SchemaModel):
    total_logs: int = Field(0, ge=0)
    stressed_anxious_tired_count: int = Field(0, ge=0)
    positive_mood_count: int = Field(0, ge=0)


class TaskSummary(SchemaModel):
    pending_in_progress_count: int = Field(0, ge=0)
    overdue_count: int = Field(0, ge=0)


class EventSummary(SchemaModel):
    total_events: int = Field(0, ge=0)


class EstimateBurnoutRiskInput(SchemaModel):
    log_summary: LogSummary = Field(default_factory=LogSummary)
    task_summary: TaskSummary = Field(default_factory=TaskSummary)
    event_summary: EventSummary = Field(default_factory=EventSummary)
    analysis_period_days: int = Field(30, gt=0)


class EstimateBurnoutRiskOutput(SchemaModel):
    risk_level: Literal["Low", "Moderate", "High", "Very High"]
    risk_score: int = Field(ge=0, le=100)
    assessment_summary: str
    contributing_factors: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

# ===== VOICE =====

VoiceIntent = Literal["log_activity", "create_task", "create_note", "general_query", "unclear"]


class ProcessVoiceInput(SchemaModel):
    transcribed_text: str = ""
    current_date: IsoDatetime


class ExtractedDetails(SchemaModel):
    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    date: Optional[IsoDatetime] = None
    due_date: Optional[IsoDatetime] = None
    mood: Optional[str] = None
    focus_level: FocusLevel = None

    @field_validator("mood")
    @classmethod
    def known_mood(cls, value):
        # Spoken moods outside the list are dropped, not rejected
        valid = {m.value for m in Mood}
        return value if value in valid else None


class ProcessVoiceOutput(SchemaModel):
    intent: VoiceIntent
    extracted_details: ExtractedDetails = Field(default_factory=ExtractedDetails)
    response_text: str

# ===== DAILY PLAN =====

PlanCategory = Literal[
    "Work", "Personal", "Health", "Learning", "Break", "Chore",
    "Social", "Goal", "Habit", "Event", "Other",
]


class PlanPreferences(SchemaModel):
    preferred_work_times: Optional[str] = None
    energy_level_pattern: Optional[str] = None
    growth_pace: Optional[GrowthPaceName] = None


class GenerateDailyPlanInput(SchemaModel):
    target_date: IsoDatetime
    recent_logs: List[LogItem] = Field(default_factory=list)
    tasks_for_date: List[TaskItem] = Field(default_factory=list)
    events_for_date: List[EventItem] = Field(default_factory=list)
    active_goals: List[GoalItem] = Field(default_factory=list)
    active_habits: List[HabitItem] = Field(default_factory=list)
    user_preferences: Optional[PlanPreferences] = None


class TimeBlock(SchemaModel):
    start_time: str
    end_time: Optional[str] = None
    activity: str
    category: PlanCategory
    reasoning: Optional[str] = None


class GenerateDailyPlanOutput(SchemaModel):
    suggested_plan: List[TimeBlock]
    plan_rationale: str
    warnings: List[str] = Field(default_factory=list)

# ===== DAILY SUGGESTIONS =====

class GenerateDailySuggestionsInput(SchemaModel):
    current_date_time: IsoDatetime
    recent_logs: List[LogItem] = Field(default_factory=list)
    upcoming_tasks: List[TaskItem] = Field(default_factory=list)
    todays_events: List[EventItem] = Field(default_factory=list)
    active_habits: List[HabitItem] = Field(default_factory=list)
    active_goals: List[GoalItem] = Field(default_factory=list)
    user_location: Optional[str] = None
    weather_condition: Optional[str] = None
    growth_pace: Optional[GrowthPaceName] = None


class DailySuggestion(SchemaModel):
    suggestion: str
    category: Literal["Routine", "Focus", "Break", "Self-care", "Goal", "Habit", "Other"]
    reasoning: Optional[str] = None


class GenerateDailySuggestionsOutput(SchemaModel):
    suggestions: List[DailySuggestion]
    daily_focus: Optional[str] = None

# ===== ATTENTION =====

class AnalyzeAttentionPatternsInput(DateRangeInput):
    daily_logs: List[LogItem] = Field(default_factory=list)


class FocusPeriod(SchemaModel):
    period_description: str
    avg_focus_level: float = Field(ge=1, le=5)
    activities: List[str] = Field(default_factory=list)
    contributing_factors: Optional[List[str]] = None


class AnalyzeAttentionPatternsOutput(SchemaModel):
    overall_assessment: str
    high_focus_periods: List[FocusPeriod] = Field(default_factory=list)
    low_focus_periods: List[FocusPeriod] = Field(default_factory=list)
    attention_quality_score: int = Field(ge=0, le=100)
    insights: List[str] = Field(default_factory=list)
    suggestions_for_improvement: List[str] = Field(default_factory=list)

# ===== EXPENSES =====

class AnalyzeExpenseTrendsInput(DateRangeInput):
    expenses: List[ExpenseItem] = Field(default_factory=list)


class CategorySpending(SchemaModel):
    category: str
    amount: float
    percentage: float


class SpendingSummary(SchemaModel):
    """What the model writes; totals are computed locally"""
    spending_summary: str


class AnalyzeExpenseTrendsOutput(SchemaModel):
    total_spending: float
    average_daily_spending: float
    top_spending_categories: List[CategorySpending] = Field(default_factory=list)
    spending_summary: str

# ===== PRODUCTIVITY =====

class AnalyzeProductivityPatternsInput(DateRangeInput):
    calendar_events: List[EventItem] = Field(default_factory=list)
    tasks: List[TaskItem] = Field(default_factory=list)
    expenses: List[ExpenseItem] = Field(default_factory=list)
    reminders: List[ReminderItem] = Field(default_factory=list)
    notes: List[NoteItem] = Field(default_factory=list)
    daily_logs: List[LogItem] = Field(default_factory=list)
    additional_context: Optional[str] = None


class AnalyzeProductivityPatternsOutput(SchemaModel):
    peak_performance_times: str
    common_distractions_or_obstacles: str
    suggested_strategies: str
    overall_assessment: str

# ===== SENTIMENT =====

class AnalyzeSentimentTrendsInput(DateRangeInput):
    daily_logs: List[LogItem] = Field(default_factory=list)
    notes: List[NoteItem] = Field(default_factory=list)


class AnalyzeSentimentTrendsOutput(SchemaModel):
    overall_sentiment: Literal["Positive", "Negative", "Neutral", "Mixed"]
    sentiment_score: float = Field(ge=-1, le=1)
    positive_keywords: List[str] = Field(default_factory=list)
    negative_keywords: List[str] = Field(default_factory=list)
    analysis_summary: str
    entry_count: int = Field(0, ge=0)

# ===== TASK COMPLETION =====

class AnalyzeTaskCompletionInput(DateRangeInput):
    tasks: List[TaskItem] = Field(default_factory=list)


class CompletionSummary(SchemaModel):
    """What the model writes; figures are computed locally"""
    completion_summary: str


class AnalyzeTaskCompletionOutput(SchemaModel):
    total_tasks_considered: int = Field(ge=0)
    completed_tasks: int = Field(ge=0)
    completion_rate: float = Field(ge=0, le=100)
    overdue_tasks: List[TaskItem] = Field(default_factory=list)
    completion_summary: str

# ===== WEEKLY REFLECTION =====

class ReflectionPreferences(SchemaModel):
    ai_persona: Literal["Supportive Coach", "Neutral Assistant", "Direct Analyst"] = "Supportive Coach"
    ai_insight_verbosity: Literal["Brief Summary", "Detailed Analysis"] = "Detailed Analysis"
    energy_pattern: str = "Not specified"
    preferred_work_times: str = "Flexible"
    growth_pace: GrowthPaceName = "Moderate"


class PreviousReflection(SchemaModel):
    questions_asked: List[str] = Field(default_factory=list)
    user_responses: List[str] = Field(default_factory=list)
    ai_summary: Optional[str] = None


class ReflectOnWeekInput(DateRangeInput):
    logs: List[LogItem] = Field(default_factory=list)
    tasks: List[TaskItem] = Field(default_factory=list)
    goals: List[GoalItem] = Field(default_factory=list)
    habits: List[HabitItem] = Field(default_factory=list)
    previous_reflection: Optional[PreviousReflection] = None
    user_response: Optional[str] = None
    user_preferences: ReflectionPreferences = Field(default_factory=ReflectionPreferences)


class ReflectOnWeekOutput(SchemaModel):
    coach_prompt: str
    observation: Optional[str] = None
    is_complete: bool = False

# ===== DIARY SUMMARY =====

class DiaryEntry(SchemaModel):
    date: IsoDatetime
    text: str


class SummarizeDiaryEntriesInput(DateRangeInput):
    frequency: Literal["weekly", "monthly"]
    diary_entries: List[DiaryEntry] = Field(default_factory=list)


class DiaryDigest(SchemaModel):
    """What the model writes; count and range are filled locally"""
    summary: str
    key_events: List[str] = Field(default_factory=list)
    emotions: List[str] = Field(default_factory=list)
    reflections: List[str] = Field(default_factory=list)


class DateRange(SchemaModel):
    start: str
    end: str


class SummarizeDiaryEntriesOutput(SchemaModel):
    summary: str
    key_events: List[str] = Field(default_factory=list)
    emotions: List[str] = Field(default_factory=list)
    reflections: List[str] = Field(default_factory=list)
    entry_count: int = Field(ge=0)
    date_range: DateRange
