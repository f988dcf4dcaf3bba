#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Core Data Models
Resource records with validation and ISO-8601 serialization

Version: 1.0.0
"""

import math
import uuid
import logging
from datetime import datetime
from typing import Dict, List, Optional, Any, ClassVar, Tuple, Type, TypeVar
from dataclasses import dataclass, field, asdict, fields
from enum import Enum

from eunoia.utils.datetime_utils import now, parse_iso, to_iso, is_same_day

logger = logging.getLogger(__name__)

# ===== ENUMS =====

class TaskStatus(Enum):
    """Task statuses"""
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class GoalStatus(Enum):
    """Goal statuses"""
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    ACHIEVED = "Achieved"
    ON_HOLD = "On Hold"


class HabitFrequency(Enum):
    """How often a habit is meant to happen"""
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    SPECIFIC_DAYS = "Specific Days"


class Mood(Enum):
    """Moods selectable on a daily log"""
    HAPPY = "😊 Happy"
    CALM = "😌 Calm"
    NEUTRAL = "😕 Neutral"
    ANXIOUS = "😟 Anxious"
    SAD = "😢 Sad"
    STRESSED = "😠 Stressed"
    PRODUCTIVE = "⚡ Productive"
    TIRED = "😴 Tired"
    OTHER = "❓ Other"


NEGATIVE_MOODS = frozenset({Mood.STRESSED.value, Mood.ANXIOUS.value, Mood.TIRED.value})
POSITIVE_MOODS = frozenset({Mood.HAPPY.value, Mood.CALM.value, Mood.PRODUCTIVE.value})


class LifeArea(Enum):
    """Buckets for categorized activity"""
    WORK_CAREER = "Work/Career"
    PERSONAL_GROWTH = "Personal Growth"
    HEALTH_WELLNESS = "Health/Wellness"
    SOCIAL_RELATIONSHIPS = "Social/Relationships"
    FINANCE = "Finance"
    HOBBIES_LEISURE = "Hobbies/Leisure"
    RESPONSIBILITIES_CHORES = "Responsibilities/Chores"
    UNCATEGORIZED = "Uncategorized"


LIFE_AREAS: Tuple[LifeArea, ...] = tuple(a for a in LifeArea if a is not LifeArea.UNCATEGORIZED)


class DataMode(Enum):
    """Seed records versus the user's own records"""
    MOCK = "mock"
    USER = "user"


class Theme(Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class GrowthPace(Enum):
    SLOW = "Slow"
    MODERATE = "Moderate"
    AGGRESSIVE = "Aggressive"


class AIPersona(Enum):
    SUPPORTIVE_COACH = "Supportive Coach"
    NEUTRAL_ASSISTANT = "Neutral Assistant"
    DIRECT_ANALYST = "Direct Analyst"


class InsightVerbosity(Enum):
    BRIEF = "Brief Summary"
    DETAILED = "Detailed Analysis"


class WorkTime(Enum):
    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"
    FLEXIBLE = "Flexible"


class FocusModeTimer(Enum):
    POMODORO = "pomodoro"
    CUSTOM = "custom"

# ===== VALIDATION HELPERS =====

class ValidationError(Exception):
    """Invalid record data"""
    pass


def validate_text(text: Any, min_length: int = 1, max_length: int = 1000, field_name: str = "text") -> str:
    """Validate a required text field"""
    if not isinstance(text, str):
        raise ValidationError(f"{field_name} must be a string")

    text = text.strip()
    if len(text) < min_length:
        raise ValidationError(f"{field_name} must be at least {min_length} characters")

    if len(text) > max_length:
        raise ValidationError(f"{field_name} must be at most {max_length} characters")

    return text


def validate_optional_text(text: Any, max_length: int = 5000, field_name: str = "text") -> Optional[str]:
    """Validate an optional text field; blank becomes None"""
    if text is None:
        return None
    text = validate_text(text, min_length=0, max_length=max_length, field_name=field_name)
    return text or None


def validate_enum_value(value: Any, enum_class: Type[Enum], field_name: str = "value") -> str:
    """Validate an enum value, accepting members or raw values"""
    if isinstance(value, enum_class):
        return value.value
    try:
        return enum_class(value).value
    except ValueError:
        valid_values = [e.value for e in enum_class]
        raise ValidationError(f"{field_name} must be one of: {valid_values}")


def validate_datetime(value: Any, field_name: str = "date", optional: bool = False) -> Optional[datetime]:
    """Validate a datetime or ISO-8601 string into an aware datetime"""
    if value is None or value == "":
        if optional:
            return None
        raise ValidationError(f"{field_name} is required")
    try:
        return parse_iso(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is not a valid ISO-8601 datetime: {value!r}")


def new_id() -> str:
    return str(uuid.uuid4())

# ===== BASE RECORD =====

R = TypeVar("R", bound="Record")


@dataclass
class Record:
    """Base for persisted records; datetime fields round-trip as ISO-8601"""
    DATETIME_FIELDS: ClassVar[Tuple[str, ...]] = ()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for name in self.DATETIME_FIELDS:
            data[name] = to_iso(data.get(name))
        return data

    @classmethod
    def from_dict(cls: Type[R], data: Dict[str, Any]) -> R:
        if not isinstance(data, dict):
            raise ValidationError(f"{cls.__name__} data must be an object")
        known = {f.name for f in fields(cls)}
        kwargs = {key: value for key, value in data.items() if key in known}
        try:
            return cls(**kwargs)
        except TypeError as e:
            raise ValidationError(f"Could not load {cls.__name__}: {e}")

# ===== RESOURCE RECORDS =====

@dataclass
class Task(Record):
    """A to-do item"""
    title: str
    description: Optional[str] = None
    status: str = TaskStatus.PENDING.value
    due_date: Optional[datetime] = None
    created_at: datetime = field(default_factory=now)
    id: str = field(default_factory=new_id)

    DATETIME_FIELDS: ClassVar[Tuple[str, ...]] = ("due_date", "created_at")

    def __post_init__(self):
        self.title = validate_text(self.title, max_length=200, field_name="title")
        self.description = validate_optional_text(self.description, field_name="description")
        self.status = validate_enum_value(self.status, TaskStatus, "status")
        self.due_date = validate_datetime(self.due_date, "due_date", optional=True)
        self.created_at = validate_datetime(self.created_at, "created_at")


@dataclass
class Goal(Record):
    """A longer-term objective"""
    title: str
    description: Optional[str] = None
    status: str = GoalStatus.NOT_STARTED.value
    target_date: Optional[datetime] = None
    created_at: datetime = field(default_factory=now)
    updated_at: datetime = field(default_factory=now)
    id: str = field(default_factory=new_id)

    DATETIME_FIELDS: ClassVar[Tuple[str, ...]] = ("target_date", "created_at", "updated_at")

    def __post_init__(self):
        self.title = validate_text(self.title, max_length=200, field_name="title")
        self.description = validate_optional_text(self.description, field_name="description")
        self.status = validate_enum_value(self.status, GoalStatus, "status")
        self.target_date = validate_datetime(self.target_date, "target_date", optional=True)
        self.created_at = validate_datetime(self.created_at, "created_at")
        self.updated_at = validate_datetime(self.updated_at, "updated_at")

    @property
    def is_active(self) -> bool:
        return self.status in (GoalStatus.NOT_STARTED.value, GoalStatus.IN_PROGRESS.value)


@dataclass
class Habit(Record):
    """A recurring behaviour with a completion streak"""
    title: str
    frequency: str = HabitFrequency.DAILY.value
    description: Optional[str] = None
    specific_days: List[int] = field(default_factory=list)  # 0 = Sunday
    streak: int = 0
    last_completed: Optional[datetime] = None
    created_at: datetime = field(default_factory=now)
    updated_at: datetime = field(default_factory=now)
    id: str = field(default_factory=new_id)

    DATETIME_FIELDS: ClassVar[Tuple[str, ...]] = ("last_completed", "created_at", "updated_at")

    def __post_init__(self):
        self.title = validate_text(self.title, max_length=200, field_name="title")
        self.description = validate_optional_text(self.description, field_name="description")
        self.frequency = validate_enum_value(self.frequency, HabitFrequency, "frequency")

        days = self.specific_days or []
        if not isinstance(days, list) or any(
            isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 6 for d in days
        ):
            raise ValidationError("specific_days must be a list of integers 0-6")
        self.specific_days = sorted(set(days))

        if isinstance(self.streak, bool) or not isinstance(self.streak, int) or self.streak < 0:
            raise ValidationError("streak must be a non-negative integer")

        self.last_completed = validate_datetime(self.last_completed, "last_completed", optional=True)
        self.created_at = validate_datetime(self.created_at, "created_at")
        self.updated_at = validate_datetime(self.updated_at, "updated_at")

    def is_completed_on(self, at: datetime) -> bool:
        if self.last_completed is None:
            return False
        return is_same_day(self.last_completed, at) or self.last_completed > at

    def mark_complete(self, at: Optional[datetime] = None) -> bool:
        """Count today's completion; False when today is already counted"""
        at = at or now()
        if self.is_completed_on(at):
            return False

        self.streak += 1
        self.last_completed = at
        self.updated_at = at
        return True


@dataclass
class LogEntry(Record):
    """A daily log of an activity, mood and focus"""
    activity: str
    date: datetime = field(default_factory=now)
    mood: Optional[str] = None
    focus_level: Optional[int] = None
    notes: Optional[str] = None
    diary_entry: Optional[str] = None
    id: str = field(default_factory=new_id)

    DATETIME_FIELDS: ClassVar[Tuple[str, ...]] = ("date",)

    def __post_init__(self):
        self.activity = validate_text(self.activity, max_length=300, field_name="activity")
        self.date = validate_datetime(self.date, "date")
        if self.mood is not None:
            self.mood = validate_enum_value(self.mood, Mood, "mood")
        self.focus_level = self._coerce_focus(self.focus_level)
        self.notes = validate_optional_text(self.notes, field_name="notes")
        self.diary_entry = validate_optional_text(self.diary_entry, max_length=20000, field_name="diary_entry")

    @staticmethod
    def _coerce_focus(value: Any) -> Optional[int]:
        # Out-of-range focus is dropped rather than rejected
        if value is None or isinstance(value, bool):
            return None
        try:
            level = int(value)
        except (TypeError, ValueError):
            return None
        return level if 1 <= level <= 5 else None


@dataclass
class Reminder(Record):
    """A one-off reminder"""
    title: str
    date_time: datetime
    description: Optional[str] = None
    id: str = field(default_factory=new_id)

    DATETIME_FIELDS: ClassVar[Tuple[str, ...]] = ("date_time",)

    def __post_init__(self):
        self.title = validate_text(self.title, max_length=200, field_name="title")
        self.date_time = validate_datetime(self.date_time, "date_time")
        self.description = validate_optional_text(self.description, field_name="description")


@dataclass
class Note(Record):
    """Free-form note"""
    title: str
    content: str
    created_at: datetime = field(default_factory=now)
    updated_at: datetime = field(default_factory=now)
    id: str = field(default_factory=new_id)

    DATETIME_FIELDS: ClassVar[Tuple[str, ...]] = ("created_at", "updated_at")

    def __post_init__(self):
        self.title = validate_text(self.title, max_length=200, field_name="title")
        self.content = validate_text(self.content, max_length=50000, field_name="content")
        self.created_at = validate_datetime(self.created_at, "created_at")
        self.updated_at = validate_datetime(self.updated_at, "updated_at")


@dataclass
class CalendarEvent(Record):
    """A scheduled event"""
    title: str
    start: datetime
    end: datetime
    description: Optional[str] = None
    id: str = field(default_factory=new_id)

    DATETIME_FIELDS: ClassVar[Tuple[str, ...]] = ("start", "end")

    def __post_init__(self):
        self.title = validate_text(self.title, max_length=200, field_name="title")
        self.start = validate_datetime(self.start, "start")
        self.end = validate_datetime(self.end, "end")
        if self.end < self.start:
            raise ValidationError("end must not be before start")
        self.description = validate_optional_text(self.description, field_name="description")

    def overlaps(self, start: datetime, end: datetime) -> bool:
        return self.start <= end and self.end >= start


@dataclass
class Expense(Record):
    """A single spending entry"""
    description: str
    amount: float
    category: str
    date: datetime = field(default_factory=now)
    id: str = field(default_factory=new_id)

    DATETIME_FIELDS: ClassVar[Tuple[str, ...]] = ("date",)

    def __post_init__(self):
        self.description = validate_text(self.description, max_length=300, field_name="description")
        self.category = validate_text(self.category, max_length=100, field_name="category")
        if isinstance(self.amount, bool):
            raise ValidationError("amount must be a number")
        try:
            self.amount = float(self.amount)
        except (TypeError, ValueError):
            raise ValidationError("amount must be a number")
        if not math.isfinite(self.amount):
            raise ValidationError("amount must be a finite number")
        if self.amount < 0:
            raise ValidationError("amount must not be negative")
        self.date = validate_datetime(self.date, "date")


@dataclass
class GratitudeLog(Record):
    text: str
    timestamp: datetime = field(default_factory=now)
    id: str = field(default_factory=new_id)

    DATETIME_FIELDS: ClassVar[Tuple[str, ...]] = ("timestamp",)

    def __post_init__(self):
        self.text = validate_text(self.text, max_length=2000, field_name="text")
        self.timestamp = validate_datetime(self.timestamp, "timestamp")


@dataclass
class ReframingLog(Record):
    negative_thought: str
    positive_reframing: str
    timestamp: datetime = field(default_factory=now)
    id: str = field(default_factory=new_id)

    DATETIME_FIELDS: ClassVar[Tuple[str, ...]] = ("timestamp",)

    def __post_init__(self):
        self.negative_thought = validate_text(self.negative_thought, max_length=2000, field_name="negative_thought")
        self.positive_reframing = validate_text(self.positive_reframing, max_length=2000, field_name="positive_reframing")
        self.timestamp = validate_datetime(self.timestamp, "timestamp")

# ===== SETTINGS =====

@dataclass
class NotificationSettings:
    task_reminders: bool = True
    event_alerts: bool = True
    habit_nudges: bool = True
    insight_notifications: bool = True


@dataclass
class IntegrationSettings:
    google_calendar_sync: bool = False
    slack_integration: bool = False


@dataclass
class NeurodivergentSettings:
    enabled: bool = False
    focus_mode_timer: str = FocusModeTimer.POMODORO.value
    task_chunking: bool = False
    low_stimulation_ui: bool = False
    focus_shield_enabled: bool = False

    def __post_init__(self):
        self.focus_mode_timer = validate_enum_value(self.focus_mode_timer, FocusModeTimer, "focus_mode_timer")


@dataclass
class UserPreferences:
    theme: str = Theme.SYSTEM.value
    default_view: str = "/"
    growth_pace: str = GrowthPace.MODERATE.value
    ai_persona: str = AIPersona.SUPPORTIVE_COACH.value
    ai_insight_verbosity: str = InsightVerbosity.DETAILED.value
    energy_pattern: str = "Steady throughout day"
    preferred_work_times: str = WorkTime.FLEXIBLE.value

    def __post_init__(self):
        self.theme = validate_enum_value(self.theme, Theme, "theme")
        self.growth_pace = validate_enum_value(self.growth_pace, GrowthPace, "growth_pace")
        self.ai_persona = validate_enum_value(self.ai_persona, AIPersona, "ai_persona")
        self.ai_insight_verbosity = validate_enum_value(self.ai_insight_verbosity, InsightVerbosity, "ai_insight_verbosity")
        self.preferred_work_times = validate_enum_value(self.preferred_work_times, WorkTime, "preferred_work_times")
        self.default_view = validate_text(self.default_view, max_length=200, field_name="default_view")
        self.energy_pattern = validate_text(self.energy_pattern, max_length=200, field_name="energy_pattern")


@dataclass
class AppSettings:
    """All per-user application settings"""
    preferences: UserPreferences = field(default_factory=UserPreferences)
    notifications: NotificationSettings = field(default_factory=NotificationSettings)
    integrations: IntegrationSettings = field(default_factory=IntegrationSettings)
    neurodivergent: NeurodivergentSettings = field(default_factory=NeurodivergentSettings)

    GROUPS: ClassVar[Dict[str, type]] = {
        "preferences": UserPreferences,
        "notifications": NotificationSettings,
        "integrations": IntegrationSettings,
        "neurodivergent": NeurodivergentSettings,
    }

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppSettings":
        """Strict load; raises ValidationError on any bad group"""
        if not isinstance(data, dict):
            raise ValidationError("settings must be an object")
        groups = {}
        for name, group_class in cls.GROUPS.items():
            raw = data.get(name) or {}
            if not isinstance(raw, dict):
                raise ValidationError(f"{name} must be an object")
            known = {f.name for f in fields(group_class)}
            try:
                groups[name] = group_class(**{k: v for k, v in raw.items() if k in known})
            except TypeError as e:
                raise ValidationError(f"Invalid {name}: {e}")
        return cls(**groups)


__all__ = [
    'TaskStatus', 'GoalStatus', 'HabitFrequency', 'Mood', 'LifeArea', 'LIFE_AREAS',
    'NEGATIVE_MOODS', 'POSITIVE_MOODS', 'DataMode', 'Theme', 'GrowthPace', 'AIPersona',
    'InsightVerbosity', 'WorkTime', 'FocusModeTimer',
    'ValidationError', 'validate_text', 'validate_optional_text', 'validate_enum_value',
    'validate_datetime', 'new_id',
    'Record', 'Task', 'Goal', 'Habit', 'LogEntry', 'Reminder', 'Note', 'CalendarEvent',
    'Expense', 'GratitudeLog', 'ReframingLog',
    'NotificationSettings', 'IntegrationSettings', 'NeurodivergentSettings',
    'UserPreferences', 'AppSettings'
]
