"""
Request and response bodies for the HTTP API

Bodies only shape the JSON; record rules (non-empty text, enum values,
date order) are enforced by the domain models and surface as 422.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RequestModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def changes(self) -> Dict[str, Any]:
        """Only the fields the client actually sent"""
        return self.model_dump(exclude_unset=True)

# ===== RESOURCES =====

class TaskCreate(RequestModel):
    title: str
    description: Optional[str] = None
    status: str = "Pending"
    due_date: Optional[datetime] = None


class TaskUpdate(RequestModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    due_date: Optional[datetime] = None


class GoalCreate(RequestModel):
    title: str
    description: Optional[str] = None
    status: str = "Not Started"
    target_date: Optional[datetime] = None


class GoalUpdate(RequestModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    target_date: Optional[datetime] = None


class HabitCreate(RequestModel):
    title: str
    frequency: str = "Daily"
    description: Optional[str] = None
    specific_days: List[int] = Field(default_factory=list)


class HabitUpdate(RequestModel):
    title: Optional[str] = None
    frequency: Optional[str] = None
    description: Optional[str] = None
    specific_days: Optional[List[int]] = None


class LogCreate(RequestModel):
    activity: str
    date: Optional[datetime] = None
    mood: Optional[str] = None
    focus_level: Optional[int] = None
    notes: Optional[str] = None
    diary_entry: Optional[str] = None


class LogUpdate(RequestModel):
    activity: Optional[str] = None
    date: Optional[datetime] = None
    mood: Optional[str] = None
    focus_level: Optional[int] = None
    notes: Optional[str] = None
    diary_entry: Optional[str] = None


class ExpenseCreate(RequestModel):
    description: str
    amount: float = Field(allow_inf_nan=False)
    category: str
    date: Optional[datetime] = None


class ExpenseUpdate(RequestModel):
    description: Optional[str] = None
    amount: Optional[float] = Field(None, allow_inf_nan=False)
    category: Optional[str] = None
    date: Optional[datetime] = None


class EventCreate(RequestModel):
    title: str
    start: datetime
    end: datetime
    description: Optional[str] = None


class EventUpdate(RequestModel):
    title: Optional[str] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    description: Optional[str] = None


class NoteCreate(RequestModel):
    title: str
    content: str


class NoteUpdate(RequestModel):
    title: Optional[str] = None
    content: Optional[str] = None


class ReminderCreate(RequestModel):
    title: str
    date_time: datetime
    description: Optional[str] = None


class ReminderUpdate(RequestModel):
    title: Optional[str] = None
    date_time: Optional[datetime] = None
    description: Optional[str] = None


class GratitudeCreate(RequestModel):
    text: str


class ReframingCreate(RequestModel):
    negative_thought: str
    positive_reframing: str

# ===== SETTINGS & DATA =====

class SettingsPayload(RequestModel):
    preferences: Dict[str, Any] = Field(default_factory=dict)
    notifications: Dict[str, Any] = Field(default_factory=dict)
    integrations: Dict[str, Any] = Field(default_factory=dict)
    neurodivergent: Dict[str, Any] = Field(default_factory=dict)


class DataModeResponse(BaseModel):
    data_mode: str

# ===== INSIGHTS =====

class DateRangeRequest(RequestModel):
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @model_validator(mode="after")
    def check_range(self):
        if (self.start_date is None) != (self.end_date is None):
            raise ValueError("start_date and end_date must be given together")
        return self


class ProductivityRequest(DateRangeRequest):
    additional_context: Optional[str] = None


class ReflectionRequest(DateRangeRequest):
    previous_reflection: Optional[Dict[str, Any]] = None
    user_response: Optional[str] = None


class SuggestionsRequest(RequestModel):
    user_location: Optional[str] = None
    weather_condition: Optional[str] = None


class VoiceRequest(RequestModel):
    transcribed_text: str = ""
    apply: bool = True

# ===== SYSTEM =====

class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    timestamp: float
    storage: Dict[str, Any] = Field(default_factory=dict)
    ai: Dict[str, Any] = Field(default_factory=dict)
