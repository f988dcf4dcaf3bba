#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Period Aggregation
Date-range filtering and summaries that feed the AI flows

All functions are pure: they take collections and a Period and never touch
storage. Items are read by attribute, so domain records and validated flow
input items are both accepted.

Version: 1.0.0
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, TypeVar

from eunoia.core.categorizer import categorize_activity
from eunoia.core.models import (
    CalendarEvent, Expense, Goal, Habit, LifeArea, LIFE_AREAS, LogEntry, Note, Task,
    TaskStatus, NEGATIVE_MOODS, POSITIVE_MOODS, ValidationError, validate_datetime,
)
from eunoia.utils.datetime_utils import now as current_time, start_of_day, end_of_day
from eunoia.utils.text_utils import round_half_up

T = TypeVar("T")

# ===== PERIOD =====

@dataclass(frozen=True)
class Period:
    """Inclusive [start, end] range"""
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.end < self.start:
            raise ValidationError("Period end must not be before start")

    @classmethod
    def last_days(cls, days: int = 30, at: Optional[datetime] = None) -> "Period":
        """`days` whole calendar days ending today"""
        if days < 1:
            raise ValidationError("days must be at least 1")
        at = at or current_time()
        return cls(start_of_day(at - timedelta(days=days - 1)), end_of_day(at))

    @classmethod
    def from_dates(cls, start: Any, end: Any) -> "Period":
        """Whole days from start's midnight to end's last instant"""
        start_dt = validate_datetime(start, "start")
        end_dt = validate_datetime(end, "end")
        return cls(start_of_day(start_dt), end_of_day(end_dt))

    @property
    def day_count(self) -> int:
        return max(1, (self.end.date() - self.start.date()).days + 1)

    def contains(self, moment: Optional[datetime]) -> bool:
        return moment is not None and self.start <= moment <= self.end


def is_completed(task: Task) -> bool:
    return task.status == TaskStatus.COMPLETED.value


def is_overdue(task: Task, at: datetime) -> bool:
    return task.due_date is not None and task.due_date <= at and not is_completed(task)


def filter_in_period(items: Iterable[T], period: Period, key: Callable[[T], Optional[datetime]]) -> List[T]:
    return [item for item in items if period.contains(key(item))]

# ===== LIFE AREAS =====

@dataclass
class AreaTally:
    counts: Dict[LifeArea, int] = field(default_factory=lambda: {area: 0 for area in LifeArea})

    def add(self, area: LifeArea) -> None:
        self.counts[area] = self.counts.get(area, 0) + 1

    @property
    def total_categorized(self) -> int:
        return sum(self.counts.get(area, 0) for area in LIFE_AREAS)


def tally_life_areas(
    period: Period,
    logs: Sequence[LogEntry] = (),
    tasks: Sequence[Task] = (),
    events: Sequence[CalendarEvent] = (),
    notes: Sequence[Note] = (),
    expenses: Sequence[Expense] = (),
    habits: Sequence[Habit] = (),
    goals: Sequence[Goal] = (),
) -> AreaTally:
    """Categorize every in-period item by its own date field"""
    tally = AreaTally()

    for log in filter_in_period(logs, period, lambda l: l.date):
        tally.add(categorize_activity(log.activity))

    completed = [t for t in tasks if is_completed(t)]
    for task in filter_in_period(completed, period, lambda t: t.created_at):
        tally.add(categorize_activity(task.title))

    for event in filter_in_period(events, period, lambda e: e.start):
        tally.add(categorize_activity(event.title))

    for note in filter_in_period(notes, period, lambda n: n.created_at):
        tally.add(categorize_activity(note.title))

    for expense in filter_in_period(expenses, period, lambda e: e.date):
        tally.add(categorize_activity(expense.description, hint=expense.category))

    for habit in filter_in_period(habits, period, lambda h: h.last_completed):
        tally.add(categorize_activity(habit.title))

    for goal in filter_in_period(goals, period, lambda g: g.updated_at):
        tally.add(categorize_activity(goal.title))

    return tally


def compute_area_scores(tally: AreaTally) -> Dict[LifeArea, int]:
    """Percentage share per Life Area; all zero when nothing was categorized"""
    total = tally.total_categorized
    if total == 0:
        return {area: 0 for area in LIFE_AREAS}
    return {
        area: round_half_up(tally.counts.get(area, 0) / total * 100)
        for area in LIFE_AREAS
    }

# ===== FOCUS & MOOD =====

def average_focus(logs: Iterable[LogEntry]) -> Optional[float]:
    levels = [log.focus_level for log in logs if log.focus_level is not None]
    if not levels:
        return None
    return round_half_up(sum(levels) / len(levels), 1)


def build_burnout_summary(
    period: Period,
    logs: Sequence[LogEntry] = (),
    tasks: Sequence[Task] = (),
    events: Sequence[CalendarEvent] = (),
    at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Counts that indicate load and mood over the period.

    Logs and events are limited to the period; task load counts every open task.
    """
    at = at or current_time()
    period_logs = filter_in_period(logs, period, lambda l: l.date)
    open_tasks = [t for t in tasks if not is_completed(t)]

    return {
        "log_summary": {
            "total_logs": len(period_logs),
            "stressed_anxious_tired_count": sum(1 for l in period_logs if l.mood in NEGATIVE_MOODS),
            "positive_mood_count": sum(1 for l in period_logs if l.mood in POSITIVE_MOODS),
        },
        "task_summary": {
            "pending_in_progress_count": len(open_tasks),
            "overdue_count": sum(1 for t in open_tasks if t.due_date is not None and t.due_date < at),
        },
        "event_summary": {
            "total_events": len(filter_in_period(events, period, lambda e: e.start)),
        },
        "analysis_period_days": period.day_count,
    }

# ===== EXPENSES =====

@dataclass
class ExpenseSummary:
    total_spending: float
    average_daily_spending: float
    top_spending_categories: List[Dict[str, Any]]
    expense_count: int
    day_count: int


def summarize_expenses(expenses: Iterable[Expense], period: Period, top_n: int = 5) -> ExpenseSummary:
    in_period = filter_in_period(expenses, period, lambda e: e.date)
    total = sum(e.amount for e in in_period)

    by_category: Dict[str, float] = defaultdict(float)
    for expense in in_period:
        by_category[expense.category] += expense.amount

    ranked = sorted(by_category.items(), key=lambda item: item[1], reverse=True)[:top_n]
    top = [
        {
            "category": category,
            "amount": round_half_up(amount, 2),
            "percentage": round_half_up(amount / total * 100, 1) if total > 0 else 0.0,
        }
        for category, amount in ranked
    ]

    return ExpenseSummary(
        total_spending=round_half_up(total, 2),
        average_daily_spending=round_half_up(total / period.day_count, 2),
        top_spending_categories=top,
        expense_count=len(in_period),
        day_count=period.day_count,
    )

# ===== TASKS =====

@dataclass
class TaskCompletionStats:
    total_tasks_considered: int
    completed_tasks: int
    completion_rate: float
    overdue_tasks: List[Task]


def summarize_task_completion(tasks: Iterable[Task], period: Period, at: Optional[datetime] = None) -> TaskCompletionStats:
    """Completion over tasks due inside the period"""
    at = at or current_time()
    relevant = filter_in_period(tasks, period, lambda t: t.due_date)
    completed = sum(1 for t in relevant if is_completed(t))
    rate = round_half_up(completed / len(relevant) * 100, 1) if relevant else 0.0

    return TaskCompletionStats(
        total_tasks_considered=len(relevant),
        completed_tasks=completed,
        completion_rate=rate,
        overdue_tasks=[t for t in relevant if is_overdue(t, at)],
    )

# ===== TEXT ENTRIES =====

def collect_text_entries(period: Period, logs: Iterable[LogEntry] = (), notes: Iterable[Note] = ()) -> List[Dict[str, Any]]:
    """Diary entries and notes in the period, oldest first"""
    entries = [
        {"date": log.date, "text": log.diary_entry, "source": "diary"}
        for log in filter_in_period(logs, period, lambda l: l.date)
        if log.diary_entry
    ]
    entries.extend(
        {"date": note.created_at, "text": f"{note.title}: {note.content}", "source": "note"}
        for note in filter_in_period(notes, period, lambda n: n.created_at)
    )
    entries.sort(key=lambda entry: entry["date"])
    return [{**entry, "date": entry["date"].isoformat()} for entry in entries]
