#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Seed Data
Sample records shown while a user is in mock mode

Records are built relative to the current time so they always look recent.

Version: 1.0.0
"""

from datetime import datetime, timedelta
from typing import Callable, Dict, List

from eunoia.core.database import (
    TASKS_KEY, GOALS_KEY, HABITS_KEY, DAILY_LOGS_KEY, EXPENSES_KEY,
    CALENDAR_EVENTS_KEY, NOTES_KEY, REMINDERS_KEY, GRATITUDE_KEY, REFRAMING_KEY,
)
from eunoia.core.models import (
    CalendarEvent, Expense, Goal, GratitudeLog, Habit, LogEntry, Mood, Note,
    Record, ReframingLog, Reminder, Task, TaskStatus, GoalStatus, HabitFrequency,
)
from eunoia.utils.datetime_utils import start_of_day


def _at_hour(at: datetime, days: int, hour: int, minute: int = 0) -> datetime:
    return start_of_day(at + timedelta(days=days)) + timedelta(hours=hour, minutes=minute)


def _tasks(at: datetime) -> List[Record]:
    return [
        Task(id="mock-task-1", title="Finish quarterly report draft", description="Sections 2 and 3",
             status=TaskStatus.IN_PROGRESS.value, due_date=_at_hour(at, 1, 17), created_at=at - timedelta(days=3)),
        Task(id="mock-task-2", title="Book dentist appointment",
             due_date=_at_hour(at, 2, 12), created_at=at - timedelta(days=2)),
        Task(id="mock-task-3", title="Clean the kitchen", status=TaskStatus.COMPLETED.value,
             due_date=_at_hour(at, -1, 20), created_at=at - timedelta(days=4)),
        Task(id="mock-task-4", title="Prepare client meeting notes",
             due_date=_at_hour(at, -1, 9), created_at=at - timedelta(days=5)),
    ]


def _goals(at: datetime) -> List[Record]:
    return [
        Goal(id="mock-goal-1", title="Run a 10k", description="Build up from 5k over two months",
             status=GoalStatus.IN_PROGRESS.value, target_date=at + timedelta(days=60),
             created_at=at - timedelta(days=20), updated_at=at - timedelta(days=1)),
        Goal(id="mock-goal-2", title="Read 12 books this year",
             status=GoalStatus.IN_PROGRESS.value, created_at=at - timedelta(days=90),
             updated_at=at - timedelta(days=6)),
        Goal(id="mock-goal-3", title="Learn basic Spanish",
             created_at=at - timedelta(days=10), updated_at=at - timedelta(days=10)),
    ]


def _habits(at: datetime) -> List[Record]:
    return [
        Habit(id="mock-habit-1", title="Morning meditation", frequency=HabitFrequency.DAILY.value,
              streak=5, last_completed=at - timedelta(days=1),
              created_at=at - timedelta(days=30), updated_at=at - timedelta(days=1)),
        Habit(id="mock-habit-2", title="Gym workout", frequency=HabitFrequency.SPECIFIC_DAYS.value,
              specific_days=[1, 3, 5], streak=2, last_completed=at - timedelta(days=2),
              created_at=at - timedelta(days=21), updated_at=at - timedelta(days=2)),
        Habit(id="mock-habit-3", title="Call family", frequency=HabitFrequency.WEEKLY.value,
              created_at=at - timedelta(days=14), updated_at=at - timedelta(days=14)),
    ]


def _logs(at: datetime) -> List[Record]:
    return [
        LogEntry(id="mock-log-1", activity="Worked on report with client", date=_at_hour(at, 0, 10),
                 mood=Mood.PRODUCTIVE.value, focus_level=4,
                 diary_entry="Good momentum this morning, the outline finally clicked."),
        LogEntry(id="mock-log-2", activity="Evening walk", date=_at_hour(at, -1, 19),
                 mood=Mood.CALM.value, focus_level=3),
        LogEntry(id="mock-log-3", activity="Team meeting", date=_at_hour(at, -1, 14),
                 mood=Mood.STRESSED.value, focus_level=2, notes="Ran over by 30 minutes",
                 diary_entry="Too many meetings today, hard to get real work done."),
        LogEntry(id="mock-log-4", activity="Read a novel", date=_at_hour(at, -2, 21),
                 mood=Mood.HAPPY.value, focus_level=5),
    ]


def _expenses(at: datetime) -> List[Record]:
    return [
        Expense(id="mock-expense-1", description="Weekly groceries", amount=84.5, category="Groceries",
                date=_at_hour(at, -1, 18)),
        Expense(id="mock-expense-2", description="Electricity bill", amount=62.0, category="Utilities",
                date=_at_hour(at, -3, 9)),
        Expense(id="mock-expense-3", description="Cinema tickets", amount=24.0, category="Entertainment",
                date=_at_hour(at, -5, 20)),
        Expense(id="mock-expense-4", description="Online course", amount=39.99, category="Education",
                date=_at_hour(at, -8, 12)),
    ]


def _events(at: datetime) -> List[Record]:
    return [
        CalendarEvent(id="mock-event-1", title="Project sync", start=_at_hour(at, 0, 11),
                      end=_at_hour(at, 0, 12)),
        CalendarEvent(id="mock-event-2", title="Yoga class", start=_at_hour(at, 0, 18),
                      end=_at_hour(at, 0, 19), description="Bring own mat"),
        CalendarEvent(id="mock-event-3", title="Dinner with friends", start=_at_hour(at, 2, 19, 30),
                      end=_at_hour(at, 2, 22)),
    ]


def _notes(at: datetime) -> List[Record]:
    return [
        Note(id="mock-note-1", title="Report ideas", content="Lead with the customer growth chart.",
             created_at=at - timedelta(days=2), updated_at=at - timedelta(days=1)),
        Note(id="mock-note-2", title="Books to read", content="Atomic Habits, Deep Work, Dune",
             created_at=at - timedelta(days=12), updated_at=at - timedelta(days=12)),
    ]


def _reminders(at: datetime) -> List[Record]:
    return [
        Reminder(id="mock-reminder-1", title="Take a stretch break", date_time=at + timedelta(hours=2)),
        Reminder(id="mock-reminder-2", title="Pay rent", date_time=_at_hour(at, 3, 9),
                 description="Transfer before noon"),
    ]


def _gratitude(at: datetime) -> List[Record]:
    return [
        GratitudeLog(id="mock-gratitude-1", text="A sunny walk at lunch", timestamp=at - timedelta(hours=5)),
        GratitudeLog(id="mock-gratitude-2", text="A friend checking in on me", timestamp=at - timedelta(days=1)),
    ]


def _reframing(at: datetime) -> List[Record]:
    return [
        ReframingLog(id="mock-reframing-1", negative_thought="I never finish anything on time.",
                     positive_reframing="I finished two tasks early this week; this one just needs a plan.",
                     timestamp=at - timedelta(days=1)),
    ]


SEED_BUILDERS: Dict[str, Callable[[datetime], List[Record]]] = {
    TASKS_KEY: _tasks,
    GOALS_KEY: _goals,
    HABITS_KEY: _habits,
    DAILY_LOGS_KEY: _logs,
    EXPENSES_KEY: _expenses,
    CALENDAR_EVENTS_KEY: _events,
    NOTES_KEY: _notes,
    REMINDERS_KEY: _reminders,
    GRATITUDE_KEY: _gratitude,
    REFRAMING_KEY: _reframing,
}


def build_seed_records(key: str, at: datetime) -> List[Record]:
    builder = SEED_BUILDERS.get(key)
    return builder(at) if builder else []


__all__ = ['SEED_BUILDERS', 'build_seed_records']
