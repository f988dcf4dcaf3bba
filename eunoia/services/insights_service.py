#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Insights Service
Feeds the AI flows from a user's stored (or seed) data

Version: 1.0.0
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from eunoia.core.aggregation import Period, build_burnout_summary, filter_in_period, is_completed
from eunoia.core.ai_service import AIService
from eunoia.core.database import (
    CALENDAR_EVENTS_KEY, DAILY_LOGS_KEY, EXPENSES_KEY, GOALS_KEY, HABITS_KEY,
    NOTES_KEY, REMINDERS_KEY, TASKS_KEY,
)
from eunoia.core.models import GoalStatus, Record, ValidationError
from eunoia.services.ai import analysis, journal, planning, voice
from eunoia.services.ai.schemas import (
    AnalyzeAttentionPatternsInput, AnalyzeExpenseTrendsInput, AnalyzeProductivityPatternsInput,
    AnalyzeSentimentTrendsInput, AnalyzeTaskCompletionInput, AssessLifeBalanceInput,
    DiaryEntry, EstimateBurnoutRiskInput, EventItem, ExpenseItem, GenerateDailyPlanInput,
    GenerateDailySuggestionsInput, GoalItem, HabitItem, LogItem, NoteItem, PlanPreferences,
    PreviousReflection, ProcessVoiceInput, ReflectionPreferences, ReflectOnWeekInput,
    ReminderItem, SummarizeDiaryEntriesInput, TaskItem,
)
from eunoia.services.data_service import DataService
from eunoia.services.settings_service import SettingsStore
from eunoia.utils.datetime_utils import end_of_day, now, start_of_day

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

DEFAULT_ANALYSIS_DAYS = 30
BURNOUT_WINDOW_DAYS = 14
REFLECTION_DAYS = 7
PLAN_LOG_DAYS = 3
DIARY_WINDOW_DAYS = {"weekly": 7, "monthly": 30}


def _items(model: Type[M], records: Iterable[Record]) -> List[M]:
    return [model.model_validate(record.to_dict()) for record in records]


class InsightsService:
    """One coroutine per flow; data access goes through the injected DataService"""

    def __init__(self, data_service: DataService, settings_store: SettingsStore, ai_service: AIService):
        self.data_service = data_service
        self.settings_store = settings_store
        self.ai_service = ai_service

    def _period(self, start: Any = None, end: Any = None, days: int = DEFAULT_ANALYSIS_DAYS,
                at: Optional[datetime] = None) -> Period:
        if (start is None) != (end is None):
            raise ValidationError("start_date and end_date must be given together")
        if start is not None:
            return Period.from_dates(start, end)
        return Period.last_days(days, at)

    # Store reads are blocking file I/O under the store lock; keep them off the event loop

    async def _snapshot(self, user_id: str) -> Dict[str, List[Record]]:
        return await run_in_threadpool(self.data_service.snapshot, user_id)

    async def _preferences(self, user_id: str):
        settings = await run_in_threadpool(self.settings_store.load, user_id)
        return settings.preferences

    # ===== ANALYSIS =====

    async def life_balance(self, user_id: str, start=None, end=None, at: Optional[datetime] = None):
        self._period(start, end)
        data = await self._snapshot(user_id)
        inputs = AssessLifeBalanceInput(
            start_date=start,
            end_date=end,
            logs=_items(LogItem, data[DAILY_LOGS_KEY]),
            tasks=_items(TaskItem, data[TASKS_KEY]),
            events=_items(EventItem, data[CALENDAR_EVENTS_KEY]),
            notes=_items(NoteItem, data[NOTES_KEY]),
            expenses=_items(ExpenseItem, data[EXPENSES_KEY]),
            habits=_items(HabitItem, data[HABITS_KEY]),
            goals=_items(GoalItem, data[GOALS_KEY]),
        )
        return await analysis.assess_life_balance(inputs, self.ai_service, at)

    async def burnout_risk(self, user_id: str, days: int = BURNOUT_WINDOW_DAYS, at: Optional[datetime] = None):
        at = at or now()
        data = await self._snapshot(user_id)
        summary = build_burnout_summary(
            Period.last_days(days, at), data[DAILY_LOGS_KEY], data[TASKS_KEY], data[CALENDAR_EVENTS_KEY], at,
        )
        return await analysis.estimate_burnout_risk(EstimateBurnoutRiskInput.model_validate(summary), self.ai_service)

    async def attention_patterns(self, user_id: str, start=None, end=None):
        period = self._period(start, end)
        data = await self._snapshot(user_id)
        logs = filter_in_period(data[DAILY_LOGS_KEY], period, lambda l: l.date)
        inputs = AnalyzeAttentionPatternsInput(
            start_date=period.start, end_date=period.end, daily_logs=_items(LogItem, logs),
        )
        return await analysis.analyze_attention_patterns(inputs, self.ai_service)

    async def expense_trends(self, user_id: str, start=None, end=None):
        period = self._period(start, end)
        data = await self._snapshot(user_id)
        inputs = AnalyzeExpenseTrendsInput(
            start_date=period.start, end_date=period.end,
            expenses=_items(ExpenseItem, data[EXPENSES_KEY]),
        )
        return await analysis.analyze_expense_trends(inputs, self.ai_service)

    async def productivity_patterns(self, user_id: str, start=None, end=None,
                                    additional_context: Optional[str] = None):
        period = self._period(start, end)
        data = await self._snapshot(user_id)
        inputs = AnalyzeProductivityPatternsInput(
            start_date=period.start,
            end_date=period.end,
            calendar_events=_items(EventItem, filter_in_period(data[CALENDAR_EVENTS_KEY], period, lambda e: e.start)),
            tasks=_items(TaskItem, filter_in_period(data[TASKS_KEY], period, lambda t: t.created_at)),
            expenses=_items(ExpenseItem, filter_in_period(data[EXPENSES_KEY], period, lambda e: e.date)),
            reminders=_items(ReminderItem, filter_in_period(data[REMINDERS_KEY], period, lambda r: r.date_time)),
            notes=_items(NoteItem, filter_in_period(data[NOTES_KEY], period, lambda n: n.created_at)),
            daily_logs=_items(LogItem, filter_in_period(data[DAILY_LOGS_KEY], period, lambda l: l.date)),
            additional_context=additional_context,
        )
        return await analysis.analyze_productivity_patterns(inputs, self.ai_service)

    async def sentiment_trends(self, user_id: str, start=None, end=None):
        period = self._period(start, end)
        data = await self._snapshot(user_id)
        inputs = AnalyzeSentimentTrendsInput(
            start_date=period.start, end_date=period.end,
            daily_logs=_items(LogItem, data[DAILY_LOGS_KEY]),
            notes=_items(NoteItem, data[NOTES_KEY]),
        )
        return await analysis.analyze_sentiment_trends(inputs, self.ai_service)

    async def task_completion(self, user_id: str, start=None, end=None, at: Optional[datetime] = None):
        period = self._period(start, end)
        data = await self._snapshot(user_id)
        inputs = AnalyzeTaskCompletionInput(
            start_date=period.start, end_date=period.end,
            tasks=_items(TaskItem, data[TASKS_KEY]),
        )
        return await analysis.analyze_task_completion(inputs, self.ai_service, at)

    # ===== PLANNING =====

    async def daily_plan(self, user_id: str, target_date=None):
        """Plan for `target_date` (default today) from open tasks, the day's events and recent logs"""
        target = Period.from_dates(target_date or now(), target_date or now())
        data = await self._snapshot(user_id)
        prefs = await self._preferences(user_id)

        recent = Period(start_of_day(target.start - timedelta(days=PLAN_LOG_DAYS - 1)), target.end)
        tasks = [t for t in data[TASKS_KEY] if target.contains(t.due_date) or not is_completed(t)]
        inputs = GenerateDailyPlanInput(
            target_date=target.start,
            recent_logs=_items(LogItem, filter_in_period(data[DAILY_LOGS_KEY], recent, lambda l: l.date)),
            tasks_for_date=_items(TaskItem, tasks),
            events_for_date=_items(EventItem, filter_in_period(data[CALENDAR_EVENTS_KEY], target, lambda e: e.start)),
            active_goals=_items(GoalItem, [g for g in data[GOALS_KEY] if g.status == GoalStatus.IN_PROGRESS.value]),
            active_habits=_items(HabitItem, data[HABITS_KEY]),
            user_preferences=PlanPreferences(
                preferred_work_times=prefs.preferred_work_times,
                energy_level_pattern=prefs.energy_pattern,
                growth_pace=prefs.growth_pace,
            ),
        )
        return await planning.generate_daily_plan(inputs, self.ai_service)

    async def daily_suggestions(self, user_id: str, at: Optional[datetime] = None,
                                user_location: Optional[str] = None, weather_condition: Optional[str] = None):
        at = at or now()
        today = Period(start_of_day(at), end_of_day(at))
        week_ahead = Period(at, end_of_day(at + timedelta(days=7)))
        data = await self._snapshot(user_id)
        prefs = await self._preferences(user_id)

        open_tasks = [t for t in data[TASKS_KEY] if not is_completed(t)]
        inputs = GenerateDailySuggestionsInput(
            current_date_time=at,
            recent_logs=_items(LogItem, filter_in_period(data[DAILY_LOGS_KEY], Period.last_days(2, at), lambda l: l.date)),
            upcoming_tasks=_items(TaskItem, filter_in_period(open_tasks, week_ahead, lambda t: t.due_date)),
            todays_events=_items(EventItem, filter_in_period(data[CALENDAR_EVENTS_KEY], today, lambda e: e.start)),
            active_habits=_items(HabitItem, data[HABITS_KEY]),
            active_goals=_items(GoalItem, [g for g in data[GOALS_KEY] if g.is_active]),
            user_location=user_location,
            weather_condition=weather_condition,
            growth_pace=prefs.growth_pace,
        )
        return await planning.generate_daily_suggestions(inputs, self.ai_service)

    # ===== JOURNAL =====

    async def weekly_reflection(self, user_id: str, start=None, end=None,
                                previous_reflection: Optional[Dict[str, Any]] = None,
                                user_response: Optional[str] = None, at: Optional[datetime] = None):
        period = self._period(start, end, days=REFLECTION_DAYS, at=at)
        data = await self._snapshot(user_id)
        prefs = await self._preferences(user_id)

        inputs = ReflectOnWeekInput(
            start_date=period.start,
            end_date=period.end,
            logs=_items(LogItem, filter_in_period(data[DAILY_LOGS_KEY], period, lambda l: l.date)),
            tasks=_items(TaskItem, data[TASKS_KEY]),
            goals=_items(GoalItem, data[GOALS_KEY]),
            habits=_items(HabitItem, data[HABITS_KEY]),
            previous_reflection=PreviousReflection.model_validate(previous_reflection) if previous_reflection else None,
            user_response=user_response,
            user_preferences=ReflectionPreferences(
                ai_persona=prefs.ai_persona,
                ai_insight_verbosity=prefs.ai_insight_verbosity,
                energy_pattern=prefs.energy_pattern,
                preferred_work_times=prefs.preferred_work_times,
                growth_pace=prefs.growth_pace,
            ),
        )
        return await journal.reflect_on_week(inputs, self.ai_service)

    async def diary_summary(self, user_id: str, frequency: str = "weekly", at: Optional[datetime] = None):
        period = Period.last_days(DIARY_WINDOW_DAYS.get(frequency, REFLECTION_DAYS), at)
        data = await self._snapshot(user_id)
        logs = filter_in_period(data[DAILY_LOGS_KEY], period, lambda l: l.date)
        inputs = SummarizeDiaryEntriesInput(
            start_date=period.start,
            end_date=period.end,
            frequency=frequency,
            diary_entries=[DiaryEntry(date=log.date, text=log.diary_entry) for log in logs if log.diary_entry],
        )
        return await journal.summarize_diary_entries(inputs, self.ai_service)

    # ===== VOICE =====

    async def voice_input(self, transcribed_text: str, at: Optional[datetime] = None):
        inputs = ProcessVoiceInput(transcribed_text=transcribed_text, current_date=at or now())
        return await voice.process_voice_input(inputs, self.ai_service)


__all__ = ['InsightsService']
