#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Planning Flows
Daily plan and daily suggestions

Version: 1.0.0
"""

import logging
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel

from eunoia.core.ai_service import AIService, AIServiceError, FlowTemplate
from eunoia.services.ai.schemas import (
    DailySuggestion, GenerateDailyPlanInput, GenerateDailyPlanOutput,
    GenerateDailySuggestionsInput, GenerateDailySuggestionsOutput,
    PlanPreferences, TimeBlock,
)
from eunoia.utils.text_utils import truncate

logger = logging.getLogger(__name__)


def _dump_all(items: Iterable[BaseModel]) -> list:
    return [item.model_dump(mode="json", exclude_none=True) for item in items]


def format_preferences(preferences: Optional[PlanPreferences]) -> str:
    """Preferences as one prompt line, or 'Not specified.'"""
    if preferences is None:
        return "Not specified."
    labels = (
        ("Preferred Work Times", preferences.preferred_work_times),
        ("Energy Pattern", preferences.energy_level_pattern),
        ("Growth Pace", preferences.growth_pace),
    )
    parts = [f"{label}: {value}" for label, value in labels if value]
    return ", ".join(parts) + "." if parts else "Not specified."

# ===== DAILY PLAN =====

def _basic_plan() -> GenerateDailyPlanOutput:
    return GenerateDailyPlanOutput(
        suggested_plan=[
            TimeBlock(start_time="Morning", activity="Review priorities & habits",
                      category="Habit", reasoning="Start the day with intention."),
            TimeBlock(start_time="Afternoon", activity="Work on a goal or important task",
                      category="Goal", reasoning="Allocate time for progress."),
            TimeBlock(start_time="Evening", activity="Relax and wind down",
                      category="Personal", reasoning="Prepare for rest."),
        ],
        plan_rationale="Generated a basic plan as limited data was available for the target date.",
        warnings=["Limited data for planning. Add tasks, events, or logs for better suggestions."],
    )


def _failed_plan() -> GenerateDailyPlanOutput:
    return GenerateDailyPlanOutput(
        suggested_plan=[TimeBlock(start_time="Full Day", activity="Plan could not be generated.", category="Other")],
        plan_rationale="Error: AI failed to generate a plan.",
        warnings=["Plan generation failed."],
    )


async def generate_daily_plan(data: GenerateDailyPlanInput, ai_service: AIService) -> GenerateDailyPlanOutput:
    """Time-blocked plan for `data.target_date`"""
    if not data.tasks_for_date and not data.events_for_date and not data.recent_logs:
        return _basic_plan()

    preferences = format_preferences(data.user_preferences)
    payload: Dict[str, Any] = {
        "target_date": data.target_date.date().isoformat(),
        "recent_logs": [
            {
                "date": log.date.isoformat(),
                "activity": log.activity,
                "mood": log.mood,
                "focus_level": log.focus_level,
                "diary_snippet": truncate(log.diary_entry, 100),
            }
            for log in data.recent_logs
        ],
        "tasks_for_date": _dump_all(data.tasks_for_date),
        "events_for_date": _dump_all(data.events_for_date),
        "active_goals": _dump_all(data.active_goals),
        "active_habits": _dump_all(data.active_habits),
        "user_preferences": preferences,
    }

    try:
        result = await ai_service.generate_structured(
            FlowTemplate.DAILY_PLAN, payload, GenerateDailyPlanOutput, preferences=preferences,
        )
    except AIServiceError as e:
        ai_service.record_fallback(FlowTemplate.DAILY_PLAN, e)
        return _failed_plan()

    if result is None:
        logger.error("Daily plan came back empty")
        return _failed_plan()
    return result

# ===== DAILY SUGGESTIONS =====

def _starter_suggestions() -> GenerateDailySuggestionsOutput:
    return GenerateDailySuggestionsOutput(
        suggestions=[
            DailySuggestion(suggestion="Plan your top 3 priorities for today.", category="Routine",
                            reasoning="Setting intentions helps focus."),
            DailySuggestion(suggestion="Take a short break every hour to stretch or walk.", category="Break",
                            reasoning="Regular breaks improve focus and well-being."),
            DailySuggestion(suggestion="Check in with your mood later today.", category="Self-care"),
        ],
        daily_focus="Start fresh and focus on what matters most.",
    )


def _fallback_suggestions() -> GenerateDailySuggestionsOutput:
    return GenerateDailySuggestionsOutput(
        suggestions=[DailySuggestion(suggestion="Review your tasks and schedule for the day.", category="Routine")],
        daily_focus="Focus on making steady progress today.",
    )


async def generate_daily_suggestions(data: GenerateDailySuggestionsInput,
                                     ai_service: AIService) -> GenerateDailySuggestionsOutput:
    has_data = any((data.recent_logs, data.upcoming_tasks, data.todays_events,
                    data.active_habits, data.active_goals))
    if not has_data:
        return _starter_suggestions()

    try:
        result = await ai_service.generate_structured(
            FlowTemplate.DAILY_SUGGESTIONS, data.model_dump(mode="json", exclude_none=True),
            GenerateDailySuggestionsOutput,
        )
    except AIServiceError as e:
        ai_service.record_fallback(FlowTemplate.DAILY_SUGGESTIONS, e)
        return _fallback_suggestions()

    return result if result is not None else _fallback_suggestions()


__all__ = [
    'format_preferences',
    'generate_daily_plan',
    'generate_daily_suggestions',
]
