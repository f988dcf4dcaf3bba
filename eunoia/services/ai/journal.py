#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Journal Flows
Weekly reflection coaching and diary summaries

Version: 1.0.0
"""

import logging
from typing import Any, Dict, List

from eunoia.core.ai_service import AIService, AIServiceError, FlowTemplate
from eunoia.services.ai.schemas import (
    DateRange, DiaryDigest, ReflectOnWeekInput, ReflectOnWeekOutput,
    SummarizeDiaryEntriesInput, SummarizeDiaryEntriesOutput,
)
from eunoia.utils.text_utils import truncate

logger = logging.getLogger(__name__)

PERSONA_TONES = {
    "Supportive Coach": "warm, encouraging and curious",
    "Neutral Assistant": "neutral and factual",
    "Direct Analyst": "direct and analytical",
}

VERBOSITY_STYLES = {
    "Brief Summary": "brief, one or two sentences",
    "Detailed Analysis": "thoughtful but focused",
}

REFLECTION_FALLBACK_PROMPT = (
    "I'm having a little trouble gathering my thoughts. Let's try reflecting on your past week. "
    "What was one highlight or accomplishment?"
)

# ===== WEEKLY REFLECTION =====

def _slim(item: Any) -> Dict[str, Any]:
    """Short prompt form of a log, task, goal or habit"""
    slim: Dict[str, Any] = {}
    title = getattr(item, "title", None) or getattr(item, "activity", None)
    if title:
        slim["title"] = title
    for name in ("status", "mood", "focus_level", "frequency", "streak"):
        value = getattr(item, name, None)
        if value:
            slim[name] = value

    diary = getattr(item, "diary_entry", None)
    if diary:
        slim["diary_snippet"] = truncate(diary, 50)

    moment = getattr(item, "date", None) or getattr(item, "created_at", None) or getattr(item, "updated_at", None)
    if moment is not None:
        slim["date"] = moment.isoformat()
    for name in ("due_date", "last_completed"):
        value = getattr(item, name, None)
        if value is not None:
            slim[name] = value.isoformat()
    return slim


async def reflect_on_week(data: ReflectOnWeekInput, ai_service: AIService) -> ReflectOnWeekOutput:
    """One turn of the weekly reflection conversation"""
    prefs = data.user_preferences
    payload = {
        "start_date": data.start_date.isoformat(),
        "end_date": data.end_date.isoformat(),
        "logs": [_slim(log) for log in data.logs],
        "tasks": [_slim(task) for task in data.tasks],
        "goals": [_slim(goal) for goal in data.goals],
        "habits": [_slim(habit) for habit in data.habits],
        "previous_reflection": data.previous_reflection.model_dump() if data.previous_reflection else None,
        "user_response": data.user_response,
        "user_preferences": prefs.model_dump(),
    }

    try:
        result = await ai_service.generate_structured(
            FlowTemplate.WEEKLY_REFLECTION, payload, ReflectOnWeekOutput,
            tone=PERSONA_TONES[prefs.ai_persona],
            verbosity=VERBOSITY_STYLES[prefs.ai_insight_verbosity],
        )
    except AIServiceError as e:
        ai_service.record_fallback(FlowTemplate.WEEKLY_REFLECTION, e)
        result = None

    if result is None:
        return ReflectOnWeekOutput(coach_prompt=REFLECTION_FALLBACK_PROMPT, is_complete=False)
    return result

# ===== DIARY SUMMARY =====

async def summarize_diary_entries(data: SummarizeDiaryEntriesInput,
                                  ai_service: AIService) -> SummarizeDiaryEntriesOutput:
    date_range = DateRange(start=data.start_date.isoformat(), end=data.end_date.isoformat())

    if not data.diary_entries:
        return SummarizeDiaryEntriesOutput(
            summary=f"No diary entries found for this {data.frequency}.",
            entry_count=0,
            date_range=date_range,
        )

    entries: List[Dict[str, str]] = [
        {"date": entry.date.isoformat(), "text": entry.text}
        for entry in sorted(data.diary_entries, key=lambda e: e.date)
    ]
    payload = {
        "frequency": data.frequency,
        "start_date": date_range.start,
        "end_date": date_range.end,
        "diary_entries": entries,
    }

    try:
        digest = await ai_service.generate_structured(
            FlowTemplate.DIARY_SUMMARY, payload, DiaryDigest, frequency=data.frequency,
        )
    except AIServiceError as e:
        ai_service.record_fallback(FlowTemplate.DIARY_SUMMARY, e)
        digest = None

    if digest is None:
        return SummarizeDiaryEntriesOutput(
            summary="Could not generate summary.",
            entry_count=len(entries),
            date_range=date_range,
        )

    return SummarizeDiaryEntriesOutput(
        summary=digest.summary,
        key_events=digest.key_events,
        emotions=digest.emotions,
        reflections=digest.reflections,
        entry_count=len(entries),
        date_range=date_range,
    )


__all__ = [
    'reflect_on_week',
    'summarize_diary_entries',
]
