#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Analysis Flows
Life balance, burnout risk, attention, expense, productivity, sentiment and
task completion analyses

Each flow validates its input, answers locally when there is nothing to
analyse, asks the model for the rest and falls back to a deterministic
result when the model fails.

Version: 1.0.0
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from eunoia.core.aggregation import (
    Period, average_focus, collect_text_entries, compute_area_scores,
    summarize_expenses, summarize_task_completion, tally_life_areas,
)
from eunoia.core.ai_service import AIService, AIServiceError, FlowTemplate
from eunoia.core.models import LIFE_AREAS
from eunoia.services.ai.schemas import (
    AnalyzeAttentionPatternsInput, AnalyzeAttentionPatternsOutput,
    AnalyzeExpenseTrendsInput, AnalyzeExpenseTrendsOutput,
    AnalyzeProductivityPatternsInput, AnalyzeProductivityPatternsOutput,
    AnalyzeSentimentTrendsInput, AnalyzeSentimentTrendsOutput,
    AnalyzeTaskCompletionInput, AnalyzeTaskCompletionOutput,
    AreaScore, AssessLifeBalanceInput, AssessLifeBalanceOutput,
    CompletionSummary, EstimateBurnoutRiskInput, EstimateBurnoutRiskOutput,
    LifeBalanceAssessment, SpendingSummary,
)
from eunoia.utils.datetime_utils import now
from eunoia.utils.text_utils import round_half_up, truncate

logger = logging.getLogger(__name__)

LOW_DATA_THRESHOLD = 3
NEGLECTED_SCORE_THRESHOLD = 10

# ===== LIFE BALANCE =====

async def assess_life_balance(data: AssessLifeBalanceInput, ai_service: AIService,
                              at: Optional[datetime] = None) -> AssessLifeBalanceOutput:
    """Score each Life Area by its share of activity over the period"""
    if data.start_date and data.end_date:
        period = Period.from_dates(data.start_date, data.end_date)
    else:
        period = Period.last_days(30, at)

    tally = tally_life_areas(
        period, data.logs, data.tasks, data.events, data.notes,
        data.expenses, data.habits, data.goals,
    )
    scores = compute_area_scores(tally)
    area_scores = [AreaScore(area=area.value, score=scores[area]) for area in LIFE_AREAS]

    if tally.total_categorized == 0:
        return AssessLifeBalanceOutput(
            area_scores=area_scores,
            balance_summary="No relevant activities found in the analysis period to assess life balance.",
            neglected_areas=[area.value for area in LIFE_AREAS],
        )

    payload = {
        "area_counts": {area.value: tally.counts[area] for area in LIFE_AREAS},
        "analysis_period_days": period.day_count,
    }

    try:
        result = await ai_service.generate_structured(
            FlowTemplate.LIFE_BALANCE, payload, LifeBalanceAssessment,
            analysis_period_days=period.day_count,
        )
    except AIServiceError as e:
        ai_service.record_fallback(FlowTemplate.LIFE_BALANCE, e)
        result = None

    if result is None:
        return AssessLifeBalanceOutput(
            area_scores=area_scores,
            balance_summary="Could not generate AI summary. Please review the calculated scores.",
            neglected_areas=[s.area for s in area_scores if s.score < NEGLECTED_SCORE_THRESHOLD],
        )

    return AssessLifeBalanceOutput(
        area_scores=area_scores,
        balance_summary=result.balance_summary,
        neglected_areas=result.neglected_areas,
    )

# ===== BURNOUT =====

def _burnout_fallback() -> EstimateBurnoutRiskOutput:
    return EstimateBurnoutRiskOutput(
        risk_level="Moderate",
        risk_score=50,
        assessment_summary="Could not generate AI assessment for burnout risk. Please monitor your well-being.",
        contributing_factors=["AI analysis failed."],
        recommendations=["Take regular breaks.", "Prioritize sleep.", "Reach out for support if needed."],
    )


async def estimate_burnout_risk(data: EstimateBurnoutRiskInput, ai_service: AIService) -> EstimateBurnoutRiskOutput:
    """Estimate burnout risk from mood, task load and calendar counts"""
    if (data.log_summary.total_logs < LOW_DATA_THRESHOLD
            and data.task_summary.pending_in_progress_count < LOW_DATA_THRESHOLD
            and data.event_summary.total_events < LOW_DATA_THRESHOLD):
        return EstimateBurnoutRiskOutput(
            risk_level="Low",
            risk_score=10,
            assessment_summary=(
                f"Insufficient recent data over the past {data.analysis_period_days} days to provide "
                "a detailed burnout risk assessment. Risk assessed as Low by default."
            ),
            contributing_factors=["Lack of recent activity data."],
            recommendations=[
                "Continue logging activities and moods for a better assessment.",
                "Check in with how you're feeling regularly.",
            ],
        )

    try:
        result = await ai_service.generate_structured(
            FlowTemplate.BURNOUT_RISK, data.model_dump(mode="json"), EstimateBurnoutRiskOutput,
        )
    except AIServiceError as e:
        ai_service.record_fallback(FlowTemplate.BURNOUT_RISK, e)
        return _burnout_fallback()

    return result if result is not None else _burnout_fallback()

# ===== ATTENTION =====

async def analyze_attention_patterns(data: AnalyzeAttentionPatternsInput,
                                     ai_service: AIService) -> AnalyzeAttentionPatternsOutput:
    if not data.daily_logs:
        return AnalyzeAttentionPatternsOutput(
            overall_assessment="No daily logs provided to analyze attention patterns for this period.",
            attention_quality_score=0,
            insights=["Please log activities to get an analysis."],
            suggestions_for_improvement=["Try logging your focus level (1-5) with each activity to get insights."],
        )

    focused = [log for log in data.daily_logs if log.focus_level is not None]
    if not focused:
        return AnalyzeAttentionPatternsOutput(
            overall_assessment=(
                "No logs with focus levels were found for this period. "
                "Please log your focus (1-5) with activities to get an analysis."
            ),
            attention_quality_score=0,
            insights=["Log focus levels to understand your attention patterns better."],
            suggestions_for_improvement=["Start by logging your focus level for different activities throughout the day."],
        )

    payload = {
        "start_date": data.start_date.isoformat(),
        "end_date": data.end_date.isoformat(),
        "logs": [
            {
                "date": log.date.date().isoformat(),
                "activity": log.activity,
                "focus_level": log.focus_level,
                "mood": log.mood,
                "diary_snippet": truncate(log.diary_entry, 100),
            }
            for log in focused
        ],
    }

    try:
        result = await ai_service.generate_structured(
            FlowTemplate.ATTENTION_PATTERNS, payload, AnalyzeAttentionPatternsOutput,
        )
    except AIServiceError as e:
        ai_service.record_fallback(FlowTemplate.ATTENTION_PATTERNS, e)
        result = None

    if result is None:
        score = round_half_up(min(100.0, max(0.0, average_focus(focused) * 20)))
        return AnalyzeAttentionPatternsOutput(
            overall_assessment=(
                "Could not generate a full AI analysis for attention patterns. "
                "Please review your logged focus levels."
            ),
            attention_quality_score=score,
            insights=["AI analysis failed. Check logs for consistency."],
            suggestions_for_improvement=["Ensure consistent logging of focus levels for better insights."],
        )

    return result

# ===== EXPENSES =====

async def analyze_expense_trends(data: AnalyzeExpenseTrendsInput, ai_service: AIService) -> AnalyzeExpenseTrendsOutput:
    """Totals are computed here; the model only narrates them"""
    period = Period.from_dates(data.start_date, data.end_date)
    summary = summarize_expenses(data.expenses, period)

    if summary.expense_count == 0:
        return AnalyzeExpenseTrendsOutput(
            total_spending=0,
            average_daily_spending=0,
            top_spending_categories=[],
            spending_summary="No expenses recorded for this period.",
        )

    payload = {
        "start_date": data.start_date.isoformat(),
        "end_date": data.end_date.isoformat(),
        "number_of_days": summary.day_count,
        "total_spending": summary.total_spending,
        "average_daily_spending": summary.average_daily_spending,
        "top_spending_categories": summary.top_spending_categories,
    }

    spending_summary = "Summary could not be generated."
    try:
        result = await ai_service.generate_structured(FlowTemplate.EXPENSE_TRENDS, payload, SpendingSummary)
        if result is not None:
            spending_summary = result.spending_summary
        else:
            logger.warning("Expense trend summary came back empty")
    except AIServiceError as e:
        ai_service.record_fallback(FlowTemplate.EXPENSE_TRENDS, e)
        spending_summary = "Error generating expense trend summary."

    return AnalyzeExpenseTrendsOutput(
        total_spending=summary.total_spending,
        average_daily_spending=summary.average_daily_spending,
        top_spending_categories=summary.top_spending_categories,
        spending_summary=spending_summary,
    )

# ===== PRODUCTIVITY =====

def _productivity_payload(data: AnalyzeProductivityPatternsInput) -> Dict[str, Any]:
    dump = lambda items: [item.model_dump(mode="json", exclude_none=True) for item in items]
    return {
        "start_date": data.start_date.isoformat(),
        "end_date": data.end_date.isoformat(),
        "calendar_events": dump(data.calendar_events),
        "tasks": dump(data.tasks),
        "expenses": dump(data.expenses),
        "reminders": dump(data.reminders),
        "notes": [{"title": n.title, "created_at": n.created_at.isoformat()} for n in data.notes],
        "daily_logs": [
            {"activity": l.activity, "mood": l.mood, "diary": "..." if l.diary_entry else ""}
            for l in data.daily_logs
        ],
        "additional_context": data.additional_context,
    }


async def analyze_productivity_patterns(data: AnalyzeProductivityPatternsInput,
                                        ai_service: AIService) -> AnalyzeProductivityPatternsOutput:
    has_data = any((data.calendar_events, data.tasks, data.expenses,
                    data.reminders, data.notes, data.daily_logs))
    if not has_data:
        return AnalyzeProductivityPatternsOutput(
            peak_performance_times="Insufficient data to determine peak performance times.",
            common_distractions_or_obstacles="Insufficient data to identify common distractions or obstacles.",
            suggested_strategies=(
                "Unable to suggest strategies due to lack of data. "
                "Start logging activities, tasks, and reflections!"
            ),
            overall_assessment="No data available for the selected period to assess productivity.",
        )

    try:
        result = await ai_service.generate_structured(
            FlowTemplate.PRODUCTIVITY_PATTERNS, _productivity_payload(data), AnalyzeProductivityPatternsOutput,
        )
    except AIServiceError as e:
        ai_service.record_fallback(FlowTemplate.PRODUCTIVITY_PATTERNS, e)
        result = None

    if result is None:
        return AnalyzeProductivityPatternsOutput(
            peak_performance_times="Analysis could not determine peak performance times.",
            common_distractions_or_obstacles="Analysis could not identify common distractions or obstacles.",
            suggested_strategies="Could not generate suggested strategies.",
            overall_assessment="Productivity analysis failed to generate an assessment.",
        )

    return result

# ===== SENTIMENT =====

async def analyze_sentiment_trends(data: AnalyzeSentimentTrendsInput,
                                   ai_service: AIService) -> AnalyzeSentimentTrendsOutput:
    period = Period.from_dates(data.start_date, data.end_date)
    entries = collect_text_entries(period, data.daily_logs, data.notes)

    if not entries:
        return AnalyzeSentimentTrendsOutput(
            overall_sentiment="Neutral",
            sentiment_score=0,
            analysis_summary="No diary entries or notes found for sentiment analysis in this period.",
            entry_count=0,
        )

    payload = {
        "start_date": data.start_date.isoformat(),
        "end_date": data.end_date.isoformat(),
        "text_entries": entries,
    }

    try:
        result = await ai_service.generate_structured(
            FlowTemplate.SENTIMENT_TRENDS, payload, AnalyzeSentimentTrendsOutput,
        )
    except AIServiceError as e:
        ai_service.record_fallback(FlowTemplate.SENTIMENT_TRENDS, e)
        result = None

    if result is None:
        return AnalyzeSentimentTrendsOutput(
            overall_sentiment="Neutral",
            sentiment_score=0,
            analysis_summary="Error: Could not analyze sentiment.",
            entry_count=len(entries),
        )

    return result.model_copy(update={"entry_count": len(entries)})

# ===== TASK COMPLETION =====

async def analyze_task_completion(data: AnalyzeTaskCompletionInput, ai_service: AIService,
                                  at: Optional[datetime] = None) -> AnalyzeTaskCompletionOutput:
    """Completion figures for tasks due in the period"""
    period = Period.from_dates(data.start_date, data.end_date)
    stats = summarize_task_completion(data.tasks, period, at or now())

    if stats.total_tasks_considered == 0:
        return AnalyzeTaskCompletionOutput(
            total_tasks_considered=0,
            completed_tasks=0,
            completion_rate=0,
            overdue_tasks=[],
            completion_summary="No tasks found within the specified date range.",
        )

    overdue: List[Dict[str, Any]] = [t.model_dump(mode="json") for t in stats.overdue_tasks]
    payload = {
        "start_date": data.start_date.isoformat(),
        "end_date": data.end_date.isoformat(),
        "total_tasks_considered": stats.total_tasks_considered,
        "completed_tasks": stats.completed_tasks,
        "completion_rate": stats.completion_rate,
        "overdue_tasks": overdue,
    }

    completion_summary = "Basic summary: Review completion rate and overdue tasks."
    try:
        result = await ai_service.generate_structured(FlowTemplate.TASK_COMPLETION, payload, CompletionSummary)
        if result is not None:
            completion_summary = result.completion_summary
    except AIServiceError as e:
        ai_service.record_fallback(FlowTemplate.TASK_COMPLETION, e)

    return AnalyzeTaskCompletionOutput(
        total_tasks_considered=stats.total_tasks_considered,
        completed_tasks=stats.completed_tasks,
        completion_rate=stats.completion_rate,
        overdue_tasks=stats.overdue_tasks,
        completion_summary=completion_summary,
    )


__all__ = [
    'assess_life_balance',
    'estimate_burnout_risk',
    'analyze_attention_patterns',
    'analyze_expense_trends',
    'analyze_productivity_patterns',
    'analyze_sentiment_trends',
    'analyze_task_completion',
]
