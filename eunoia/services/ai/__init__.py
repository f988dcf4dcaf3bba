# eunoia/services/ai/__init__.py

"""
AI flows: validated input, one model call, validated output, local fallback
"""

from .analysis import (
    assess_life_balance, estimate_burnout_risk, analyze_attention_patterns,
    analyze_expense_trends, analyze_productivity_patterns, analyze_sentiment_trends,
    analyze_task_completion,
)
from .journal import reflect_on_week, summarize_diary_entries
from .planning import generate_daily_plan, generate_daily_suggestions
from .voice import process_voice_input

__all__ = [
    'assess_life_balance',
    'estimate_burnout_risk',
    'analyze_attention_patterns',
    'analyze_expense_trends',
    'analyze_productivity_patterns',
    'analyze_sentiment_trends',
    'analyze_task_completion',
    'reflect_on_week',
    'summarize_diary_entries',
    'generate_daily_plan',
    'generate_daily_suggestions',
    'process_voice_input',
]
