#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - AI Service
Structured-output calls to the generative model

Every call sends a JSON payload, asks for a JSON object back and validates it
against a pydantic model. Callers never see raw model text. There is no retry:
a failure surfaces as AIServiceError and the caller substitutes its fallback.

Version: 1.0.0
"""

import json
import time
from datetime import datetime
from typing import Dict, Optional, Any, Type, TypeVar
from dataclasses import dataclass, field
from enum import Enum
import logging

import openai
from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError as PydanticValidationError

from eunoia.config import config, AIConfig

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

# ===== EXCEPTIONS =====

class AIServiceError(Exception):
    """Base AI service error"""
    pass


class AIProviderError(AIServiceError):
    """The model provider failed"""
    pass


class AIResponseError(AIServiceError):
    """The model replied with something that is not the expected JSON"""
    pass

# ===== ENUMS =====

class FlowTemplate(Enum):
    """Prompt templates, one per flow"""
    LIFE_BALANCE = "life_balance"
    BURNOUT_RISK = "burnout_risk"
    VOICE_INPUT = "voice_input"
    DAILY_PLAN = "daily_plan"
    DAILY_SUGGESTIONS = "daily_suggestions"
    ATTENTION_PATTERNS = "attention_patterns"
    EXPENSE_TRENDS = "expense_trends"
    PRODUCTIVITY_PATTERNS = "productivity_patterns"
    SENTIMENT_TRENDS = "sentiment_trends"
    TASK_COMPLETION = "task_completion"
    WEEKLY_REFLECTION = "weekly_reflection"
    DIARY_SUMMARY = "diary_summary"

# ===== DATA CLASSES =====

@dataclass
class AIStats:
    """AI service counters"""
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    empty_responses: int = 0
    fallbacks_used: int = 0
    total_tokens_used: int = 0
    average_response_time_ms: float = 0.0
    requests_by_flow: Dict[str, int] = field(default_factory=dict)

    @property
    def success_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return (self.successful_requests / self.total_requests) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_requests': self.total_requests,
            'successful_requests': self.successful_requests,
            'failed_requests': self.failed_requests,
            'empty_responses': self.empty_responses,
            'fallbacks_used': self.fallbacks_used,
            'total_tokens_used': self.total_tokens_used,
            'average_response_time_ms': round(self.average_response_time_ms, 2),
            'success_rate': round(self.success_rate, 2),
            'requests_by_flow': dict(self.requests_by_flow)
        }

# ===== PROMPTS =====

class PromptManager:
    """Prompt templates keyed by flow"""

    SYSTEM_BASE = (
        "You are the assistant inside 4Eunoia, a personal productivity and wellness app. "
        "You receive the user's data as JSON and answer with a single JSON object only. "
        "Be {tone}. Keep the answer {verbosity}."
    )

    def __init__(self):
        self.templates: Dict[FlowTemplate, str] = self._load_templates()

    def _load_templates(self) -> Dict[FlowTemplate, str]:
        return {
            FlowTemplate.LIFE_BALANCE: (
                "The payload holds counts of the user's activities per life area over "
                "{analysis_period_days} days. Write a 2-3 sentence balance_summary about where "
                "attention goes and list 1-3 neglected_areas with clearly lower or zero counts. "
                "Use only area names from the payload."
            ),
            FlowTemplate.BURNOUT_RISK: (
                "Estimate burnout risk from the activity summary. High negative-mood counts, "
                "many open or overdue tasks and dense calendars raise risk; positive moods lower it. "
                "risk_score bands: Low 0-25, Moderate 26-50, High 51-75, Very High 76-100. "
                "Give contributing_factors seen in the data and 2-3 recommendations."
            ),
            FlowTemplate.VOICE_INPUT: (
                "Classify the transcribed speech into an intent: log_activity, create_task, "
                "create_note, general_query or unclear. Extract title, description, content, "
                "date or due_date (ISO-8601, resolved against current_date), mood and "
                "focus_level (1-5) when spoken. response_text is a short spoken confirmation "
                "or answer."
            ),
            FlowTemplate.DAILY_PLAN: (
                "Build a time-blocked plan for target_date from the user's tasks, events, goals, "
                "habits and recent logs. Respect fixed events. User preferences: {preferences}. "
                "Explain the plan in plan_rationale and flag overload or conflicts in warnings."
            ),
            FlowTemplate.DAILY_SUGGESTIONS: (
                "Suggest 3-5 small, concrete actions for today given the time, tasks, events, "
                "habits, goals, recent logs, location and weather. Adjust ambition to growth_pace. "
                "Add one daily_focus sentence."
            ),
            FlowTemplate.ATTENTION_PATTERNS: (
                "Analyse focus levels (1-5) across the logged activities. Find periods of high "
                "and low focus, what the user was doing and likely contributing factors. "
                "attention_quality_score is 0-100. Add insights and suggestions_for_improvement."
            ),
            FlowTemplate.EXPENSE_TRENDS: (
                "Write a 2-3 sentence spending_summary of the computed totals and top categories. "
                "Do not recalculate numbers."
            ),
            FlowTemplate.PRODUCTIVITY_PATTERNS: (
                "From events, tasks, expenses, reminders, notes and daily logs, describe "
                "peak_performance_times, common_distractions_or_obstacles, suggested_strategies "
                "and an overall_assessment."
            ),
            FlowTemplate.SENTIMENT_TRENDS: (
                "Assess the sentiment of the diary entries and notes. overall_sentiment is "
                "Positive, Negative, Neutral or Mixed; sentiment_score runs from -1 to 1. "
                "List recurring positive_keywords and negative_keywords and write analysis_summary. "
                "entry_count is the number of entries given."
            ),
            FlowTemplate.TASK_COMPLETION: (
                "Write a 1-2 sentence completion_summary of the computed completion figures "
                "and overdue tasks. Do not recalculate numbers."
            ),
            FlowTemplate.WEEKLY_REFLECTION: (
                "Act as a reflection coach for the week in the payload. Ask one question at a "
                "time in coach_prompt, building on previous questions and the user's responses. "
                "Share a short observation when useful. Set is_complete once the reflection has "
                "covered highlights, challenges and one intention for next week."
            ),
            FlowTemplate.DIARY_SUMMARY: (
                "Summarize the {frequency} diary entries: summary, key_events, emotions and "
                "reflections. entry_count and date_range echo the payload."
            ),
        }

    def get_prompt(self, template: FlowTemplate, output_schema: Dict[str, Any], **kwargs) -> str:
        """System prompt for a flow, ending with the JSON schema to follow"""
        kwargs.setdefault('tone', 'supportive and practical')
        kwargs.setdefault('verbosity', 'concise')
        base = self.SYSTEM_BASE.format(**kwargs)
        body = self.templates[template].format_map(_Defaulting(kwargs))
        schema = json.dumps(output_schema, ensure_ascii=False)
        return f"{base}\n\n{body}\n\nRespond with a JSON object matching this JSON schema:\n{schema}"


class _Defaulting(dict):
    def __missing__(self, key):
        return "not specified"

# ===== MAIN AI SERVICE =====

class AIService:
    """Generative model client with validated JSON output"""

    def __init__(self, ai_config: Optional[AIConfig] = None, client: Optional[AsyncOpenAI] = None):
        self.config = ai_config or config.ai
        self.openai_client = client
        self.enabled = True if client is not None else self._initialize_openai()

        self.prompt_manager = PromptManager()
        self.stats = AIStats()

        logger.info(f"AI Service initialized - OpenAI: {'✅' if self.enabled else '❌'}")

    def _initialize_openai(self) -> bool:
        if not self.config.ai_enabled:
            logger.warning("AI disabled or OpenAI API key not configured, flows will use fallbacks")
            return False

        try:
            self.openai_client = AsyncOpenAI(
                api_key=self.config.openai_api_key,
                timeout=self.config.request_timeout
            )
            logger.info("OpenAI client initialized successfully")
            return True
        except openai.OpenAIError as e:
            logger.error(f"Failed to initialize OpenAI client: {e}")
            return False

    async def generate_structured(self, template: FlowTemplate, payload: Dict[str, Any],
                                  output_model: Type[M], **prompt_vars) -> Optional[M]:
        """Send `payload` to the model and validate the reply as `output_model`.

        Returns None when AI is disabled or the model gives an empty reply.
        Raises AIProviderError on API failures and AIResponseError on bad output.
        """
        if not self.enabled:
            return None

        system_prompt = self.prompt_manager.get_prompt(
            template, output_model.model_json_schema(), **prompt_vars
        )
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": json.dumps(payload, ensure_ascii=False, default=str)}
        ]

        start_time = time.time()
        self.stats.total_requests += 1
        self.stats.requests_by_flow[template.value] = self.stats.requests_by_flow.get(template.value, 0) + 1

        try:
            response = await self.openai_client.chat.completions.create(
                model=self.config.openai_model,
                messages=messages,
                max_tokens=self.config.openai_max_tokens,
                temperature=self.config.temperature,
                response_format={"type": "json_object"}
            )
        except openai.APIError as e:
            self.stats.failed_requests += 1
            logger.error(f"OpenAI API error in {template.value}: {e}")
            raise AIProviderError(f"OpenAI API failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if response.usage:
            self.stats.total_tokens_used += response.usage.total_tokens

        if not content or not content.strip():
            self.stats.empty_responses += 1
            logger.warning(f"Empty model output for {template.value}")
            return None

        try:
            result = output_model.model_validate(json.loads(content))
        except (json.JSONDecodeError, PydanticValidationError) as e:
            self.stats.failed_requests += 1
            logger.error(f"Invalid model output for {template.value}: {e}")
            raise AIResponseError(f"Model output did not match {output_model.__name__}: {e}") from e

        self.stats.successful_requests += 1
        self._update_average_response_time(int((time.time() - start_time) * 1000))
        return result

    def record_fallback(self, template: FlowTemplate, reason: Exception) -> None:
        """Count a flow that answered with its local fallback"""
        self.stats.fallbacks_used += 1
        logger.warning(f"Using fallback for {template.value}: {reason}")

    def _update_average_response_time(self, response_time_ms: int) -> None:
        n = self.stats.successful_requests
        current = self.stats.average_response_time_ms
        self.stats.average_response_time_ms = current + (response_time_ms - current) / n

    def get_stats(self) -> Dict[str, Any]:
        return {
            'service': self.stats.to_dict(),
            'enabled': self.enabled,
            'model': self.config.openai_model
        }

    def get_health_status(self) -> Dict[str, Any]:
        status = "healthy"
        issues = []

        if not self.enabled:
            status = "degraded"
            issues.append("AI disabled, fallbacks only")
        elif self.stats.total_requests >= 10 and self.stats.success_rate < 80:
            status = "warning"
            issues.append("Low success rate")

        return {
            'status': status,
            'issues': issues,
            'stats': self.get_stats(),
            'last_check': datetime.now().isoformat()
        }

# ===== CONVENIENCE FUNCTIONS =====

def create_ai_service() -> AIService:
    return AIService()


__all__ = [
    'AIServiceError',
    'AIProviderError',
    'AIResponseError',
    'FlowTemplate',
    'AIStats',
    'PromptManager',
    'AIService',
    'create_ai_service'
]
