"""Tests for the AI flows in eunoia/services/ai/"""

from datetime import datetime
import threading

import pytest
from pydantic import ValidationError as PydanticValidationError

from eunoia.core.ai_service import FlowTemplate
from eunoia.core.models import ValidationError
from eunoia.services.ai import analysis, journal, planning, voice
from eunoia.services.ai.schemas import (
    AnalyzeAttentionPatternsInput, AnalyzeExpenseTrendsInput, AnalyzeProductivityPatternsInput,
    AnalyzeSentimentTrendsInput, AnalyzeTaskCompletionInput, AssessLifeBalanceInput,
    EstimateBurnoutRiskInput, ExpenseItem, GenerateDailyPlanInput, GenerateDailySuggestionsInput,
    PlanPreferences, ProcessVoiceInput, ReflectOnWeekInput, SummarizeDiaryEntriesInput,
)
from eunoia.utils.datetime_utils import localize

WEEK = {"start_date": "2024-05-01", "end_date": "2024-05-07"}


def week_input(model, **fields):
    return model.model_validate({**WEEK, **fields})


class TestSchemas:
    def test_end_before_start_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            AnalyzeExpenseTrendsInput(start_date="2024-05-07", end_date="2024-05-01")

    def test_focus_outside_range_is_dropped(self):
        data = week_input(AnalyzeAttentionPatternsInput, daily_logs=[
            {"date": "2024-05-02T09:00", "activity": "A", "focus_level": 0},
            {"date": "2024-05-02T10:00", "activity": "B", "focus_level": "4"},
        ])
        assert [log.focus_level for log in data.daily_logs] == [None, 4]

    def test_dates_are_timezone_aware(self):
        data = week_input(AnalyzeExpenseTrendsInput)
        assert data.start_date.tzinfo is not None

    @pytest.mark.parametrize("amount", [float("nan"), float("inf")])
    def test_non_finite_expense_amount_is_rejected(self, amount):
        with pytest.raises(PydanticValidationError):
            ExpenseItem(description="x", amount=amount, date="2024-05-02", category="Food")

    def test_half_life_balance_range_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            AssessLifeBalanceInput(start_date="2024-05-01")


# ===== LIFE BALANCE =====

class TestLifeBalance:
    LOGS = [
        {"date": "2024-05-02T10:00", "activity": "Client meeting"},
        {"date": "2024-05-03T08:00", "activity": "Morning yoga"},
        {"date": "2024-05-04T15:00", "activity": "Project planning"},
    ]

    @pytest.mark.asyncio
    async def test_no_activity_short_circuits(self, fake_ai):
        result = await analysis.assess_life_balance(week_input(AssessLifeBalanceInput), fake_ai)

        assert result.balance_summary.startswith("No relevant activities found")
        assert len(result.neglected_areas) == 7
        assert all(score.score == 0 for score in result.area_scores)
        assert fake_ai.calls == []

    @pytest.mark.asyncio
    async def test_model_writes_summary_scores_stay_local(self, make_ai):
        ai = make_ai({"balance_summary": "Mostly work.", "neglected_areas": ["Finance", "Personal Growth"]})
        result = await analysis.assess_life_balance(week_input(AssessLifeBalanceInput, logs=self.LOGS), ai)

        scores = {s.area: s.score for s in result.area_scores}
        assert scores["Work/Career"] == 67
        assert scores["Health/Wellness"] == 33
        assert result.balance_summary == "Mostly work."
        assert result.neglected_areas == ["Finance", "Personal Growth"]

        call = ai.calls[0]
        assert call["template"] == FlowTemplate.LIFE_BALANCE
        assert call["payload"]["area_counts"]["Work/Career"] == 2
        assert call["prompt_vars"]["analysis_period_days"] == 7

    @pytest.mark.asyncio
    async def test_failure_lists_low_scoring_areas(self, failing_ai):
        result = await analysis.assess_life_balance(week_input(AssessLifeBalanceInput, logs=self.LOGS), failing_ai)

        assert result.balance_summary == "Could not generate AI summary. Please review the calculated scores."
        assert "Work/Career" not in result.neglected_areas
        assert "Health/Wellness" not in result.neglected_areas
        assert len(result.neglected_areas) == 5
        assert failing_ai.stats.fallbacks_used == 1


# ===== BURNOUT =====

class TestBurnoutRisk:
    BUSY = {
        "log_summary": {"total_logs": 6, "stressed_anxious_tired_count": 4, "positive_mood_count": 1},
        "task_summary": {"pending_in_progress_count": 9, "overdue_count": 3},
        "event_summary": {"total_events": 12},
        "analysis_period_days": 14,
    }

    @pytest.mark.asyncio
    async def test_low_data_defaults_to_low(self, fake_ai):
        data = EstimateBurnoutRiskInput(analysis_period_days=14)
        result = await analysis.estimate_burnout_risk(data, fake_ai)

        assert result.risk_level == "Low"
        assert result.risk_score == 10
        assert "past 14 days" in result.assessment_summary
        assert fake_ai.calls == []

    @pytest.mark.asyncio
    async def test_model_result(self, make_ai):
        ai = make_ai({"risk_level": "High", "risk_score": 70, "assessment_summary": "Heavy load.",
                      "contributing_factors": ["Overdue tasks"], "recommendations": ["Rest"]})
        result = await analysis.estimate_burnout_risk(EstimateBurnoutRiskInput.model_validate(self.BUSY), ai)

        assert result.risk_level == "High"
        assert result.risk_score == 70

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", [None, "fail"])
    async def test_fallback_is_moderate(self, make_ai, failing_ai, reply):
        ai = failing_ai if reply == "fail" else make_ai(None)
        result = await analysis.estimate_burnout_risk(EstimateBurnoutRiskInput.model_validate(self.BUSY), ai)

        assert result.risk_level == "Moderate"
        assert result.risk_score == 50
        assert result.contributing_factors == ["AI analysis failed."]


# ===== ATTENTION =====

class TestAttentionPatterns:
    @pytest.mark.asyncio
    async def test_no_logs(self, fake_ai):
        result = await analysis.analyze_attention_patterns(week_input(AnalyzeAttentionPatternsInput), fake_ai)
        assert result.attention_quality_score == 0
        assert result.overall_assessment.startswith("No daily logs provided")

    @pytest.mark.asyncio
    async def test_logs_without_focus(self, fake_ai):
        data = week_input(AnalyzeAttentionPatternsInput, daily_logs=[{"date": "2024-05-02", "activity": "A"}])
        result = await analysis.analyze_attention_patterns(data, fake_ai)
        assert result.overall_assessment.startswith("No logs with focus levels")
        assert fake_ai.calls == []

    @pytest.mark.asyncio
    async def test_failure_scores_from_average_focus(self, failing_ai):
        data = week_input(AnalyzeAttentionPatternsInput, daily_logs=[
            {"date": "2024-05-02T09:00", "activity": "Deep work", "focus_level": 4},
            {"date": "2024-05-03T09:00", "activity": "Email", "focus_level": 3},
        ])
        result = await analysis.analyze_attention_patterns(data, failing_ai)

        assert result.attention_quality_score == 70
        assert result.insights == ["AI analysis failed. Check logs for consistency."]

    @pytest.mark.asyncio
    async def test_payload_truncates_diary(self, make_ai):
        ai = make_ai({"overall_assessment": "Steady", "attention_quality_score": 72})
        data = week_input(AnalyzeAttentionPatternsInput, daily_logs=[
            {"date": "2024-05-02T09:00", "activity": "Write", "focus_level": 5, "diary_entry": "x" * 150},
        ])
        result = await analysis.analyze_attention_patterns(data, ai)

        assert result.attention_quality_score == 72
        snippet = ai.calls[0]["payload"]["logs"][0]["diary_snippet"]
        assert snippet == "x" * 100 + "..."


# ===== EXPENSES =====

class TestExpenseTrends:
    EXPENSES = [
        {"description": "Veg", "amount": 30, "category": "Groceries", "date": "2024-05-02"},
        {"description": "Bread", "amount": 10, "category": "Groceries", "date": "2024-05-02"},
        {"description": "Power", "amount": 60, "category": "Utilities", "date": "2024-05-03"},
    ]

    @pytest.mark.asyncio
    async def test_no_expenses(self, fake_ai):
        result = await analysis.analyze_expense_trends(week_input(AnalyzeExpenseTrendsInput), fake_ai)
        assert result.spending_summary == "No expenses recorded for this period."
        assert result.total_spending == 0

    @pytest.mark.asyncio
    async def test_totals_are_local(self, make_ai):
        ai = make_ai({"spending_summary": "Utilities led spending."})
        result = await analysis.analyze_expense_trends(week_input(AnalyzeExpenseTrendsInput, expenses=self.EXPENSES), ai)

        assert result.total_spending == 100.0
        assert result.average_daily_spending == 14.29
        assert result.top_spending_categories[0].category == "Utilities"
        assert result.top_spending_categories[0].percentage == 60.0
        assert result.spending_summary == "Utilities led spending."

    @pytest.mark.asyncio
    async def test_empty_reply(self, fake_ai):
        result = await analysis.analyze_expense_trends(week_input(AnalyzeExpenseTrendsInput, expenses=self.EXPENSES), fake_ai)
        assert result.spending_summary == "Summary could not be generated."
        assert result.total_spending == 100.0

    @pytest.mark.asyncio
    async def test_failure(self, failing_ai):
        result = await analysis.analyze_expense_trends(
            week_input(AnalyzeExpenseTrendsInput, expenses=self.EXPENSES), failing_ai)
        assert result.spending_summary == "Error generating expense trend summary."


# ===== PRODUCTIVITY & SENTIMENT =====

class TestProductivityPatterns:
    @pytest.mark.asyncio
    async def test_no_data(self, fake_ai):
        result = await analysis.analyze_productivity_patterns(week_input(AnalyzeProductivityPatternsInput), fake_ai)
        assert result.overall_assessment == "No data available for the selected period to assess productivity."

    @pytest.mark.asyncio
    async def test_failure(self, failing_ai):
        data = week_input(AnalyzeProductivityPatternsInput, tasks=[{"title": "Report"}],
                          additional_context="Deadline week")
        result = await analysis.analyze_productivity_patterns(data, failing_ai)
        assert result.overall_assessment == "Productivity analysis failed to generate an assessment."
        assert failing_ai.calls[0]["payload"]["additional_context"] == "Deadline week"


class TestSentimentTrends:
    LOGS = [
        {"date": "2024-05-02T21:00", "activity": "Journal", "diary_entry": "Great day"},
        {"date": "2024-05-03T21:00", "activity": "Journal"},
    ]
    NOTES = [{"title": "Mood", "content": "Tired but okay", "created_at": "2024-05-04T09:00"}]

    @pytest.mark.asyncio
    async def test_no_entries(self, fake_ai):
        result = await analysis.analyze_sentiment_trends(week_input(AnalyzeSentimentTrendsInput), fake_ai)
        assert result.overall_sentiment == "Neutral"
        assert result.entry_count == 0

    @pytest.mark.asyncio
    async def test_entry_count_is_local(self, make_ai):
        ai = make_ai({"overall_sentiment": "Positive", "sentiment_score": 0.6,
                      "analysis_summary": "Upbeat", "entry_count": 99})
        data = week_input(AnalyzeSentimentTrendsInput, daily_logs=self.LOGS, notes=self.NOTES)
        result = await analysis.analyze_sentiment_trends(data, ai)

        assert result.overall_sentiment == "Positive"
        assert result.entry_count == 2

    @pytest.mark.asyncio
    async def test_failure(self, failing_ai):
        data = week_input(AnalyzeSentimentTrendsInput, daily_logs=self.LOGS, notes=self.NOTES)
        result = await analysis.analyze_sentiment_trends(data, failing_ai)
        assert result.analysis_summary == "Error: Could not analyze sentiment."
        assert result.entry_count == 2


# ===== TASK COMPLETION =====

class TestTaskCompletion:
    TASKS = [
        {"title": "Done", "status": "Completed", "due_date": "2024-05-02T10:00"},
        {"title": "Late", "status": "Pending", "due_date": "2024-05-03T10:00"},
        {"title": "Outside", "status": "Pending", "due_date": "2024-06-01T10:00"},
    ]
    AT = localize(datetime(2024, 5, 10, 12, 0))

    @pytest.mark.asyncio
    async def test_no_tasks_in_range(self, fake_ai):
        result = await analysis.analyze_task_completion(week_input(AnalyzeTaskCompletionInput), fake_ai, self.AT)
        assert result.completion_summary == "No tasks found within the specified date range."

    @pytest.mark.asyncio
    async def test_failure_keeps_figures(self, failing_ai):
        data = week_input(AnalyzeTaskCompletionInput, tasks=self.TASKS)
        result = await analysis.analyze_task_completion(data, failing_ai, self.AT)

        assert result.total_tasks_considered == 2
        assert result.completed_tasks == 1
        assert result.completion_rate == 50.0
        assert [t.title for t in result.overdue_tasks] == ["Late"]
        assert result.completion_summary == "Basic summary: Review completion rate and overdue tasks."

    @pytest.mark.asyncio
    async def test_model_summary(self, make_ai):
        ai = make_ai({"completion_summary": "Half done."})
        result = await analysis.analyze_task_completion(week_input(AnalyzeTaskCompletionInput, tasks=self.TASKS), ai, self.AT)
        assert result.completion_summary == "Half done."
        assert ai.calls[0]["payload"]["completion_rate"] == 50.0


# ===== PLANNING =====

class TestDailyPlan:
    @pytest.mark.asyncio
    async def test_basic_plan_without_data(self, fake_ai):
        result = await planning.generate_daily_plan(GenerateDailyPlanInput(target_date="2024-05-15"), fake_ai)

        assert [block.start_time for block in result.suggested_plan] == ["Morning", "Afternoon", "Evening"]
        assert result.plan_rationale.startswith("Generated a basic plan")
        assert fake_ai.calls == []

    @pytest.mark.asyncio
    async def test_failure(self, failing_ai):
        data = GenerateDailyPlanInput(target_date="2024-05-15", tasks_for_date=[{"title": "Report"}])
        result = await planning.generate_daily_plan(data, failing_ai)

        assert result.plan_rationale == "Error: AI failed to generate a plan."
        assert result.suggested_plan[0].category == "Other"

    @pytest.mark.asyncio
    async def test_model_plan_and_preferences(self, make_ai):
        ai = make_ai({
            "suggested_plan": [{"start_time": "09:00", "end_time": "10:00", "activity": "Report", "category": "Work"}],
            "plan_rationale": "Focus first.",
        })
        data = GenerateDailyPlanInput(
            target_date="2024-05-15",
            tasks_for_date=[{"title": "Report"}],
            user_preferences=PlanPreferences(preferred_work_times="Morning", growth_pace="Slow"),
        )
        result = await planning.generate_daily_plan(data, ai)

        assert result.plan_rationale == "Focus first."
        assert ai.calls[0]["prompt_vars"]["preferences"] == "Preferred Work Times: Morning, Growth Pace: Slow."
        assert ai.calls[0]["payload"]["target_date"] == "2024-05-15"

    def test_format_preferences_without_values(self):
        assert planning.format_preferences(None) == "Not specified."
        assert planning.format_preferences(PlanPreferences()) == "Not specified."


class TestDailySuggestions:
    @pytest.mark.asyncio
    async def test_starter_suggestions_without_data(self, fake_ai):
        data = GenerateDailySuggestionsInput(current_date_time="2024-05-15T08:00")
        result = await planning.generate_daily_suggestions(data, fake_ai)

        assert len(result.suggestions) == 3
        assert result.daily_focus == "Start fresh and focus on what matters most."

    @pytest.mark.asyncio
    async def test_failure(self, failing_ai):
        data = GenerateDailySuggestionsInput(current_date_time="2024-05-15T08:00",
                                             upcoming_tasks=[{"title": "Report"}])
        result = await planning.generate_daily_suggestions(data, failing_ai)

        assert [s.suggestion for s in result.suggestions] == ["Review your tasks and schedule for the day."]
        assert result.daily_focus == "Focus on making steady progress today."


# ===== JOURNAL =====

class TestWeeklyReflection:
    @pytest.mark.asyncio
    async def test_fallback_prompt(self, fake_ai):
        result = await journal.reflect_on_week(week_input(ReflectOnWeekInput), fake_ai)
        assert result.coach_prompt == journal.REFLECTION_FALLBACK_PROMPT
        assert result.is_complete is False

    @pytest.mark.asyncio
    async def test_persona_sets_tone(self, make_ai):
        ai = make_ai({"coach_prompt": "What went well?"})
        data = week_input(ReflectOnWeekInput, user_response="Shipped the report",
                          user_preferences={"ai_persona": "Direct Analyst", "ai_insight_verbosity": "Brief Summary"},
                          logs=[{"date": "2024-05-02", "activity": "Write", "diary_entry": "y" * 80}])
        result = await journal.reflect_on_week(data, ai)

        assert result.coach_prompt == "What went well?"
        call = ai.calls[0]
        assert call["prompt_vars"] == {"tone": "direct and analytical", "verbosity": "brief, one or two sentences"}
        assert call["payload"]["user_response"] == "Shipped the report"
        assert call["payload"]["logs"][0]["diary_snippet"] == "y" * 50 + "..."


class TestDiarySummary:
    ENTRIES = [
        {"date": "2024-05-03T21:00", "text": "Tired"},
        {"date": "2024-05-02T21:00", "text": "Good day"},
    ]

    @pytest.mark.asyncio
    async def test_no_entries(self, fake_ai):
        result = await journal.summarize_diary_entries(
            week_input(SummarizeDiaryEntriesInput, frequency="weekly"), fake_ai)
        assert result.summary == "No diary entries found for this weekly."
        assert result.entry_count == 0

    @pytest.mark.asyncio
    async def test_digest_with_local_count_and_range(self, make_ai):
        ai = make_ai({"summary": "A mixed week.", "emotions": ["tired", "happy"]})
        data = week_input(SummarizeDiaryEntriesInput, frequency="weekly", diary_entries=self.ENTRIES)
        result = await journal.summarize_diary_entries(data, ai)

        assert result.summary == "A mixed week."
        assert result.entry_count == 2
        assert result.date_range.start == data.start_date.isoformat()
        assert [e["text"] for e in ai.calls[0]["payload"]["diary_entries"]] == ["Good day", "Tired"]

    @pytest.mark.asyncio
    async def test_failure(self, failing_ai):
        data = week_input(SummarizeDiaryEntriesInput, frequency="monthly", diary_entries=self.ENTRIES)
        result = await journal.summarize_diary_entries(data, failing_ai)
        assert result.summary == "Could not generate summary."
        assert result.entry_count == 2

    def test_unknown_frequency_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            week_input(SummarizeDiaryEntriesInput, frequency="daily")


# ===== VOICE =====

class TestVoiceInput:
    @pytest.mark.asyncio
    async def test_blank_text(self, fake_ai):
        result = await voice.process_voice_input(
            ProcessVoiceInput(transcribed_text="   ", current_date="2024-05-15T08:00"), fake_ai)
        assert result.intent == "unclear"
        assert result.response_text == "I didn't hear anything. Please try speaking again."
        assert fake_ai.calls == []

    @pytest.mark.asyncio
    async def test_failure_and_empty_reply(self, failing_ai, fake_ai):
        data = ProcessVoiceInput(transcribed_text="Add a task", current_date="2024-05-15T08:00")

        failed = await voice.process_voice_input(data, failing_ai)
        empty = await voice.process_voice_input(data, fake_ai)

        assert failed.response_text == "There was an issue processing your voice input. Please try again."
        assert empty.response_text == "I'm having a little trouble understanding right now. Please try again."

    @pytest.mark.asyncio
    async def test_classified_intent(self, make_ai):
        ai = make_ai({
            "intent": "log_activity",
            "extracted_details": {"title": "Workout", "mood": "Great", "focus_level": 4},
            "response_text": "Logged your workout.",
        })
        data = ProcessVoiceInput(transcribed_text="I just finished a workout", current_date="2024-05-15T08:00")
        result = await voice.process_voice_input(data, ai)

        assert result.intent == "log_activity"
        assert result.extracted_details.title == "Workout"
        assert result.extracted_details.mood is None
        assert result.extracted_details.focus_level == 4


# ===== INSIGHTS SERVICE =====

class TestInsightsService:
    @pytest.mark.asyncio
    async def test_diary_summary_reads_seed_diaries(self, services):
        result = await services.insights.diary_summary("newbie", "weekly")

        assert result.entry_count == 2
        assert result.summary == "Could not generate summary."

    @pytest.mark.asyncio
    async def test_user_mode_without_data_short_circuits(self, user_services, fake_ai):
        balance = await user_services.insights.life_balance("alice")
        burnout = await user_services.insights.burnout_risk("alice")
        plan = await user_services.insights.daily_plan("alice")

        assert balance.balance_summary.startswith("No relevant activities found")
        assert burnout.risk_level == "Low"
        assert plan.plan_rationale.startswith("Generated a basic plan")
        assert fake_ai.calls == []

    @pytest.mark.asyncio
    async def test_reflection_uses_stored_persona(self, user_services, fake_ai):
        user_services.settings.update("alice", {"preferences": {"ai_persona": "Neutral Assistant"}})

        result = await user_services.insights.weekly_reflection("alice", user_response="It was fine")

        assert result.coach_prompt == journal.REFLECTION_FALLBACK_PROMPT
        assert fake_ai.calls[0]["prompt_vars"]["tone"] == "neutral and factual"
        assert fake_ai.calls[0]["payload"]["user_response"] == "It was fine"

    @pytest.mark.asyncio
    async def test_store_reads_run_off_the_event_loop(self, user_services, monkeypatch):
        loop_thread = threading.current_thread()
        reader_threads = []
        snapshot = user_services.insights.data_service.snapshot
        load = user_services.insights.settings_store.load

        def recording_snapshot(user_id):
            reader_threads.append(threading.current_thread())
            return snapshot(user_id)

        def recording_load(user_id):
            reader_threads.append(threading.current_thread())
            return load(user_id)

        monkeypatch.setattr(user_services.insights.data_service, "snapshot", recording_snapshot)
        monkeypatch.setattr(user_services.insights.settings_store, "load", recording_load)

        await user_services.insights.daily_suggestions("alice")

        assert len(reader_threads) >= 2
        assert loop_thread not in reader_threads

    @pytest.mark.asyncio
    async def test_half_date_range_is_rejected(self, user_services):
        with pytest.raises(ValidationError):
            await user_services.insights.attention_patterns("alice", start="2024-05-01")
        with pytest.raises(ValidationError):
            await user_services.insights.life_balance("alice", end="2024-05-07")
