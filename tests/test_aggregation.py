"""Tests for eunoia/core/aggregation.py"""

from datetime import timedelta

import pytest

from eunoia.core.aggregation import (
    Period, average_focus, build_burnout_summary, collect_text_entries, compute_area_scores,
    filter_in_period, is_completed, is_overdue, summarize_expenses, summarize_task_completion,
    tally_life_areas,
)
from eunoia.core.models import (
    CalendarEvent, Expense, LifeArea, LIFE_AREAS, LogEntry, Mood, Note, Task,
    TaskStatus, ValidationError,
)


@pytest.fixture
def week(fixed_now):
    return Period.last_days(7, fixed_now)


class TestPeriod:
    def test_last_days_covers_whole_days(self, fixed_now, week):
        assert week.start.date() == (fixed_now - timedelta(days=6)).date()
        assert (week.start.hour, week.start.minute) == (0, 0)
        assert week.end.date() == fixed_now.date()
        assert week.day_count == 7

    def test_contains_is_inclusive(self, week):
        assert week.contains(week.start)
        assert week.contains(week.end)
        assert not week.contains(week.start - timedelta(microseconds=1))
        assert not week.contains(None)

    def test_from_dates_accepts_iso_strings(self):
        period = Period.from_dates("2024-05-01T15:30:00", "2024-05-03")
        assert period.start.date().isoformat() == "2024-05-01"
        assert period.start.hour == 0
        assert period.day_count == 3

    def test_end_before_start_is_rejected(self):
        with pytest.raises(ValidationError):
            Period.from_dates("2024-05-03", "2024-05-01")

    def test_last_days_needs_at_least_one_day(self, fixed_now):
        with pytest.raises(ValidationError):
            Period.last_days(0, fixed_now)

    def test_filter_in_period_uses_key(self, fixed_now, week):
        inside = LogEntry(activity="Inside", date=fixed_now)
        outside = LogEntry(activity="Outside", date=fixed_now - timedelta(days=10))
        assert filter_in_period([inside, outside], week, lambda l: l.date) == [inside]


class TestLifeAreaScores:
    def test_tally_counts_each_source_by_its_date(self, fixed_now, week):
        old = fixed_now - timedelta(days=20)
        tally = tally_life_areas(
            week,
            logs=[
                LogEntry(activity="Client meeting", date=fixed_now),
                LogEntry(activity="Client call", date=old),
            ],
            tasks=[
                Task(title="Write report", status=TaskStatus.COMPLETED.value, created_at=fixed_now),
                Task(title="Morning yoga", status=TaskStatus.PENDING.value, created_at=fixed_now),
            ],
            events=[CalendarEvent(title="Yoga class", start=fixed_now, end=fixed_now + timedelta(hours=1))],
            expenses=[Expense(description="Lunch", amount=12, category="Food", date=fixed_now)],
        )

        assert tally.counts[LifeArea.WORK_CAREER] == 2
        assert tally.counts[LifeArea.HEALTH_WELLNESS] == 1
        assert tally.counts[LifeArea.RESPONSIBILITIES_CHORES] == 1
        assert tally.total_categorized == 4

    def test_uncategorized_items_do_not_count(self, fixed_now, week):
        tally = tally_life_areas(week, logs=[LogEntry(activity="Something odd", date=fixed_now)])
        assert tally.counts[LifeArea.UNCATEGORIZED] == 1
        assert tally.total_categorized == 0

    def test_scores_are_rounded_percentages(self, fixed_now, week):
        tally = tally_life_areas(week, logs=[
            LogEntry(activity="Client meeting", date=fixed_now),
            LogEntry(activity="Project planning", date=fixed_now),
            LogEntry(activity="Morning yoga", date=fixed_now),
        ])
        scores = compute_area_scores(tally)

        assert scores[LifeArea.WORK_CAREER] == 67
        assert scores[LifeArea.HEALTH_WELLNESS] == 33
        assert scores[LifeArea.FINANCE] == 0
        assert set(scores) == set(LIFE_AREAS)

    def test_scores_are_zero_without_categorized_items(self, week):
        scores = compute_area_scores(tally_life_areas(week))
        assert all(score == 0 for score in scores.values())


class TestFocusAndBurnout:
    def test_average_focus_skips_missing_levels(self, fixed_now):
        logs = [
            LogEntry(activity="A", date=fixed_now, focus_level=4),
            LogEntry(activity="B", date=fixed_now, focus_level=3),
            LogEntry(activity="C", date=fixed_now),
        ]
        assert average_focus(logs) == 3.5

    def test_average_focus_rounds_to_one_decimal(self, fixed_now):
        logs = [LogEntry(activity=str(level), date=fixed_now, focus_level=level) for level in (1, 2, 2)]
        assert average_focus(logs) == 1.7

    def test_average_focus_without_levels_is_none(self, fixed_now):
        assert average_focus([LogEntry(activity="A", date=fixed_now)]) is None

    def test_burnout_summary_counts(self, fixed_now):
        period = Period.last_days(14, fixed_now)
        logs = [
            LogEntry(activity="A", date=fixed_now, mood=Mood.STRESSED.value),
            LogEntry(activity="B", date=fixed_now, mood=Mood.TIRED.value),
            LogEntry(activity="C", date=fixed_now, mood=Mood.HAPPY.value),
            LogEntry(activity="D", date=fixed_now - timedelta(days=30), mood=Mood.SAD.value),
        ]
        tasks = [
            Task(title="Late", due_date=fixed_now - timedelta(days=1)),
            Task(title="Upcoming", due_date=fixed_now + timedelta(days=1), status=TaskStatus.IN_PROGRESS.value),
            Task(title="Done", due_date=fixed_now - timedelta(days=1), status=TaskStatus.COMPLETED.value),
        ]

        summary = build_burnout_summary(period, logs, tasks, [], at=fixed_now)

        assert summary["log_summary"] == {
            "total_logs": 3,
            "stressed_anxious_tired_count": 2,
            "positive_mood_count": 1,
        }
        assert summary["task_summary"] == {"pending_in_progress_count": 2, "overdue_count": 1}
        assert summary["event_summary"] == {"total_events": 0}
        assert summary["analysis_period_days"] == 14


class TestExpenseSummary:
    def test_totals_and_top_categories(self, fixed_now, week):
        expenses = [
            Expense(description="Veg", amount=30, category="Groceries", date=fixed_now),
            Expense(description="Bread", amount=10, category="Groceries", date=fixed_now),
            Expense(description="Power", amount=60, category="Utilities", date=fixed_now),
            Expense(description="Old", amount=500, category="Travel", date=fixed_now - timedelta(days=30)),
        ]
        summary = summarize_expenses(expenses, week)

        assert summary.total_spending == 100.0
        assert summary.average_daily_spending == 14.29
        assert summary.expense_count == 3
        assert summary.top_spending_categories == [
            {"category": "Utilities", "amount": 60.0, "percentage": 60.0},
            {"category": "Groceries", "amount": 40.0, "percentage": 40.0},
        ]

    def test_empty_period(self, week):
        summary = summarize_expenses([], week)
        assert summary.total_spending == 0
        assert summary.top_spending_categories == []


class TestTaskCompletion:
    def test_overdue(self, fixed_now):
        task = Task(title="Late", due_date=fixed_now - timedelta(hours=1))
        assert is_overdue(task, fixed_now)
        task.status = TaskStatus.COMPLETED.value
        assert is_completed(task)
        assert not is_overdue(task, fixed_now)
        assert not is_overdue(Task(title="No due date"), fixed_now)

    def test_counts_only_tasks_due_in_period(self, fixed_now, week):
        done = Task(title="Done", status=TaskStatus.COMPLETED.value, due_date=fixed_now - timedelta(days=1))
        late = Task(title="Late", due_date=fixed_now - timedelta(days=2))
        later_today = Task(title="Later today", due_date=fixed_now + timedelta(hours=6))
        outside = Task(title="Next month", due_date=fixed_now + timedelta(days=30))

        stats = summarize_task_completion([done, late, later_today, outside], week, fixed_now)

        assert stats.total_tasks_considered == 3
        assert stats.completed_tasks == 1
        assert stats.completion_rate == 33.3
        assert stats.overdue_tasks == [late]

    def test_no_tasks_gives_zero_rate(self, fixed_now, week):
        stats = summarize_task_completion([], week, fixed_now)
        assert stats.completion_rate == 0.0
        assert stats.overdue_tasks == []


class TestTextEntries:
    def test_diary_and_notes_oldest_first(self, fixed_now, week):
        logs = [
            LogEntry(activity="A", date=fixed_now, diary_entry="Today"),
            LogEntry(activity="B", date=fixed_now - timedelta(days=1)),
        ]
        notes = [Note(title="Idea", content="Write more", created_at=fixed_now - timedelta(days=2))]

        entries = collect_text_entries(week, logs, notes)

        assert [e["source"] for e in entries] == ["note", "diary"]
        assert entries[0]["text"] == "Idea: Write more"
        assert entries[1]["date"] == fixed_now.isoformat()
