"""Tests for eunoia/services/voice_actions.py"""

from eunoia.services.ai.schemas import ProcessVoiceOutput
from eunoia.services.voice_actions import MISSING_ACTIVITY, MISSING_NOTE_FIELDS, MISSING_TASK_TITLE


def voice_result(intent, response_text="Done.", **details):
    return ProcessVoiceOutput.model_validate({
        "intent": intent,
        "extracted_details": details,
        "response_text": response_text,
    })


class TestVoiceActionDispatcher:
    def test_log_activity(self, user_services):
        result = user_services.voice_actions.apply(
            "alice", voice_result("log_activity", "Logged it.", title="Evening run", focus_level=4,
                                  content="Felt strong"))

        assert result.resource == "logs"
        assert result.response_text == "Logged it."
        entry = user_services.logs.get("alice", result.created.id)
        assert entry.activity == "Evening run"
        assert entry.focus_level == 4
        assert entry.diary_entry == "Felt strong"

    def test_create_task(self, user_services):
        result = user_services.voice_actions.apply(
            "alice", voice_result("create_task", title="Call the bank", due_date="2024-05-16T10:00"))

        task = user_services.tasks.get("alice", result.created.id)
        assert task.title == "Call the bank"
        assert task.status == "Pending"
        assert task.due_date.hour == 10

    def test_create_note_falls_back_to_description(self, user_services):
        result = user_services.voice_actions.apply(
            "alice", voice_result("create_note", title="Idea", description="Weekly review template"))

        note = user_services.notes.get("alice", result.created.id)
        assert note.content == "Weekly review template"

    def test_missing_fields_ask_follow_up(self, user_services):
        actions = user_services.voice_actions

        assert actions.apply("alice", voice_result("log_activity")).response_text == MISSING_ACTIVITY
        assert actions.apply("alice", voice_result("create_task", title=" ")).response_text == MISSING_TASK_TITLE
        assert actions.apply("alice", voice_result("create_note", title="Idea")).response_text == MISSING_NOTE_FIELDS
        assert user_services.tasks.list("alice") == []
        assert user_services.notes.list("alice") == []

    def test_queries_create_nothing(self, user_services):
        result = user_services.voice_actions.apply("alice", voice_result("general_query", "It's Wednesday."))

        assert result.created is None
        assert result.to_dict() == {
            "intent": "general_query",
            "response_text": "It's Wednesday.",
            "resource": None,
            "created": None,
        }
