#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Voice Actions
Applies a classified voice command to the user's data

Version: 1.0.0
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from eunoia.core.models import Record, TaskStatus
from eunoia.services.ai.schemas import ProcessVoiceOutput
from eunoia.services.log_service import LogService
from eunoia.services.note_service import NoteService
from eunoia.services.task_service import TaskService
from eunoia.utils.datetime_utils import now
from eunoia.utils.text_utils import is_blank

logger = logging.getLogger(__name__)

MISSING_ACTIVITY = "What activity should I log?"
MISSING_TASK_TITLE = "What's the title of the task?"
MISSING_NOTE_FIELDS = "What's the title and content of the note?"


@dataclass
class VoiceActionResult:
    intent: str
    response_text: str
    created: Optional[Record] = None
    resource: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'intent': self.intent,
            'response_text': self.response_text,
            'resource': self.resource,
            'created': self.created.to_dict() if self.created else None
        }


class VoiceActionDispatcher:
    """Creates the log, task or note a voice command asked for"""

    def __init__(self, log_service: LogService, task_service: TaskService, note_service: NoteService):
        self.log_service = log_service
        self.task_service = task_service
        self.note_service = note_service

    def apply(self, user_id: str, result: ProcessVoiceOutput) -> VoiceActionResult:
        handler = {
            "log_activity": self._log_activity,
            "create_task": self._create_task,
            "create_note": self._create_note,
        }.get(result.intent)

        if handler is None:
            return VoiceActionResult(intent=result.intent, response_text=result.response_text)
        return handler(user_id, result)

    def _log_activity(self, user_id: str, result: ProcessVoiceOutput) -> VoiceActionResult:
        details = result.extracted_details
        if is_blank(details.title):
            return VoiceActionResult(intent=result.intent, response_text=MISSING_ACTIVITY)

        entry = self.log_service.create_log(
            user_id,
            activity=details.title,
            date=details.date or now(),
            mood=details.mood,
            focus_level=details.focus_level,
            notes=details.description,
            diary_entry=details.content,
        )
        logger.info(f"Voice command logged activity {entry.id} for user {user_id}")
        return VoiceActionResult(intent=result.intent, response_text=result.response_text,
                                 created=entry, resource="logs")

    def _create_task(self, user_id: str, result: ProcessVoiceOutput) -> VoiceActionResult:
        details = result.extracted_details
        if is_blank(details.title):
            return VoiceActionResult(intent=result.intent, response_text=MISSING_TASK_TITLE)

        task = self.task_service.create_task(
            user_id,
            title=details.title,
            description=details.description,
            due_date=details.due_date,
            status=TaskStatus.PENDING.value,
        )
        logger.info(f"Voice command created task {task.id} for user {user_id}")
        return VoiceActionResult(intent=result.intent, response_text=result.response_text,
                                 created=task, resource="tasks")

    def _create_note(self, user_id: str, result: ProcessVoiceOutput) -> VoiceActionResult:
        details = result.extracted_details
        content = details.content if not is_blank(details.content) else details.description
        if is_blank(details.title) or is_blank(content):
            return VoiceActionResult(intent=result.intent, response_text=MISSING_NOTE_FIELDS)

        note = self.note_service.create_note(user_id, title=details.title, content=content)
        logger.info(f"Voice command created note {note.id} for user {user_id}")
        return VoiceActionResult(intent=result.intent, response_text=result.response_text,
                                 created=note, resource="notes")


__all__ = ['VoiceActionDispatcher', 'VoiceActionResult']
