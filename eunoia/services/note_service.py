#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Notes & Wellness Services
Notes plus the gratitude and cognitive reframing journals

Version: 1.0.0
"""

import logging
from typing import List, Optional

from eunoia.core.database import GRATITUDE_KEY, NOTES_KEY, REFRAMING_KEY, JsonStore
from eunoia.core.models import GratitudeLog, Note, ReframingLog
from eunoia.services.resource_service import ResourceService

logger = logging.getLogger(__name__)


class NoteService(ResourceService[Note]):
    key = NOTES_KEY
    record_class = Note
    sort_key = staticmethod(lambda note: note.updated_at)
    sort_descending = True
    stamp_updated_at = True

    def create_note(self, user_id: str, title: str, content: str) -> Note:
        return self.add(user_id, Note(title=title, content=content))


class GratitudeService(ResourceService[GratitudeLog]):
    key = GRATITUDE_KEY
    record_class = GratitudeLog
    sort_key = staticmethod(lambda entry: entry.timestamp)
    sort_descending = True


class ReframingService(ResourceService[ReframingLog]):
    key = REFRAMING_KEY
    record_class = ReframingLog
    sort_key = staticmethod(lambda entry: entry.timestamp)
    sort_descending = True


class WellnessService:
    """Gratitude and reframing journals behind one facade"""

    def __init__(self, store: JsonStore):
        self.gratitude = GratitudeService(store)
        self.reframing = ReframingService(store)

    def add_gratitude(self, user_id: str, text: str) -> GratitudeLog:
        return self.gratitude.add(user_id, GratitudeLog(text=text))

    def list_gratitude(self, user_id: str, data_mode: Optional[str] = None) -> List[GratitudeLog]:
        return self.gratitude.list(user_id, data_mode)

    def delete_gratitude(self, user_id: str, entry_id: str) -> bool:
        return self.gratitude.delete(user_id, entry_id)

    def add_reframing(self, user_id: str, negative_thought: str, positive_reframing: str) -> ReframingLog:
        entry = ReframingLog(negative_thought=negative_thought, positive_reframing=positive_reframing)
        return self.reframing.add(user_id, entry)

    def list_reframing(self, user_id: str, data_mode: Optional[str] = None) -> List[ReframingLog]:
        return self.reframing.list(user_id, data_mode)

    def delete_reframing(self, user_id: str, entry_id: str) -> bool:
        return self.reframing.delete(user_id, entry_id)


__all__ = ['NoteService', 'GratitudeService', 'ReframingService', 'WellnessService']
