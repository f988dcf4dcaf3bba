#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Calendar & Reminder Services

Version: 1.0.0
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from eunoia.core.database import CALENDAR_EVENTS_KEY, REMINDERS_KEY
from eunoia.core.models import CalendarEvent, Reminder, ValidationError, validate_datetime
from eunoia.services.resource_service import ResourceService
from eunoia.utils.datetime_utils import now

logger = logging.getLogger(__name__)


class CalendarService(ResourceService[CalendarEvent]):
    """Events, earliest start first"""

    key = CALENDAR_EVENTS_KEY
    record_class = CalendarEvent
    sort_key = staticmethod(lambda event: event.start)

    def create_event(self, user_id: str, title: str, start: datetime, end: datetime,
                     description: Optional[str] = None) -> CalendarEvent:
        return self.add(user_id, CalendarEvent(title=title, start=start, end=end, description=description))

    def events_between(self, user_id: str, start, end, data_mode: Optional[str] = None) -> List[CalendarEvent]:
        """Events overlapping [start, end]"""
        range_start = validate_datetime(start, "start")
        range_end = validate_datetime(end, "end")
        if range_end < range_start:
            raise ValidationError("end must not be before start")
        return [e for e in self.list(user_id, data_mode) if e.overlaps(range_start, range_end)]


class ReminderService(ResourceService[Reminder]):
    """Reminders, soonest first"""

    key = REMINDERS_KEY
    record_class = Reminder
    sort_key = staticmethod(lambda reminder: reminder.date_time)

    def create_reminder(self, user_id: str, title: str, date_time: datetime,
                        description: Optional[str] = None) -> Reminder:
        return self.add(user_id, Reminder(title=title, date_time=date_time, description=description))

    def get_upcoming(self, user_id: str, at: Optional[datetime] = None, within_hours: int = 24,
                     data_mode: Optional[str] = None) -> List[Reminder]:
        """Reminders due between `at` and `within_hours` later"""
        if within_hours <= 0:
            raise ValidationError("within_hours must be positive")
        at = at or now()
        horizon = at + timedelta(hours=within_hours)
        return [r for r in self.list(user_id, data_mode) if at <= r.date_time <= horizon]


__all__ = ['CalendarService', 'ReminderService']
