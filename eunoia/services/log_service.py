#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Daily Log & Expense Services

Version: 1.0.0
"""

from datetime import datetime
from typing import Optional

from eunoia.core.database import DAILY_LOGS_KEY, EXPENSES_KEY
from eunoia.core.models import Expense, LogEntry
from eunoia.services.resource_service import ResourceService
from eunoia.utils.datetime_utils import now


class LogService(ResourceService[LogEntry]):
    key = DAILY_LOGS_KEY
    record_class = LogEntry
    sort_key = staticmethod(lambda log: log.date)
    sort_descending = True

    def create_log(self, user_id: str, activity: str, date: Optional[datetime] = None,
                   mood: Optional[str] = None, focus_level: Optional[int] = None,
                   notes: Optional[str] = None, diary_entry: Optional[str] = None) -> LogEntry:
        entry = LogEntry(activity=activity, date=date or now(), mood=mood, focus_level=focus_level,
                         notes=notes, diary_entry=diary_entry)
        return self.add(user_id, entry)


class ExpenseService(ResourceService[Expense]):
    key = EXPENSES_KEY
    record_class = Expense
    sort_key = staticmethod(lambda expense: expense.date)
    sort_descending = True

    def create_expense(self, user_id: str, description: str, amount: float, category: str,
                       date: Optional[datetime] = None) -> Expense:
        expense = Expense(description=description, amount=amount, category=category, date=date or now())
        return self.add(user_id, expense)


__all__ = ['LogService', 'ExpenseService']
