#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Goals & Habits Services
Goals and habits, both ordered by last update

Version: 1.0.0
"""

import logging
from datetime import datetime
from typing import List, Optional

from eunoia.core.database import GOALS_KEY, HABITS_KEY
from eunoia.core.models import Goal, GoalStatus, Habit, HabitFrequency
from eunoia.services.resource_service import ResourceService
from eunoia.utils.datetime_utils import now

logger = logging.getLogger(__name__)


class GoalService(ResourceService[Goal]):
    key = GOALS_KEY
    record_class = Goal
    sort_key = staticmethod(lambda goal: goal.updated_at)
    sort_descending = True
    stamp_updated_at = True

    def create_goal(self, user_id: str, title: str, description: Optional[str] = None,
                    status: str = GoalStatus.NOT_STARTED.value,
                    target_date: Optional[datetime] = None) -> Goal:
        return self.add(user_id, Goal(title=title, description=description,
                                      status=status, target_date=target_date))


class HabitService(ResourceService[Habit]):
    key = HABITS_KEY
    record_class = Habit
    sort_key = staticmethod(lambda habit: habit.updated_at)
    sort_descending = True
    stamp_updated_at = True

    def create_habit(self, user_id: str, title: str, frequency: str = HabitFrequency.DAILY.value,
                     description: Optional[str] = None, specific_days: Optional[List[int]] = None) -> Habit:
        habit = Habit(title=title, frequency=frequency, description=description,
                      specific_days=specific_days or [])
        return self.add(user_id, habit)

    def mark_complete(self, user_id: str, habit_id: str, at: Optional[datetime] = None) -> Optional[Habit]:
        """Count today's completion.

        Returns None when the habit does not exist or today is already counted,
        so the streak moves at most once per calendar day.
        """
        at = at or now()
        with self.store.file_lock:
            records = self._load(user_id)
            habit = records.get(habit_id)
            if habit is None:
                return None

            if not habit.mark_complete(at):
                logger.info(f"Habit {habit_id} already completed today for user {user_id}")
                return None
            self._save(user_id, records)

        logger.info(f"Habit {habit_id} completed for user {user_id}, streak {habit.streak}")
        return habit


__all__ = ['GoalService', 'HabitService']
