# eunoia/services/__init__.py

"""
4Eunoia services

Resource CRUD, data mode, settings, insights and voice actions, wired
together by ServiceManager.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from eunoia.config import config
from eunoia.core.ai_service import AIService, create_ai_service
from eunoia.core.database import (
    CALENDAR_EVENTS_KEY, DAILY_LOGS_KEY, EXPENSES_KEY, GOALS_KEY, GRATITUDE_KEY,
    HABITS_KEY, NOTES_KEY, REFRAMING_KEY, REMINDERS_KEY, TASKS_KEY, JsonStore,
)

from .calendar_service import CalendarService, ReminderService
from .data_service import DataService
from .goal_service import GoalService, HabitService
from .insights_service import InsightsService
from .log_service import ExpenseService, LogService
from .note_service import NoteService, WellnessService
from .settings_service import SettingsStore
from .task_service import TaskService
from .voice_actions import VoiceActionDispatcher

logger = logging.getLogger(__name__)


class ServiceManager:
    """
    Builds every service over one JsonStore and one AIService

    Services are created in dependency order: store, resources, data and
    settings, then insights and voice actions.
    """

    def __init__(self, data_dir: Optional[Path] = None, ai_service: Optional[AIService] = None):
        self.store = JsonStore(data_dir or config.storage.data_dir)
        self.ai_service = ai_service or create_ai_service()

        self.tasks = TaskService(self.store)
        self.goals = GoalService(self.store)
        self.habits = HabitService(self.store)
        self.logs = LogService(self.store)
        self.expenses = ExpenseService(self.store)
        self.calendar = CalendarService(self.store)
        self.notes = NoteService(self.store)
        self.reminders = ReminderService(self.store)
        self.wellness = WellnessService(self.store)

        self.data = DataService(self.store, {
            TASKS_KEY: self.tasks,
            GOALS_KEY: self.goals,
            HABITS_KEY: self.habits,
            DAILY_LOGS_KEY: self.logs,
            EXPENSES_KEY: self.expenses,
            CALENDAR_EVENTS_KEY: self.calendar,
            NOTES_KEY: self.notes,
            REMINDERS_KEY: self.reminders,
            GRATITUDE_KEY: self.wellness.gratitude,
            REFRAMING_KEY: self.wellness.reframing,
        })
        self.settings = SettingsStore(self.store)
        self.insights = InsightsService(self.data, self.settings, self.ai_service)
        self.voice_actions = VoiceActionDispatcher(self.logs, self.tasks, self.notes)

        logger.info(f"Services initialized, data in {self.store.data_dir}")

    def health_check(self) -> Dict[str, Any]:
        ai_health = self.ai_service.get_health_status()
        return {
            "status": "healthy" if ai_health["status"] == "healthy" else "degraded",
            "storage": self.store.get_stats(),
            "ai": ai_health,
        }

# Global service manager
_service_manager: Optional[ServiceManager] = None


def get_service_manager() -> ServiceManager:
    global _service_manager
    if _service_manager is None:
        _service_manager = ServiceManager()
    return _service_manager


def initialize_all_services(data_dir: Optional[Path] = None, ai_service: Optional[AIService] = None) -> ServiceManager:
    global _service_manager
    _service_manager = ServiceManager(data_dir, ai_service)
    return _service_manager


def close_all_services() -> None:
    global _service_manager
    if _service_manager is not None:
        logger.info("Closing services")
        _service_manager = None


__all__ = [
    'ServiceManager',
    'get_service_manager',
    'initialize_all_services',
    'close_all_services',
    'TaskService', 'GoalService', 'HabitService', 'LogService', 'ExpenseService',
    'CalendarService', 'ReminderService', 'NoteService', 'WellnessService',
    'DataService', 'SettingsStore', 'InsightsService', 'VoiceActionDispatcher'
]
