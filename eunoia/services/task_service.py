#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Task Service

Version: 1.0.0
"""

import logging
from datetime import datetime
from typing import Optional

from eunoia.core.database import TASKS_KEY
from eunoia.core.models import Task, TaskStatus
from eunoia.services.resource_service import ResourceService

logger = logging.getLogger(__name__)


class TaskService(ResourceService[Task]):
    """Tasks, newest first"""

    key = TASKS_KEY
    record_class = Task
    sort_key = staticmethod(lambda task: task.created_at)
    sort_descending = True

    def create_task(self, user_id: str, title: str, description: Optional[str] = None,
                    due_date: Optional[datetime] = None, status: str = TaskStatus.PENDING.value) -> Task:
        return self.add(user_id, Task(title=title, description=description, due_date=due_date, status=status))

    def toggle_status(self, user_id: str, task_id: str) -> Optional[Task]:
        """Completed becomes Pending; anything else becomes Completed"""
        task = self.get(user_id, task_id)
        if task is None:
            return None

        if task.status == TaskStatus.COMPLETED.value:
            new_status = TaskStatus.PENDING.value
        else:
            new_status = TaskStatus.COMPLETED.value
        logger.info(f"Task {task_id} for user {user_id}: {task.status} -> {new_status}")
        return self.update(user_id, task_id, status=new_status)


__all__ = ['TaskService']
