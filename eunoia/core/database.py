#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - JSON Store
Per-user JSON tree persistence with atomic writes

Each user owns one file holding a tree keyed by resource key; each resource
collection is an object keyed by record id. Every mutation rewrites the whole
file, last write wins.

Version: 1.0.0
"""

import os
import json
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Any, Iterable
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)

# ===== EXCEPTIONS =====

class DatabaseError(Exception):
    """Base storage error"""
    pass

# ===== STORAGE KEYS =====

TASKS_KEY = "tasks"
GOALS_KEY = "goals"
HABITS_KEY = "habits"
DAILY_LOGS_KEY = "daily-logs"
EXPENSES_KEY = "expenses"
CALENDAR_EVENTS_KEY = "calendar-events"
NOTES_KEY = "notes"
REMINDERS_KEY = "reminders"
GRATITUDE_KEY = "wellness-gratitude"
REFRAMING_KEY = "wellness-reframing"
SETTINGS_KEY = "app-settings"
DATA_MODE_KEY = "data-mode"

# Resource data only; settings and data mode survive a data clear
ALL_USER_DATA_KEYS = (
    CALENDAR_EVENTS_KEY,
    DAILY_LOGS_KEY,
    EXPENSES_KEY,
    GOALS_KEY,
    HABITS_KEY,
    NOTES_KEY,
    REMINDERS_KEY,
    TASKS_KEY,
    GRATITUDE_KEY,
    REFRAMING_KEY,
)

# ===== HELPER CLASSES =====

@dataclass
class StoreStats:
    """Storage counters"""
    load_count: int = 0
    save_count: int = 0
    error_count: int = 0
    last_save: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'load_count': self.load_count,
            'save_count': self.save_count,
            'error_count': self.error_count,
            'last_save': self.last_save
        }

# ===== STORE =====

class JsonStore:
    """Per-user JSON file store"""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.file_lock = threading.RLock()
        self.stats = StoreStats()

    def _user_file(self, user_id: str) -> Path:
        safe_id = "".join(c for c in str(user_id) if c.isalnum() or c in "-_")
        if not safe_id:
            raise DatabaseError(f"Invalid user id: {user_id!r}")
        return self.data_dir / f"user_{safe_id}.json"

    def _load_tree(self, user_id: str) -> Dict[str, Any]:
        """Read the user's tree; unreadable data is logged and treated as empty"""
        path = self._user_file(user_id)
        with self.file_lock:
            self.stats.load_count += 1
            if not path.exists():
                return {}
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    tree = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
                logger.error(f"Failed to read data for user {user_id}: {e}")
                self.stats.error_count += 1
                return {}

        if not isinstance(tree, dict):
            logger.error(f"Data file for user {user_id} is not an object, ignoring it")
            self.stats.error_count += 1
            return {}
        return tree

    def _save_tree(self, user_id: str, tree: Dict[str, Any]) -> None:
        path = self._user_file(user_id)
        with self.file_lock:
            temp_file = path.with_suffix('.tmp')
            try:
                with open(temp_file, 'w', encoding='utf-8') as f:
                    json.dump(tree, f, ensure_ascii=False, indent=2)
                os.replace(temp_file, path)
            except (OSError, TypeError, ValueError) as e:
                if temp_file.exists():
                    temp_file.unlink()
                self.stats.error_count += 1
                logger.error(f"Failed to save data for user {user_id}: {e}")
                raise DatabaseError(f"Failed to save data for user {user_id}: {e}") from e

            self.stats.save_count += 1
            self.stats.last_save = datetime.now().isoformat()

    # ===== PUBLIC API =====

    def get(self, user_id: str, key: str, default: Any = None) -> Any:
        return self._load_tree(user_id).get(key, default)

    def set(self, user_id: str, key: str, value: Any) -> None:
        with self.file_lock:
            tree = self._load_tree(user_id)
            tree[key] = value
            self._save_tree(user_id, tree)

    def delete(self, user_id: str, key: str) -> bool:
        return self.delete_keys(user_id, [key]) > 0

    def delete_keys(self, user_id: str, keys: Iterable[str]) -> int:
        """Remove several keys in one write; returns how many existed"""
        with self.file_lock:
            tree = self._load_tree(user_id)
            removed = [key for key in keys if key in tree]
            for key in removed:
                del tree[key]
            if removed:
                self._save_tree(user_id, tree)
            return len(removed)

    def load_collection(self, user_id: str, key: str) -> Dict[str, Dict[str, Any]]:
        """Records of one resource keyed by id"""
        collection = self.get(user_id, key, {})
        if not isinstance(collection, dict):
            logger.warning(f"Collection '{key}' for user {user_id} is malformed, treating as empty")
            self.stats.error_count += 1
            return {}
        return collection

    def save_collection(self, user_id: str, key: str, records: Dict[str, Dict[str, Any]]) -> None:
        self.set(user_id, key, records)

    def list_users(self) -> List[str]:
        return sorted(p.stem[len("user_"):] for p in self.data_dir.glob("user_*.json"))

    def get_stats(self) -> Dict[str, Any]:
        stats = self.stats.to_dict()
        stats['data_dir'] = str(self.data_dir)
        stats['users'] = len(self.list_users())
        return stats


__all__ = [
    'DatabaseError',
    'JsonStore',
    'StoreStats',
    'ALL_USER_DATA_KEYS',
    'TASKS_KEY', 'GOALS_KEY', 'HABITS_KEY', 'DAILY_LOGS_KEY', 'EXPENSES_KEY',
    'CALENDAR_EVENTS_KEY', 'NOTES_KEY', 'REMINDERS_KEY', 'GRATITUDE_KEY',
    'REFRAMING_KEY', 'SETTINGS_KEY', 'DATA_MODE_KEY'
]
