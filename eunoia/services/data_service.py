#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Data Service
Data mode switching and whole-account snapshots

Version: 1.0.0
"""

import logging
from typing import Dict, List, Mapping, Optional

from eunoia.core.database import (
    ALL_USER_DATA_KEYS, DATA_MODE_KEY, SETTINGS_KEY, JsonStore,
)
from eunoia.core.models import DataMode, Record
from eunoia.services.resource_service import ResourceService, read_data_mode

logger = logging.getLogger(__name__)


class DataService:
    """Owns the mock/user switch for one store"""

    def __init__(self, store: JsonStore, resources: Mapping[str, ResourceService]):
        self.store = store
        self.resources = dict(resources)

    def get_data_mode(self, user_id: str) -> str:
        return read_data_mode(self.store, user_id)

    def _clear_keys(self, user_id: str, keys) -> int:
        removed = self.store.delete_keys(user_id, keys)
        logger.info(f"Cleared {removed} data collections for user {user_id}")
        return removed

    def switch_to_user_mode(self, user_id: str) -> str:
        """Start the user's own data from empty"""
        self._clear_keys(user_id, ALL_USER_DATA_KEYS)
        self.store.set(user_id, DATA_MODE_KEY, DataMode.USER.value)
        logger.info(f"User {user_id} switched to user mode")
        return DataMode.USER.value

    def reset_to_mock_mode(self, user_id: str) -> str:
        self._clear_keys(user_id, ALL_USER_DATA_KEYS + (SETTINGS_KEY,))
        self.store.set(user_id, DATA_MODE_KEY, DataMode.MOCK.value)
        logger.info(f"User {user_id} reset to mock mode")
        return DataMode.MOCK.value

    def clear_user_data(self, user_id: str) -> int:
        """Remove every resource collection; settings and mode stay"""
        return self._clear_keys(user_id, ALL_USER_DATA_KEYS)

    def snapshot(self, user_id: str, data_mode: Optional[str] = None) -> Dict[str, List[Record]]:
        """Every collection as seen in the current mode"""
        mode = data_mode or self.get_data_mode(user_id)
        return {key: service.list(user_id, mode) for key, service in self.resources.items()}


__all__ = ['DataService']
