#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Settings Store
Typed per-user settings with explicit load, save and reset

Version: 1.0.0
"""

import logging
from dataclasses import fields
from typing import Any, Dict

from eunoia.core.database import JsonStore, SETTINGS_KEY
from eunoia.core.models import AppSettings, ValidationError

logger = logging.getLogger(__name__)


class SettingsStore:
    """Reads and writes AppSettings under the app-settings key"""

    def __init__(self, store: JsonStore):
        self.store = store

    def load(self, user_id: str) -> AppSettings:
        """Stored settings; missing or invalid groups fall back to their defaults"""
        raw = self.store.get(user_id, SETTINGS_KEY)
        if raw is None:
            return AppSettings()

        try:
            return AppSettings.from_dict(raw)
        except ValidationError as e:
            logger.warning(f"Stored settings for user {user_id} are invalid ({e}), merging with defaults")

        if not isinstance(raw, dict):
            return AppSettings()

        settings = AppSettings()
        for name, group_class in AppSettings.GROUPS.items():
            try:
                group = AppSettings.from_dict({name: raw.get(name)})
            except ValidationError as e:
                logger.warning(f"Settings group '{name}' for user {user_id} reset to defaults: {e}")
                continue
            setattr(settings, name, getattr(group, name))
        return settings

    def save(self, user_id: str, settings: AppSettings) -> AppSettings:
        self.store.set(user_id, SETTINGS_KEY, settings.to_dict())
        logger.info(f"Settings saved for user {user_id}")
        return settings

    def update(self, user_id: str, changes: Dict[str, Dict[str, Any]]) -> AppSettings:
        """Merge per-group changes into the stored settings and save"""
        merged = self.load(user_id).to_dict()
        for name, values in changes.items():
            if name not in AppSettings.GROUPS:
                raise ValidationError(f"Unknown settings group: {name}")
            if not isinstance(values, dict):
                raise ValidationError(f"{name} must be an object")
            known = {f.name for f in fields(AppSettings.GROUPS[name])}
            unknown = set(values) - known
            if unknown:
                raise ValidationError(f"Unknown {name} settings: {sorted(unknown)}")
            merged[name].update(values)
        return self.save(user_id, AppSettings.from_dict(merged))

    def reset(self, user_id: str) -> AppSettings:
        self.store.delete(user_id, SETTINGS_KEY)
        logger.info(f"Settings reset for user {user_id}")
        return AppSettings()


__all__ = ['SettingsStore']
