#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Resource Service Base
Shared CRUD over one per-user record collection

Every operation loads the collection, works on it in memory and writes it
back whole. In mock mode list() returns seed records; writes always go to
the user's own store.

Version: 1.0.0
"""

import logging
import dataclasses
from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

from eunoia.core.database import JsonStore, DATA_MODE_KEY
from eunoia.core.models import DataMode, Record, ValidationError, new_id, validate_enum_value
from eunoia.services.mock_data import build_seed_records
from eunoia.utils.datetime_utils import now

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


def read_data_mode(store: JsonStore, user_id: str) -> str:
    """Stored data mode; unknown or missing values read as mock"""
    stored = store.get(user_id, DATA_MODE_KEY)
    if stored is None:
        return DataMode.MOCK.value
    try:
        return validate_enum_value(stored, DataMode, "data_mode")
    except ValidationError:
        logger.warning(f"Unknown data mode {stored!r} for user {user_id}, using mock")
        return DataMode.MOCK.value


class ResourceService(Generic[R]):
    """CRUD for one record type stored under one key"""

    key: str = ""
    record_class: Type[R] = Record
    sort_key: Callable[[R], Any] = staticmethod(lambda record: record.id)
    sort_descending: bool = False
    stamp_updated_at: bool = False

    def __init__(self, store: JsonStore):
        self.store = store

    # ===== LOADING =====

    def _load(self, user_id: str) -> Dict[str, R]:
        records: Dict[str, R] = {}
        for record_id, raw in self.store.load_collection(user_id, self.key).items():
            try:
                record = self.record_class.from_dict(raw)
            except ValidationError as e:
                logger.warning(f"Skipping malformed {self.key} record {record_id} for user {user_id}: {e}")
                continue
            records[record.id] = record
        return records

    def _save(self, user_id: str, records: Dict[str, R]) -> None:
        self.store.save_collection(user_id, self.key, {rid: r.to_dict() for rid, r in records.items()})

    def _sorted(self, records: List[R]) -> List[R]:
        return sorted(records, key=self.sort_key, reverse=self.sort_descending)

    def seed_records(self, at: Optional[datetime] = None) -> List[R]:
        return build_seed_records(self.key, at or now())

    # ===== CRUD =====

    def list(self, user_id: str, data_mode: Optional[str] = None) -> List[R]:
        """All records in display order"""
        mode = data_mode or read_data_mode(self.store, user_id)
        if mode == DataMode.MOCK.value:
            return self._sorted(self.seed_records())
        return self._sorted(list(self._load(user_id).values()))

    def get(self, user_id: str, record_id: str) -> Optional[R]:
        return self._load(user_id).get(record_id)

    def add(self, user_id: str, record: R) -> R:
        with self.store.file_lock:
            records = self._load(user_id)
            if not record.id or record.id in records:
                record.id = new_id()
            records[record.id] = record
            self._save(user_id, records)

        logger.info(f"Added {self.key} record {record.id} for user {user_id}")
        return record

    def update(self, user_id: str, record_id: str, **changes) -> Optional[R]:
        """Apply `changes` and revalidate; None when the record does not exist"""
        changes.pop("id", None)
        known = {f.name for f in dataclasses.fields(self.record_class)}
        unknown = set(changes) - known
        if unknown:
            raise ValidationError(f"Unknown {self.key} fields: {sorted(unknown)}")

        with self.store.file_lock:
            records = self._load(user_id)
            current = records.get(record_id)
            if current is None:
                return None

            if self.stamp_updated_at and "updated_at" not in changes:
                changes["updated_at"] = now()
            updated = dataclasses.replace(current, **changes)
            records[record_id] = updated
            self._save(user_id, records)

        logger.info(f"Updated {self.key} record {record_id} for user {user_id}")
        return updated

    def delete(self, user_id: str, record_id: str) -> bool:
        with self.store.file_lock:
            records = self._load(user_id)
            if records.pop(record_id, None) is None:
                return False
            self._save(user_id, records)

        logger.info(f"Deleted {self.key} record {record_id} for user {user_id}")
        return True

    def clear(self, user_id: str) -> bool:
        return self.store.delete(user_id, self.key)


__all__ = ['ResourceService', 'read_data_mode']
