"""
Storage Collaborator

Durable storage and live change notification for entries and settings
belong to an external document database. The tracker subscribes to
per-user snapshots and issues fire-and-forget writes; the authoritative
entry list always arrives through the subscription, never through a
write's return value.

This module defines that contract and an in-memory store that pushes a
full snapshot to every subscriber after each write.
"""

import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import datetime
from typing import Callable, Optional
from uuid import uuid4

from ..config.settings import StorageConfig
from ..core.entities import Entry
from .errors import StorageError

logger = logging.getLogger(__name__)

EntriesCallback = Callable[[list], None]
SettingsCallback = Callable[[Optional[dict]], None]
ErrorCallback = Callable[[Exception], None]


class TrackerStore(ABC):
    """
    Abstract storage collaborator.

    Entry snapshots are lists of Entry ordered by date, newest first.
    Settings snapshots are the raw settings record, or None if absent.
    """

    @abstractmethod
    def subscribe_entries(
        self,
        user_id: str,
        callback: EntriesCallback,
        on_error: ErrorCallback = None
    ) -> Callable[[], None]:
        pass

    @abstractmethod
    def subscribe_settings(
        self,
        user_id: str,
        callback: SettingsCallback,
        on_error: ErrorCallback = None
    ) -> Callable[[], None]:
        pass

    @abstractmethod
    def create_entry(self, user_id: str, fields: dict) -> str:
        """Store a new entry; returns the assigned id."""
        pass

    @abstractmethod
    def delete_entry(self, user_id: str, entry_id: str) -> None:
        pass

    @abstractmethod
    def upsert_settings(self, user_id: str, fields: dict) -> None:
        """Merge ``fields`` into the settings record; other fields are preserved."""
        pass


def _merge(target: dict, fields: dict) -> dict:
    merged = dict(target)
    for key, value in fields.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class InMemoryTrackerStore(TrackerStore):
    """
    Document store kept in dicts keyed by collection path.

    Set ``online`` to False to make every operation raise StorageError,
    as a network failure would.
    """

    def __init__(self, config: StorageConfig = None):
        self.config = config or StorageConfig()
        self.online = True

        self._documents: dict[str, dict[str, dict]] = defaultdict(dict)
        self._settings: dict[str, dict] = {}
        self._entry_subscribers: dict[str, list] = defaultdict(list)
        self._settings_subscribers: dict[str, list] = defaultdict(list)

    def _check_online(self, operation: str) -> None:
        if not self.online:
            raise StorageError(f"{operation} failed: storage unavailable")

    def _snapshot(self, user_id: str) -> list:
        path = self.config.entries_path(user_id)
        entries = [
            Entry.from_record(record, entry_id=entry_id)
            for entry_id, record in self._documents[path].items()
        ]
        entries.sort(key=lambda e: e.date, reverse=True)
        return entries

    def _settings_snapshot(self, user_id: str) -> Optional[dict]:
        record = self._settings.get(self.config.settings_path(user_id))
        return dict(record) if record is not None else None

    def _subscribe(self, registry, path, callback, on_error, snapshot):
        try:
            self._check_online("Subscribe")
        except StorageError as e:
            if on_error is None:
                raise
            on_error(e)
            return lambda: None

        registry[path].append(callback)
        callback(snapshot())

        def unsubscribe() -> None:
            if callback in registry[path]:
                registry[path].remove(callback)

        return unsubscribe

    def subscribe_entries(self, user_id, callback, on_error=None):
        return self._subscribe(
            self._entry_subscribers,
            self.config.entries_path(user_id),
            callback,
            on_error,
            lambda: self._snapshot(user_id)
        )

    def subscribe_settings(self, user_id, callback, on_error=None):
        return self._subscribe(
            self._settings_subscribers,
            self.config.settings_path(user_id),
            callback,
            on_error,
            lambda: self._settings_snapshot(user_id)
        )

    def _notify_entries(self, user_id: str) -> None:
        path = self.config.entries_path(user_id)
        for callback in list(self._entry_subscribers[path]):
            callback(self._snapshot(user_id))

    def _notify_settings(self, user_id: str) -> None:
        path = self.config.settings_path(user_id)
        for callback in list(self._settings_subscribers[path]):
            callback(self._settings_snapshot(user_id))

    def create_entry(self, user_id: str, fields: dict) -> str:
        self._check_online("Create entry")

        entry_id = uuid4().hex
        record = dict(fields)
        record["timestamp"] = datetime.now()
        self._documents[self.config.entries_path(user_id)][entry_id] = record

        logger.debug("Created entry %s for %s on %s", entry_id, user_id, record.get("date"))
        self._notify_entries(user_id)
        return entry_id

    def delete_entry(self, user_id: str, entry_id: str) -> None:
        self._check_online("Delete entry")

        documents = self._documents[self.config.entries_path(user_id)]
        if entry_id not in documents:
            raise StorageError(f"Entry {entry_id} not found")
        del documents[entry_id]

        logger.debug("Deleted entry %s for %s", entry_id, user_id)
        self._notify_entries(user_id)

    def upsert_settings(self, user_id: str, fields: dict) -> None:
        self._check_online("Save settings")

        path = self.config.settings_path(user_id)
        self._settings[path] = _merge(self._settings.get(path, {}), fields)

        logger.debug("Saved settings for %s", user_id)
        self._notify_settings(user_id)
