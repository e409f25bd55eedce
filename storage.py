"""
Event storage and persistence module

Events live in a localStorage-like key/value file. The whole event store is
serialized as one JSON value under ``EVENTS_KEY``.
"""
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from config import EVENTS_KEY, STORAGE_FILE

_LOGGER = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when events could not be written to storage."""


class MemoryStorage:
    """An in memory key/value storage."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class LocalStorage:
    """Key/value storage backed by a JSON file of string keys to string values"""

    def __init__(self, path: Path = STORAGE_FILE):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (ValueError, OSError) as e:
            _LOGGER.warning("Could not read storage file %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            _LOGGER.warning("Ignoring storage file %s with unexpected contents", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, items: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(items, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise StorageError(f"Could not write {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)


def serialize_events(events: Dict[str, List[str]]) -> str:
    """Encode the event store as JSON text"""
    return json.dumps(events, ensure_ascii=False)


def deserialize_events(text: Optional[str]) -> Dict[str, List[str]]:
    """
    Decode an event store from JSON text

    Missing or malformed data yields an empty store. Entries that are not a
    list of strings are dropped, and so are lists left empty.
    """
    if not text:
        return {}

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        _LOGGER.warning("Discarding malformed event data: %s", e)
        return {}

    if not isinstance(data, dict):
        _LOGGER.warning("Discarding event data of type %s", type(data).__name__)
        return {}

    events = {}
    for key, value in data.items():
        if not isinstance(value, list):
            continue
        items = [item for item in value if isinstance(item, str)]
        if items:
            events[key] = items
    return events


class EventStore:
    """Mapping of date key (YYYY-MM-DD) to the ordered events of that day"""

    def __init__(self, storage, key: str = EVENTS_KEY):
        self.storage = storage
        self.key = key
        self._events: Dict[str, List[str]] = {}

    def load(self) -> Dict[str, List[str]]:
        """Load all events from storage, replacing what is in memory"""
        try:
            raw = self.storage.get_item(self.key)
        except OSError as e:
            _LOGGER.error("Error loading events: %s", e)
            raw = None

        self._events = deserialize_events(raw)
        _LOGGER.debug("Loaded events for %d days", len(self._events))
        return self.to_dict()

    def save(self) -> None:
        """
        Write all events to storage

        Raises:
            StorageError: if the storage could not be written
        """
        payload = serialize_events(self._events)
        try:
            self.storage.set_item(self.key, payload)
        except StorageError:
            raise
        except (OSError, TypeError) as e:
            raise StorageError(str(e)) from e
        _LOGGER.debug("Saved events for %d days", len(self._events))

    def get_events(self, date_key: str) -> List[str]:
        """Get the events for a date key, in insertion order"""
        return list(self._events.get(date_key, []))

    def add_event(self, date_key: str, text: str) -> List[str]:
        """
        Append an event to a day

        The store is not saved; call save() afterwards.

        Returns:
            The updated events for that day
        """
        self._events.setdefault(date_key, []).append(text)
        return self.get_events(date_key)

    def delete_event(self, date_key: str, index: int) -> str:
        """
        Remove the event at index from a day, dropping the day once empty

        The store is not saved; call save() afterwards.

        Raises:
            IndexError: if the day has no event at that index
        """
        events = self._events.get(date_key)
        if not events or not 0 <= index < len(events):
            raise IndexError(f"No event {index} on {date_key}")

        removed = events.pop(index)
        if not events:
            del self._events[date_key]
        return removed

    def to_dict(self) -> Dict[str, List[str]]:
        return {key: list(events) for key, events in self._events.items()}

    def __contains__(self, date_key: str) -> bool:
        return date_key in self._events

    def __len__(self) -> int:
        return len(self._events)
