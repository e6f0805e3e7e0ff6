from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Protocol, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as SchemaError

from text2query.core.constants import AppSettings, Dialect

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Stored history could not be read or written"""
    pass


class HistoryEntry(BaseModel):
    """One recorded conversion; stored as ``{text, format, result}``"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str
    dialect: Dialect = Field(..., alias="format")
    result: str


class ViewState(BaseModel):
    """Active input/dialect/result shown to the user"""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    dialect: Dialect = Dialect.SQL
    result: str = ""


_ENTRIES = TypeAdapter(List[HistoryEntry])


class Storage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class InMemoryStorage:
    def __init__(self, items: Dict[str, str] | None = None):
        self.items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


class LocalStorage:
    """
    Key → string store kept in a single JSON file for one user profile.

    Mirrors browser ``localStorage``: values are opaque strings, every
    ``set_item`` rewrites the whole file.
    """

    def __init__(self, path: str | Path = AppSettings.HISTORY_FILE):
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Unreadable storage file: {self.path}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Unexpected storage layout in {self.path}")
        return data

    def get_item(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        try:
            items = self._load()
        except PersistenceError:
            logger.warning("Discarding unreadable storage file %s", self.path)
            items = {}
        items[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(items), encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Cannot write storage file: {self.path}") from e


class HistoryStore:
    """Bounded, most-recent-first log of conversions.

    Rehydrated once at startup and rewritten in full on every append.
    Storage failures never propagate: a bad read starts from an empty log,
    a bad write keeps the in-memory log.
    """

    def __init__(
        self,
        storage: Storage,
        key: str = AppSettings.HISTORY_KEY,
        limit: int = AppSettings.HISTORY_LIMIT,
    ):
        self.storage = storage
        self.key = key
        self.limit = limit
        self._entries: Tuple[HistoryEntry, ...] = ()

    @property
    def entries(self) -> Tuple[HistoryEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def rehydrate(self) -> Tuple[HistoryEntry, ...]:
        try:
            raw = self.storage.get_item(self.key)
            entries = _ENTRIES.validate_json(raw) if raw else []
        except (PersistenceError, SchemaError) as e:
            logger.warning("Error parsing saved history, starting empty: %s", e)
            entries = []
        self._entries = tuple(entries[: self.limit])
        return self._entries

    def append(self, entry: HistoryEntry) -> Tuple[HistoryEntry, ...]:
        self._entries = ((entry,) + self._entries)[: self.limit]
        payload = _ENTRIES.dump_json(list(self._entries), by_alias=True).decode("utf-8")
        try:
            self.storage.set_item(self.key, payload)
        except PersistenceError as e:
            logger.warning("Could not persist history: %s", e)
        return self._entries

    def replay(self, entry: HistoryEntry) -> ViewState:
        return ViewState(text=entry.text, dialect=entry.dialect, result=entry.result)
