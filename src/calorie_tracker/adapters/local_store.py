"""Key-value stores holding browser local-storage snapshots."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from calorie_tracker.services.migration import LocalStore

logger = logging.getLogger(__name__)


@dataclass
class InMemoryLocalStore(LocalStore):
    """Local store over an uploaded snapshot."""

    entries: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        """Return the raw value for a key."""
        return self.entries.get(key)

    def set(self, key: str, value: str) -> None:
        """Store a raw value."""
        self.entries[key] = value

    def remove(self, key: str) -> None:
        """Remove a key if present."""
        self.entries.pop(key, None)


@dataclass
class JsonFileLocalStore(LocalStore):
    """Local store persisted as a JSON object of string values."""

    path: Path

    def get(self, key: str) -> str | None:
        """Return the raw value for a key.

        Hand-written files may hold plain JSON values such as `{"target": 1800}`;
        those are returned re-encoded as JSON text.
        """
        value = self._read().get(key)
        if value is None or isinstance(value, str):
            return value
        logger.debug("Re-encoding non-string local store value", extra={"key": key})
        return json.dumps(value)

    def set(self, key: str, value: str) -> None:
        """Store a raw value and rewrite the file."""
        entries = self._read()
        entries[key] = value
        self._write(entries)

    def remove(self, key: str) -> None:
        """Remove a key and rewrite the file when it was present."""
        entries = self._read()
        if entries.pop(key, None) is not None:
            self._write(entries)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning(
                "Local store file is not valid JSON", extra={"path": str(self.path)}
            )
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, entries: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(entries, indent=2), encoding="utf-8")
