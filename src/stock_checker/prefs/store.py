"""Key-value preference storage."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from stock_checker.core.exceptions import PreferenceError

logger = logging.getLogger(__name__)


@runtime_checkable
class PreferenceStore(Protocol):
    """Persisted string key-value pairs.

    Implementations must keep values across process restarts (except the
    in-memory one, which exists for tests and embedding).
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryPreferenceStore:
    """Dict-backed PreferenceStore."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFilePreferenceStore:
    """PreferenceStore backed by a single JSON object on disk.

    The file is read on every ``get`` and rewritten on every ``set`` so
    that separate processes see each other's changes. A missing file reads
    as empty; parent directories are created on first write.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as e:
            raise PreferenceError(
                f"Cannot write preferences: {e}", context={"path": str(self._path)}
            ) from e
        logger.debug("Preference %s=%s saved to %s", key, value, self._path)

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise PreferenceError(
                f"Cannot read preferences: {e}", context={"path": str(self._path)}
            ) from e
        if not isinstance(data, dict):
            raise PreferenceError(
                f"Preferences file must hold a JSON object, got {type(data).__name__}",
                context={"path": str(self._path)},
            )
        return data
