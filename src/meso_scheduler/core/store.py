"""
Key-value accessor the engine reads persisted state through.

Hosts inject any object with this shape; `io.settings_store` provides a
JSON-file implementation.
"""

from typing import Any, Iterable, Mapping, Protocol


class SettingsStore(Protocol):
    """Minimal key-value accessor injected into the engine."""

    def get(self, key: str) -> Any | None:
        ...

    def set_many(self, values: Mapping[str, Any]) -> None:
        """Write every given key in one update."""
        ...

    def delete_many(self, keys: Iterable[str]) -> None:
        ...


class InMemorySettingsStore:
    """Dict-backed store, used by tests and short-lived hosts."""

    def __init__(self, initial: Mapping[str, Any] | None = None):
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any | None:
        return self._data.get(key)

    def set_many(self, values: Mapping[str, Any]) -> None:
        self._data.update(values)

    def delete_many(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._data)
