"""Key-value persistence used to keep the session token across restarts."""

from __future__ import annotations

from typing import Protocol


class KeyValueStorage(Protocol):
    """Synchronous string store, shaped like browser local storage."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryStorage:
    """Dict-backed storage. Lives as long as the process does."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)
