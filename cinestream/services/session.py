"""Session store owning the persisted auth token and the gate state."""

from __future__ import annotations

import enum
import logging
from typing import Callable

from cinestream.core.config import get_settings
from cinestream.core.storage import KeyValueStorage


logger = logging.getLogger(__name__)

GateListener = Callable[[], None]


class InvalidTokenError(ValueError):
    """Raised when login is attempted with an empty or missing token."""


class GateState(str, enum.Enum):
    OPEN = "open"
    CLOSED = "closed"


class SessionStore:
    """Holds a single token and decides whether protected content is shown.

    The gate is open iff a non-empty token is present. Listeners registered
    with ``on_gate_open`` run once per closed -> open transition and never
    on the way back to closed.
    """

    def __init__(self, storage: KeyValueStorage, *, key: str | None = None) -> None:
        self._storage = storage
        self.key = key or get_settings().auth_token_key
        self._token: str | None = None
        self._listeners: list[GateListener] = []

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def gate(self) -> GateState:
        return GateState.OPEN if self._token else GateState.CLOSED

    @property
    def is_logged_in(self) -> bool:
        return self.gate is GateState.OPEN

    def on_gate_open(self, listener: GateListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def initialize(self) -> GateState:
        """Read the persisted token once at startup."""

        stored = self._storage.get(self.key)
        logger.info("Session initialized (token %s)", "present" if stored else "absent")
        self._set_token(stored or None)
        return self.gate

    def login(self, token: str | None) -> GateState:
        if not token or not token.strip():
            raise InvalidTokenError("token must not be empty")
        self._storage.set(self.key, token)
        logger.info("Session login")
        self._set_token(token)
        return self.gate

    def logout(self) -> GateState:
        if self._token is None and self._storage.get(self.key) is None:
            return self.gate
        self._storage.remove(self.key)
        logger.info("Session logout")
        self._set_token(None)
        return self.gate

    def _set_token(self, token: str | None) -> None:
        was_open = self.is_logged_in
        self._token = token
        if not was_open and self.is_logged_in:
            for listener in list(self._listeners):
                self._notify(listener)

    def _notify(self, listener: GateListener) -> None:
        name = getattr(listener, "__name__", str(listener))
        try:
            listener()
        except Exception:
            logger.exception("Gate listener %s failed", name)
