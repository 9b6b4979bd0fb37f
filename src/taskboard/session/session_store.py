# src/taskboard/session/session_store.py

from __future__ import annotations

import logging

from ..core.ports import KeyValueStore

logger = logging.getLogger(__name__)

AUTH_KEY = "isAuthenticated"
USER_KEY = "userEmail"


def validate_credentials(identifier: str | None, secret: str | None) -> bool:
    """
    Placeholder login policy: an "@" in the identifier and a secret of 6+ chars.

    Not authentication. Nothing is checked against any account.
    """
    if not identifier or not secret:
        return False
    return "@" in identifier and len(secret) >= 6


class SessionStore:
    """Login flags kept in a session-scoped KeyValueStore. Last write wins."""

    def __init__(self, storage: KeyValueStore) -> None:
        self._storage = storage

    def login(self, identifier: str) -> None:
        self._storage.set(AUTH_KEY, "true")
        self._storage.set(USER_KEY, identifier)
        logger.info("Session started user=%s", identifier)

    def logout(self) -> None:
        user = self.current_user()
        self._storage.remove(AUTH_KEY)
        self._storage.remove(USER_KEY)
        logger.info("Session cleared user=%s", user)

    def is_authenticated(self) -> bool:
        return self._storage.get(AUTH_KEY) == "true"

    def current_user(self) -> str | None:
        return self._storage.get(USER_KEY)
