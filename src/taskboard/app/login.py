# src/taskboard/app/login.py

from __future__ import annotations

import logging

from ..session.session_store import SessionStore, validate_credentials

logger = logging.getLogger(__name__)

LOGIN_ERROR = "Please enter a valid email and password (min 6 characters)"


def submit_login(session: SessionStore, identifier: str, secret: str) -> str | None:
    """
    Handle a login form submit.

    Returns None on success (session written), or the inline error message.
    A rejected submit changes nothing; the user just submits again.
    """
    identifier = (identifier or "").strip()
    if not validate_credentials(identifier, secret):
        logger.debug("Login rejected for identifier=%r", identifier)
        return LOGIN_ERROR
    session.login(identifier)
    return None
