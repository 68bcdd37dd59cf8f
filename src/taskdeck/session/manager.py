# src/taskdeck/session/manager.py

"""
Session manager: the single owner of the bearer credential.

Presence of a credential in storage is the only "authenticated" signal;
there is no client-side expiry. Invalid credentials are discovered by the
server answering 401, which the task list controller reports back here.
"""

from __future__ import annotations

import logging

from ..core.ports import CredentialStorage, RedirectHook

logger = logging.getLogger(__name__)


class SessionManager:
    def __init__(self, storage: CredentialStorage, on_redirect: RedirectHook | None = None) -> None:
        self._storage = storage
        self._on_redirect = on_redirect

    def get_credential(self) -> str | None:
        value = self._storage.get()
        return value or None

    def set_credential(self, credential: str) -> None:
        if not credential:
            raise ValueError("credential must be a non-empty string")
        self._storage.set(credential)
        logger.info("Credential stored.")

    def clear_credential(self) -> None:
        self._storage.clear()
        logger.info("Credential cleared.")

    @property
    def is_authenticated(self) -> bool:
        return self.get_credential() is not None

    def redirect_to_login(self) -> None:
        logger.debug("Redirecting to authentication entry point.")
        if self._on_redirect is not None:
            self._on_redirect()

    def require_credential_or_redirect(self) -> bool:
        """
        Entry guard, evaluated once per entry.

        Returns True if a credential is held. Otherwise redirects and returns False;
        the caller must not proceed (no task fetch).
        """
        if self.get_credential() is not None:
            return True
        logger.info("No credential held; authentication required.")
        self.redirect_to_login()
        return False
