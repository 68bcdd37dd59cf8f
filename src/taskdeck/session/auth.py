# src/taskdeck/session/auth.py

from __future__ import annotations

import logging

from ..api.client import ApiClient
from .manager import SessionManager

logger = logging.getLogger(__name__)


async def login(session: SessionManager, api: ApiClient, identifier: str, secret: str) -> str:
    """
    Authenticate and store the issued credential.

    AuthenticationError propagates unchanged; the session is only written on success.
    """
    credential = await api.authenticate(identifier, secret)
    session.set_credential(credential)
    logger.info("Logged in as %s", identifier)
    return credential


async def signup(api: ApiClient, identifier: str, secret: str) -> bool:
    """
    Register a new account.

    Does not log in: no credential is produced and the caller must call login() next.
    """
    ok = await api.register(identifier, secret)
    logger.info("Registered account %s", identifier)
    return ok
