"""Scoped privilege elevation for item store access.

Elevation is modelled as an explicit capability token rather than ambient
state: restricted store operations require a live token, and the token is
revoked when the guarded block exits, whatever the outcome.
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)


class PrivilegeToken:
    """Capability token granting unrestricted store access while active.

    Example:
        >>> with elevated_scope("bootstrap") as token:
        ...     store.create_path(path, folder, leaf, token=token)
        >>> token.active
        False
    """

    def __init__(self, purpose: str):
        self.token_id = uuid.uuid4().hex
        self.purpose = purpose
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def revoke(self) -> None:
        self._active = False

    def __repr__(self) -> str:
        state = "active" if self._active else "revoked"
        return f"PrivilegeToken(purpose={self.purpose!r}, {state})"


@contextmanager
def elevated_scope(purpose: str = "unspecified") -> Iterator[PrivilegeToken]:
    """Grant a privilege token for the duration of a with-block.

    Args:
        purpose: Short description recorded for logging

    Yields:
        An active PrivilegeToken, revoked on exit
    """
    token = PrivilegeToken(purpose)
    logger.debug(f"Privilege elevation granted ({purpose})")
    try:
        yield token
    finally:
        token.revoke()
        logger.debug(f"Privilege elevation revoked ({purpose})")


def is_privileged(token) -> bool:
    """Return True when token is a live PrivilegeToken."""
    return isinstance(token, PrivilegeToken) and token.active
