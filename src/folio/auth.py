"""Authentication provider interface.

The wallet provider lives outside this package; folio only needs to know
whether someone is signed in and under which address, to namespace the
content store.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from folio.content.store import storage_key

logger = logging.getLogger(__name__)


@runtime_checkable
class AuthProvider(Protocol):
    """What folio expects from a wallet authentication provider."""

    @property
    def is_authenticated(self) -> bool: ...

    @property
    def user_address(self) -> str | None: ...

    async def connect_wallet(self) -> None: ...

    async def disconnect_wallet(self) -> None: ...


class StaticAuthProvider:
    """In-process provider with a fixed address, used by the CLI and tests."""

    def __init__(self, address: str | None = None) -> None:
        self._address = address
        self._connected = address is not None

    @property
    def is_authenticated(self) -> bool:
        return self._connected

    @property
    def user_address(self) -> str | None:
        return self._address if self._connected else None

    async def connect_wallet(self) -> None:
        if self._address is None:
            raise RuntimeError("No wallet address configured")
        self._connected = True
        logger.info("Connected wallet %s", self._address)

    async def disconnect_wallet(self) -> None:
        self._connected = False
        logger.info("Disconnected wallet")


def key_for(provider: AuthProvider) -> str:
    """Content store key for the provider's current identity."""
    if provider.is_authenticated:
        return storage_key(provider.user_address)
    return storage_key(None)
