"""Persisted routing flags.

The navigator never touches storage directly; it is handed a ``FlagStore``
with just ``get`` and ``set``.  Two stores are provided: an in-memory one
and one backed by the ``flags`` table of the application database.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional, Protocol

from neomama import db

log = logging.getLogger(__name__)


class FlagKey:
    """Keys of the persisted flags."""

    USER_TYPE = "userType"
    HAS_COMPLETED_ONBOARDING = "hasCompletedOnboarding"
    HAS_COMPLETED_PROVIDER_ONBOARDING = "hasCompletedProviderOnboarding"
    USER_DATA = "userData"
    PROVIDER_DATA = "providerData"


TRUE = "true"


class FlagStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


def is_set(value: Optional[str]) -> bool:
    """Absent and empty values both count as "unset"."""
    return bool(value)


class MemoryFlagStore:
    """Dict-backed store, mostly for tests and throwaway sessions."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        log.debug("flag %s = %r", key, value)
        self._data[key] = value

    def clear(self) -> None:
        self._data.clear()

    def as_dict(self) -> dict[str, str]:
        return dict(self._data)


class SqliteFlagStore:
    """Flags stored in the application database; writes commit immediately."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def get(self, key: str) -> Optional[str]:
        return db.get_flag(self.conn, key)

    def set(self, key: str, value: str) -> None:
        log.debug("flag %s = %r", key, value)
        db.set_flag(self.conn, key, value)

    def clear(self) -> None:
        db.clear_flags(self.conn)

    def as_dict(self) -> dict[str, str]:
        return db.list_flags(self.conn)
