"""Tests for the flag stores."""

from __future__ import annotations

from pathlib import Path

import pytest

from neomama import db
from neomama.storage import TRUE, FlagKey, MemoryFlagStore, SqliteFlagStore, is_set


class TestIsSet:
    @pytest.mark.parametrize(("value", "expected"), [(None, False), ("", False), (TRUE, True), ("yes", True)])
    def test_presence(self, value, expected: bool) -> None:
        assert is_set(value) is expected


class TestMemoryFlagStore:
    def test_get_set(self) -> None:
        store = MemoryFlagStore()
        assert store.get(FlagKey.USER_TYPE) is None
        store.set(FlagKey.USER_TYPE, "provider")
        assert store.get(FlagKey.USER_TYPE) == "provider"

    def test_initial_is_copied(self) -> None:
        initial = {FlagKey.HAS_COMPLETED_ONBOARDING: TRUE}
        store = MemoryFlagStore(initial)
        store.clear()
        assert initial == {FlagKey.HAS_COMPLETED_ONBOARDING: TRUE}
        assert store.as_dict() == {}


class TestSqliteFlagStore:
    def test_roundtrip(self, tmp_path: Path) -> None:
        conn = db.get_connection(db_path=tmp_path / "flags.db")
        store = SqliteFlagStore(conn)
        store.set(FlagKey.HAS_COMPLETED_ONBOARDING, TRUE)
        assert store.get(FlagKey.HAS_COMPLETED_ONBOARDING) == TRUE
        assert store.as_dict() == {FlagKey.HAS_COMPLETED_ONBOARDING: TRUE}
        store.clear()
        assert store.get(FlagKey.HAS_COMPLETED_ONBOARDING) is None
        conn.close()
