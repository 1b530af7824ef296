"""Tests for community messaging helpers."""

from __future__ import annotations

from datetime import datetime, timedelta

from neomama.chat import (
    CHATS,
    chat_info,
    format_timestamp,
    get_chat,
    initial_messages,
    new_message,
    search_chats,
    unread_total,
)


class TestChatList:
    def test_search_by_name_or_message(self) -> None:
        assert [c.id for c in search_chats("faith")] == ["2"]
        assert [c.id for c in search_chats("ULTRASOUND")] == ["3"]

    def test_empty_query_returns_all(self) -> None:
        assert len(search_chats("")) == len(CHATS)

    def test_unread_total(self) -> None:
        assert unread_total() == 4

    def test_get_chat(self) -> None:
        assert get_chat("5") is not None
        assert get_chat("42") is None


class TestChatInfo:
    def test_known_direct_chat(self) -> None:
        info = chat_info("2")
        assert info.name == "Faith Wanjiru"
        assert not info.is_group
        assert info.is_online

    def test_group_chat(self) -> None:
        info = chat_info("1")
        assert info.name == "Sister Circle - Dec 2024"
        assert info.is_group

    def test_any_id_opens(self) -> None:
        info = chat_info("42")
        assert info.id == "42"
        assert info.name == "Sister Circle - Dec 2024"
        assert not info.is_online


class TestMessages:
    def test_initial_exchange(self) -> None:
        now = datetime(2025, 1, 1, 12, 0)
        messages = initial_messages(chat_info("4"), now)
        assert len(messages) == 3
        assert [m.is_me for m in messages] == [False, True, False]
        assert messages[0].sender_name == "Grace Muthoni"
        assert messages[0].timestamp < messages[-1].timestamp < now

    def test_new_message(self) -> None:
        message = new_message("2", "Asante sana!")
        assert message is not None
        assert message.is_me
        assert message.chat_id == "2"

    def test_blank_message_rejected(self) -> None:
        assert new_message("2", "   ") is None

    def test_ids_are_unique(self) -> None:
        a = new_message("2", "one")
        b = new_message("2", "two")
        assert a is not None and b is not None
        assert a.id != b.id


class TestFormatTimestamp:
    def test_relative(self) -> None:
        now = datetime(2025, 1, 2, 12, 0)
        assert format_timestamp(now - timedelta(seconds=30), now) == "Just now"
        assert format_timestamp(now - timedelta(minutes=5), now) == "5m ago"
        assert format_timestamp(now - timedelta(hours=3), now) == "3h ago"
        assert format_timestamp(now - timedelta(days=2), now) == "2024-12-31"
