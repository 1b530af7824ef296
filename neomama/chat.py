"""Community messaging: chat list, conversation headers and messages."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from typing import Optional

from neomama.models import Chat, ChatInfo, Message

ME = "me"

CHATS: list[Chat] = [
    Chat(
        id="1",
        name="Sister Circle - Dec 2024",
        last_message="Aisha: Anyone else feeling those strong kicks?",
        timestamp="2 min ago",
        unread_count=3,
        is_online=True,
        is_group=True,
    ),
    Chat(
        id="2",
        name="Faith Wanjiru",
        last_message="Thank you for the nutrition tips!",
        timestamp="15 min ago",
        unread_count=1,
        is_online=True,
        pregnancy_week=28,
        location="Nairobi",
    ),
    Chat(
        id="3",
        name="First-Time Mamas",
        last_message="Mary: Just had my first ultrasound!",
        timestamp="1 hour ago",
        is_group=True,
    ),
    Chat(
        id="4",
        name="Grace Muthoni",
        last_message="See you at the clinic tomorrow!",
        timestamp="3 hours ago",
        pregnancy_week=22,
        location="Kiambu",
    ),
    Chat(
        id="5",
        name="Mentor: Dr. Sarah",
        last_message="Remember to stay hydrated mama",
        timestamp="Yesterday",
    ),
]

SUGGESTED_SISTERS: list[dict[str, object]] = [
    {"id": "1", "name": "Amina Hassan", "week": 24, "location": "Mombasa"},
    {"id": "2", "name": "Lucy Atieno", "week": 26, "location": "Kisumu"},
    {"id": "3", "name": "Rose Njeri", "week": 25, "location": "Nakuru"},
]

AVAILABLE_MENTORS: list[dict[str, str]] = [
    {"id": "1", "name": "Dr. Sarah Kimani", "specialty": "Obstetrician"},
    {"id": "2", "name": "Midwife Jane", "specialty": "Certified Midwife"},
    {"id": "3", "name": "Mama Grace", "specialty": "Experienced Mother of 3"},
]


def search_chats(query: str, chats: Optional[list[Chat]] = None) -> list[Chat]:
    """Chats whose name or last message contains *query*, ignoring case."""
    chats = CHATS if chats is None else chats
    q = query.lower()
    return [c for c in chats if q in c.name.lower() or q in c.last_message.lower()]


def get_chat(chat_id: str) -> Optional[Chat]:
    for chat in CHATS:
        if chat.id == chat_id:
            return chat
    return None


def unread_total(chats: Optional[list[Chat]] = None) -> int:
    chats = CHATS if chats is None else chats
    return sum(c.unread_count for c in chats)


def chat_info(chat_id: str) -> ChatInfo:
    """Header shown at the top of an open conversation.

    Any id opens a conversation; ids not in the list get the group
    circle's name.
    """
    names = {"2": "Faith Wanjiru", "4": "Grace Muthoni"}
    return ChatInfo(
        id=chat_id,
        name=names.get(chat_id, "Sister Circle - Dec 2024"),
        is_group=chat_id in {"1", "3", "5"},
        is_online=chat_id in {"1", "2"},
    )


def initial_messages(info: ChatInfo, now: Optional[datetime] = None) -> list[Message]:
    """The greeting exchange every conversation opens with."""
    now = now or datetime.now()
    return [
        Message(
            id=f"{info.id}-seed-1",
            chat_id=info.id,
            sender_id="2",
            sender_name=info.name,
            text="Good morning, sister! How are you feeling today?",
            timestamp=now - timedelta(seconds=3600),
        ),
        Message(
            id=f"{info.id}-seed-2",
            chat_id=info.id,
            sender_id=ME,
            sender_name="You",
            text="Morning! I'm feeling much better. The ginger tea really helped!",
            timestamp=now - timedelta(seconds=3500),
        ),
        Message(
            id=f"{info.id}-seed-3",
            chat_id=info.id,
            sender_id="2",
            sender_name=info.name,
            text="That's wonderful! Remember to stay hydrated too",
            timestamp=now - timedelta(seconds=3400),
        ),
    ]


def new_message(chat_id: str, text: str) -> Optional[Message]:
    """Build an outgoing message, or None when *text* is blank."""
    if not text.strip():
        return None
    return Message(
        id=uuid.uuid4().hex,
        chat_id=chat_id,
        sender_id=ME,
        sender_name="You",
        text=text,
    )


def format_timestamp(ts: datetime, now: Optional[datetime] = None) -> str:
    """Relative time for recent messages, the date for older ones."""
    now = now or datetime.now()
    diff = (now - ts).total_seconds()
    minutes = int(diff // 60)
    hours = int(diff // 3600)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    return ts.date().isoformat()
