"""Local SQLite storage for flags, wellbeing checks, notes and sent messages.

Every reader returns pydantic models from :mod:`neomama.models`.
"""

from __future__ import annotations

import json
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from neomama.config import get_db_path as _config_get_db_path
from neomama.models import (
    AssessmentResult,
    AssessmentResultCreate,
    AssessmentType,
    Message,
    Note,
    NoteCreate,
)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS flags (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS assessments (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    type            TEXT    NOT NULL,
    score           INTEGER NOT NULL,
    max_score       INTEGER NOT NULL,
    item_scores     TEXT    NOT NULL DEFAULT '{}',
    taken_at        TEXT    NOT NULL
);

CREATE TABLE IF NOT EXISTS notes (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    text        TEXT    NOT NULL,
    date        TEXT    NOT NULL,
    category    TEXT    NOT NULL DEFAULT 'health',
    created_at  TEXT    NOT NULL
);

CREATE TABLE IF NOT EXISTS messages (
    id           TEXT PRIMARY KEY,
    chat_id      TEXT NOT NULL,
    sender_id    TEXT NOT NULL,
    sender_name  TEXT NOT NULL,
    text         TEXT NOT NULL,
    timestamp    TEXT NOT NULL
);
"""


def _get_db_path() -> Path:
    """Database file named in the config."""
    return _config_get_db_path()


def get_connection(db_path: Optional[Path] = None) -> sqlite3.Connection:
    """Connect to *db_path* (default: the configured file), creating tables as needed."""
    path = db_path or _get_db_path()
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.executescript(_SCHEMA)
    return conn


# ---------------------------------------------------------------------------
# Flags
# ---------------------------------------------------------------------------


def get_flag(conn: sqlite3.Connection, key: str) -> Optional[str]:
    """Return the stored value for *key*, or None."""
    row = conn.execute("SELECT value FROM flags WHERE key = ?", (key,)).fetchone()
    return row["value"] if row else None


def set_flag(conn: sqlite3.Connection, key: str, value: str) -> None:
    """Insert or overwrite a flag."""
    conn.execute(
        """INSERT INTO flags (key, value) VALUES (?, ?)
           ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
        (key, value),
    )
    conn.commit()


def list_flags(conn: sqlite3.Connection) -> dict[str, str]:
    """All stored flags, ordered by key."""
    rows = conn.execute("SELECT key, value FROM flags ORDER BY key").fetchall()
    return {r["key"]: r["value"] for r in rows}


def clear_flags(conn: sqlite3.Connection) -> None:
    conn.execute("DELETE FROM flags")
    conn.commit()


# ---------------------------------------------------------------------------
# Wellbeing checks
# ---------------------------------------------------------------------------


def _row_to_assessment(row: sqlite3.Row) -> AssessmentResult:
    return AssessmentResult(
        id=row["id"],
        assessment_type=row["type"],
        score=row["score"],
        max_score=row["max_score"],
        item_scores=json.loads(row["item_scores"]),
        taken_at=row["taken_at"],
    )


def save_assessment(
    conn: sqlite3.Connection,
    result_in: AssessmentResultCreate,
    taken_at: Optional[datetime] = None,
) -> AssessmentResult:
    """Store a scored check (stamped now unless *taken_at* is given)."""
    stamp = (taken_at or datetime.now()).isoformat()
    cur = conn.execute(
        "INSERT INTO assessments (type, score, max_score, item_scores, taken_at) "
        "VALUES (?, ?, ?, ?, ?)",
        (
            result_in.assessment_type.value,
            result_in.score,
            result_in.max_score,
            json.dumps(result_in.item_scores),
            stamp,
        ),
    )
    conn.commit()
    stored = conn.execute("SELECT * FROM assessments WHERE id = ?", (cur.lastrowid,))
    return _row_to_assessment(stored.fetchone())


def list_assessments(
    conn: sqlite3.Connection,
    assessment_type: Optional[AssessmentType] = None,
    limit: int = 20,
) -> list[AssessmentResult]:
    """Newest checks first, at most *limit* of them."""
    where, args = "", ()
    if assessment_type is not None:
        where, args = "WHERE type = ?", (assessment_type.value,)
    rows = conn.execute(
        f"SELECT * FROM assessments {where} ORDER BY taken_at DESC, id DESC LIMIT ?",
        (*args, limit),
    ).fetchall()
    return [_row_to_assessment(r) for r in rows]


# ---------------------------------------------------------------------------
# Calendar notes
# ---------------------------------------------------------------------------


def _row_to_note(row: sqlite3.Row) -> Note:
    return Note(
        id=row["id"],
        text=row["text"],
        date=date.fromisoformat(row["date"]),
        category=row["category"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


def add_note(conn: sqlite3.Connection, note_in: NoteCreate) -> Note:
    """Insert a new note and return it as a model."""
    cur = conn.execute(
        "INSERT INTO notes (text, date, category, created_at) VALUES (?, ?, ?, ?)",
        (
            note_in.text,
            note_in.date.isoformat(),
            note_in.category,
            datetime.now().isoformat(),
        ),
    )
    conn.commit()
    row = conn.execute("SELECT * FROM notes WHERE id = ?", (cur.lastrowid,)).fetchone()
    return _row_to_note(row)


def list_notes(
    conn: sqlite3.Connection, on_date: Optional[date] = None
) -> list[Note]:
    """List notes, optionally for a single day, oldest date first."""
    query = "SELECT * FROM notes"
    params: list[str] = []
    if on_date is not None:
        query += " WHERE date = ?"
        params.append(on_date.isoformat())
    query += " ORDER BY date ASC, id ASC"
    rows = conn.execute(query, params).fetchall()
    return [_row_to_note(r) for r in rows]


# ---------------------------------------------------------------------------
# Chat messages
# ---------------------------------------------------------------------------


def _row_to_message(row: sqlite3.Row) -> Message:
    return Message(
        id=row["id"],
        chat_id=row["chat_id"],
        sender_id=row["sender_id"],
        sender_name=row["sender_name"],
        text=row["text"],
        timestamp=datetime.fromisoformat(row["timestamp"]),
    )


def save_message(conn: sqlite3.Connection, message: Message) -> Message:
    """Persist a sent message."""
    conn.execute(
        "INSERT INTO messages (id, chat_id, sender_id, sender_name, text, timestamp) "
        "VALUES (?, ?, ?, ?, ?, ?)",
        (
            message.id,
            message.chat_id,
            message.sender_id,
            message.sender_name,
            message.text,
            message.timestamp.isoformat(),
        ),
    )
    conn.commit()
    return message


def list_messages(conn: sqlite3.Connection, chat_id: str) -> list[Message]:
    """Messages sent in a conversation, oldest first."""
    rows = conn.execute(
        "SELECT * FROM messages WHERE chat_id = ? ORDER BY timestamp ASC, rowid ASC",
        (chat_id,),
    ).fetchall()
    return [_row_to_message(r) for r in rows]
