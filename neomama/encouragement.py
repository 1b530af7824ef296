"""Affirmations for expectant and new mothers.

Messages are loaded from ``AFFIRMATIONS.md`` at the project root.
Anyone can add, edit, or remove affirmations in that file.
If the file is missing, a small built-in fallback list is used.
"""

from __future__ import annotations

import random
from pathlib import Path

_FALLBACK_AFFIRMATIONS: list[str] = [
    "You are strong, Mama. Your body knows what to do.",
    "Asking for help is a sign of strength, not weakness.",
    "Every day you are growing a whole new life.",
    "Rest is part of caring for your baby.",
    "You are not alone. Your sisters walk this path with you.",
    "Mama, pole pole -- slowly, slowly, one day at a time.",
    "Your feelings are valid, whatever they are today.",
    "You are already a wonderful mother.",
]

_BREATHING_PROMPTS: list[str] = [
    "Breathe in for four counts, hold for four, out for six.",
    "Place a hand on your belly and breathe slowly with your baby.",
    "Drop your shoulders and take three slow breaths.",
    "Breathe in strength from your sisters; breathe out worry.",
]


def _load_affirmations() -> list[str]:
    """Parse bullet points from AFFIRMATIONS.md, falling back to built-in list."""
    md_path = Path(__file__).resolve().parent.parent / "AFFIRMATIONS.md"
    if not md_path.exists():
        return _FALLBACK_AFFIRMATIONS

    messages: list[str] = []
    for line in md_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if stripped.startswith("- "):
            msg = stripped[2:].strip()
            if msg:
                messages.append(msg)
    return messages if messages else _FALLBACK_AFFIRMATIONS


_AFFIRMATIONS: list[str] = _load_affirmations()


def get_affirmation() -> str:
    """Return a single random affirmation."""
    return random.choice(_AFFIRMATIONS)


def get_breathing_prompt() -> str:
    """Return a short breathing exercise prompt."""
    return random.choice(_BREATHING_PROMPTS)
