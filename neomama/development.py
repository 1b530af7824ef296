"""Week-by-week baby development and pregnancy-stage helpers."""

from __future__ import annotations

import calendar
from datetime import date
from typing import Optional

from neomama.models import WeekDevelopment

FULL_TERM_WEEKS = 40

_WEEKS: list[WeekDevelopment] = [
    WeekDevelopment(
        week=4, baby_size="poppy seed", baby_weight="<1g", baby_height="2mm",
        milestone="Neural tube developing",
        details="Your baby is just a tiny embryo, but amazing things are already happening!",
        development_highlights=["Heart begins to form", "Neural tube closes", "Placenta starts developing"],
        mama_body=["Missed period", "Possible light spotting", "Breast tenderness"],
        trimester=1,
    ),
    WeekDevelopment(
        week=8, baby_size="raspberry", baby_weight="1g", baby_height="1.6cm",
        milestone="Fingers and toes forming",
        details="Baby is moving constantly, though you can't feel it yet. All major organs are developing.",
        development_highlights=["Tiny fingers and toes", "Heart beating strongly", "Facial features emerging"],
        mama_body=["Morning sickness may peak", "Fatigue", "Food aversions"],
        trimester=1,
    ),
    WeekDevelopment(
        week=12, baby_size="lime", baby_weight="14g", baby_height="5.4cm",
        milestone="All major organs formed",
        details="Your baby can open and close fingers, and may start to make sucking motions.",
        development_highlights=["Reflexes developing", "Vocal cords forming", "Intestines in place"],
        mama_body=["Energy returning", "Morning sickness easing", "Baby bump starting"],
        trimester=1,
    ),
    WeekDevelopment(
        week=16, baby_size="avocado", baby_weight="100g", baby_height="11.6cm",
        milestone="Baby can hear your voice",
        details="Your baby's eyes can move and they may be able to hear sounds from outside.",
        development_highlights=["Hearing developing", "Facial expressions", "Grip reflex"],
        mama_body=["Feeling baby move soon", "Glowing skin", "Growing bump"],
        trimester=2,
    ),
    WeekDevelopment(
        week=20, baby_size="banana", baby_weight="300g", baby_height="25.6cm",
        milestone="Halfway there!",
        details="You're at the halfway mark! Baby is very active and you can feel those movements.",
        development_highlights=["Swallowing amniotic fluid", "Producing meconium", "Sensory development"],
        mama_body=["Regular baby movements", "Round ligament pain", "Growing appetite"],
        trimester=2,
    ),
    WeekDevelopment(
        week=24, baby_size="corn", baby_weight="600g", baby_height="30cm",
        milestone="Baby can hear and respond to sounds",
        details="Baby is viable now! Their lungs are developing and they're gaining weight.",
        development_highlights=["Lung development", "Sleep-wake cycles", "Taste buds working"],
        mama_body=["Braxton Hicks contractions", "Back pain", "Glucose screening"],
        trimester=2,
    ),
    WeekDevelopment(
        week=28, baby_size="eggplant", baby_weight="1000g", baby_height="37.6cm",
        milestone="Eyes can open and close",
        details="Welcome to the third trimester! Baby is getting stronger every day.",
        development_highlights=["Eyes opening", "Brain development rapid", "Can dream"],
        mama_body=["Feeling heavier", "Shortness of breath", "Frequent urination"],
        trimester=3,
    ),
    WeekDevelopment(
        week=32, baby_size="butternut squash", baby_weight="1700g", baby_height="42cm",
        milestone="Practicing breathing movements",
        details="Baby is perfecting essential skills like breathing, sucking, and swallowing.",
        development_highlights=["Breathing practice", "Soft bones hardening", "Fat accumulating"],
        mama_body=["Braxton Hicks increasing", "Nesting instinct", "Difficulty sleeping"],
        trimester=3,
    ),
    WeekDevelopment(
        week=36, baby_size="papaya", baby_weight="2500g", baby_height="47cm",
        milestone="Baby is almost ready",
        details='Your baby is now considered "early term" and could arrive any day now!',
        development_highlights=["Lungs nearly mature", "Gaining 30g per day", "Settling into position"],
        mama_body=["Pelvic pressure", "Baby dropping", "Weekly checkups"],
        trimester=3,
    ),
    WeekDevelopment(
        week=40, baby_size="watermelon", baby_weight="3400g", baby_height="51cm",
        milestone="Due date!",
        details="Your baby is fully developed and ready to meet you! The wait is almost over.",
        development_highlights=["Fully developed", "All systems go", "Ready for birth"],
        mama_body=["Ready for labor", "Excited and nervous", "Watching for signs"],
        trimester=3,
    ),
]

WEEKLY_DEVELOPMENT: dict[int, WeekDevelopment] = {w.week: w for w in _WEEKS}
MILESTONE_WEEKS: list[int] = sorted(WEEKLY_DEVELOPMENT)


def get_week_data(week: int) -> WeekDevelopment:
    """Milestone data for the closest tabulated week at or below *week*.

    Weeks before the first entry fall back to the first entry.
    """
    closest = MILESTONE_WEEKS[0]
    for available in MILESTONE_WEEKS:
        if available <= week:
            closest = available
        else:
            break
    return WEEKLY_DEVELOPMENT[closest]


def _first_index_at_or_above(week: int) -> int:
    for i, available in enumerate(MILESTONE_WEEKS):
        if available >= week:
            return i
    return -1


def previous_milestone_week(week: int) -> int:
    """Step back one table entry; stays put at the first entry."""
    if week <= MILESTONE_WEEKS[0]:
        return week
    idx = _first_index_at_or_above(week)
    if idx > 0:
        return MILESTONE_WEEKS[idx - 1]
    return week


def next_milestone_week(week: int) -> int:
    """Step forward one table entry; stays put at full term."""
    if week >= FULL_TERM_WEEKS:
        return week
    idx = _first_index_at_or_above(week)
    if 0 <= idx < len(MILESTONE_WEEKS) - 1:
        return MILESTONE_WEEKS[idx + 1]
    return week


def step_week(week: int, direction: str) -> int:
    """Move one week ``"prev"`` or ``"next"``, clamped to 1..40."""
    if direction == "prev" and week > 1:
        return week - 1
    if direction == "next" and week < FULL_TERM_WEEKS:
        return week + 1
    return week


def pregnancy_progress(week: int) -> float:
    """Percent of a 40-week term completed."""
    return week / FULL_TERM_WEEKS * 100


def days_until(due_date: date, today: Optional[date] = None) -> int:
    """Days left until *due_date*; never negative."""
    today = today or date.today()
    return max(0, (due_date - today).days)


def week_from_due_date(due_date: date, today: Optional[date] = None) -> int:
    """Estimate the current pregnancy week from a due date, clamped to 1..40."""
    weeks_left = days_until(due_date, today) // 7
    return min(FULL_TERM_WEEKS, max(1, FULL_TERM_WEEKS - weeks_left))


def calendar_grid(year: int, month: int) -> list[list[Optional[int]]]:
    """Monday-first month grid, padded with None before the 1st and after the last day."""
    cal = calendar.Calendar(firstweekday=calendar.MONDAY)
    return [[d or None for d in week] for week in cal.monthdayscalendar(year, month)]
