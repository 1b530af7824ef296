"""Postnatal mental-health self-check.

The questionnaire is an adapted **Edinburgh Postnatal Depression Scale
(EPDS)**: eight statements about the past seven days, each answered with one
of four options worth 0-3 points.  Several items are reverse-ordered, so the
point value travels with the option rather than with its position.  The
total (0-24) is banded into low / moderate / high.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from neomama.models import AssessmentResultCreate, AssessmentType

# ---------------------------------------------------------------------------
# Questionnaire
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EpdsItem:
    """One statement and its scored answer options, in display order."""

    id: str
    text: str
    options: tuple[tuple[int, str], ...]

    def option_value(self, position: int) -> int:
        """Score of the option at 1-based display *position*."""
        if not 1 <= position <= len(self.options):
            raise ValueError(f"choose an option between 1 and {len(self.options)}")
        return self.options[position - 1][0]


EPDS_ITEMS: list[EpdsItem] = [
    EpdsItem(
        "laugh",
        "I have been able to laugh and see the funny side of things",
        (
            (0, "As much as I always could"),
            (1, "Not quite so much now"),
            (2, "Definitely not so much now"),
            (3, "Not at all"),
        ),
    ),
    EpdsItem(
        "enjoyment",
        "I have looked forward with enjoyment to things",
        (
            (0, "As much as I ever did"),
            (1, "Rather less than I used to"),
            (2, "Definitely less than I used to"),
            (3, "Hardly at all"),
        ),
    ),
    EpdsItem(
        "blame",
        "I have blamed myself unnecessarily when things went wrong",
        (
            (3, "Yes, most of the time"),
            (2, "Yes, some of the time"),
            (1, "Not very often"),
            (0, "No, never"),
        ),
    ),
    EpdsItem(
        "anxiety",
        "I have been anxious or worried for no good reason",
        (
            (0, "No, not at all"),
            (1, "Hardly ever"),
            (2, "Yes, sometimes"),
            (3, "Yes, very often"),
        ),
    ),
    EpdsItem(
        "scared",
        "I have felt scared or panicky for no very good reason",
        (
            (3, "Yes, quite a lot"),
            (2, "Yes, sometimes"),
            (1, "No, not much"),
            (0, "No, not at all"),
        ),
    ),
    EpdsItem(
        "overwhelmed",
        "Things have been getting on top of me",
        (
            (3, "Yes, most of the time I haven't been able to cope"),
            (2, "Yes, sometimes I haven't been coping as well"),
            (1, "No, most of the time I have coped quite well"),
            (0, "No, I have been coping as well as ever"),
        ),
    ),
    EpdsItem(
        "sleep",
        "I have been so unhappy that I have had difficulty sleeping",
        (
            (3, "Yes, most of the time"),
            (2, "Yes, sometimes"),
            (1, "Not very often"),
            (0, "No, not at all"),
        ),
    ),
    EpdsItem(
        "sadness",
        "I have felt sad or miserable",
        (
            (3, "Yes, most of the time"),
            (2, "Yes, quite often"),
            (1, "Not very often"),
            (0, "No, not at all"),
        ),
    ),
]

EPDS_ITEMS_BY_ID: dict[str, EpdsItem] = {item.id: item for item in EPDS_ITEMS}

EPDS_MAX_PER_ITEM = 3
EPDS_LOW_MAX = 8
EPDS_MODERATE_MAX = 12


def epds_max_score() -> int:
    """Maximum possible EPDS total score."""
    return len(EPDS_ITEMS) * EPDS_MAX_PER_ITEM


def score_epds(answers: dict[str, int]) -> AssessmentResultCreate:
    """Score a (possibly partial) EPDS questionnaire.

    Parameters
    ----------
    answers:
        Mapping of item id -> points (0-3).  Unanswered items add nothing.

    Returns
    -------
    AssessmentResultCreate ready to be saved to the database.
    """
    for item_id, value in answers.items():
        if item_id not in EPDS_ITEMS_BY_ID:
            raise ValueError(f"unknown EPDS item {item_id!r}")
        if not 0 <= value <= EPDS_MAX_PER_ITEM:
            raise ValueError(f"answer for {item_id!r} must be 0-{EPDS_MAX_PER_ITEM}")

    return AssessmentResultCreate(
        assessment_type=AssessmentType.EPDS,
        score=sum(answers.values()),
        max_score=epds_max_score(),
        item_scores=dict(answers),
    )


@dataclass(frozen=True)
class EpdsInterpretation:
    level: str
    title: str
    description: str


def interpret_epds(score: int) -> EpdsInterpretation:
    """Band an EPDS total into low / moderate / high."""
    if score <= EPDS_LOW_MAX:
        return EpdsInterpretation(
            "low",
            "You're doing well, Mama!",
            "Your responses suggest you're managing well emotionally. "
            "Keep taking care of yourself.",
        )
    if score <= EPDS_MODERATE_MAX:
        return EpdsInterpretation(
            "moderate",
            "Consider reaching out for support",
            "You may be experiencing some emotional challenges. "
            "Talking to someone can help.",
        )
    return EpdsInterpretation(
        "high",
        "Please seek professional support",
        "Your responses suggest you may benefit from professional mental "
        "health support.",
    )


# ---------------------------------------------------------------------------
# Relaxation sessions offered after the check
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RelaxationSession:
    id: str
    title: str
    duration: str
    type: str  # breathing | meditation | affirmation
    description: str
    cultural_context: str


RELAXATION_SESSIONS: list[RelaxationSession] = [
    RelaxationSession(
        "1",
        "Ubuntu Breathing",
        "5 min",
        "breathing",
        "Connect with your community through mindful breathing",
        "Based on Ubuntu philosophy - breathing in strength from your sisters",
    ),
    RelaxationSession(
        "2",
        "Mama's Meditation",
        "10 min",
        "meditation",
        "Guided meditation for expectant African mothers",
        "Drawing from ancestral wisdom and mother's intuition",
    ),
    RelaxationSession(
        "3",
        "Positive Affirmations",
        "3 min",
        "affirmation",
        "Uplifting affirmations in Swahili and English",
        "Celebrating the strength of African motherhood",
    ),
]


def get_relaxation_session(session_id: str) -> Optional[RelaxationSession]:
    for session in RELAXATION_SESSIONS:
        if session.id == session_id:
            return session
    return None


# ---------------------------------------------------------------------------
# Instruction text (shared by the CLI and any other front end)
# ---------------------------------------------------------------------------

EPDS_INSTRUCTIONS = (
    "This is a short emotional wellbeing check based on the Edinburgh "
    "Postnatal Depression Scale (EPDS).\n\n"
    "For each statement, choose the answer that comes closest to how you "
    "have felt in the past 7 days, not just how you feel today.\n\n"
    "There are 8 questions and it takes about 2 minutes. "
    "Your answers are stored locally and never shared."
)

SUPPORT_RESOURCES: list[tuple[str, str]] = [
    ("Kenya Mental Health Helpline", "0800 720 811 (Toll Free)"),
    ("Ubuntu Sister Support", "Connect with understanding mothers"),
    ("Local Support Groups", "Find mothers near you"),
]
