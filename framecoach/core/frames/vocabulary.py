"""
Substring vocabularies used to read frame-data text.

These are a deliberately lossy reading of frame notation: a field "matches"
an entry when the lowercased text contains the needle. Order matters; the
first matching entry wins, so longer or more specific needles come first
(``"crumple stun"`` must read as crumple, not stun).

Bump ``VOCABULARY_VERSION`` whenever an entry is added, removed or reordered.
"""

from __future__ import annotations

from enum import Enum
from typing import Final


VOCABULARY_VERSION: Final[str] = "2024.1"


class OutcomeTag(str, Enum):
    """Named (non-numeric) result of a move connecting."""

    LAUNCH = "launch"
    CRUMPLE = "crumple"
    KNOCKDOWN = "knockdown"
    STUN = "stun"


# (needle, tag) in priority order
OUTCOME_VOCABULARY: Final[tuple[tuple[str, OutcomeTag], ...]] = (
    ("launch", OutcomeTag.LAUNCH),
    ("crumple", OutcomeTag.CRUMPLE),
    ("knockdown", OutcomeTag.KNOCKDOWN),
    ("knocks down", OutcomeTag.KNOCKDOWN),
    ("knd", OutcomeTag.KNOCKDOWN),
    ("stun", OutcomeTag.STUN),
)

# Move properties that make a move worth knowing regardless of frames.
PROPERTY_VOCABULARY: Final[tuple[str, ...]] = (
    "homing",
    "heat",
    "power crush",
    "power-crush",
    "tornado",
    "balcony",
)


def match_outcome(text: str) -> OutcomeTag | None:
    """Return the first outcome tag whose needle occurs in ``text``."""
    lowered = text.lower()
    for needle, tag in OUTCOME_VOCABULARY:
        if needle in lowered:
            return tag
    return None


def match_property(text: str) -> str | None:
    """Return the first property needle found in ``text`` (move notes)."""
    lowered = text.lower()
    for needle in PROPERTY_VOCABULARY:
        if needle in lowered:
            return needle
    return None
