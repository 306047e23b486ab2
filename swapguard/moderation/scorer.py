"""Risk scorer -- sums per-flag weights into a 0-100 risk score.

Weights are fixed: stored scores of past messages were computed with them,
and changing a value reclassifies that history.
"""

from __future__ import annotations

from typing import Iterable

from swapguard.moderation.models import Category, ModerationFlag, Severity

MAX_SCORE = 100

SEVERITY_WEIGHTS: dict[Severity, int] = {
    Severity.HIGH: 35,
    Severity.MEDIUM: 20,
    Severity.LOW: 10,
}

CATEGORY_BONUSES: dict[Category, int] = {
    Category.PHONE: 15,
    Category.EMAIL: 15,
    Category.PAYMENT_APP: 20,
    Category.EVASION: 25,
}


def flag_weight(flag: ModerationFlag) -> int:
    """Points a single flag contributes before clamping."""
    return SEVERITY_WEIGHTS[flag.severity] + CATEGORY_BONUSES.get(flag.category, 0)


def score_flags(flags: Iterable[ModerationFlag]) -> int:
    """Sum the weights of all flags and clamp to ``MAX_SCORE``.

    Flags are independent: two phone numbers count twice.
    """
    total = sum(flag_weight(f) for f in flags)
    return max(0, min(MAX_SCORE, total))
