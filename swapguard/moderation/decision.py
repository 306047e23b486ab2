"""Decision engine -- turns flags and a risk score into a verdict."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from swapguard.moderation.models import Category, ModerationFlag, ModerationResult, Severity

BLOCK_THRESHOLD = 70

BLOCKED_MESSAGE = (
    "This message was blocked because it appears to contain contact information "
    "or payment details. For your safety, please keep all transactions on GadgetSwap."
)
FLAGGED_MESSAGE = "This message has been flagged for review."

FLAG_EXPLANATIONS: dict[Category, str] = {
    Category.PHONE: "Contains a phone number",
    Category.EMAIL: "Contains an email address",
    Category.PAYMENT_APP: "Mentions external payment apps (Venmo, PayPal, etc.)",
    Category.SOCIAL_MEDIA: "Contains social media reference",
    Category.EXTERNAL_LINK: "Contains external website link",
    Category.EVASION: "Contains language suggesting off-platform transaction",
    Category.CRYPTO: "Contains cryptocurrency reference",
}


@dataclass(frozen=True)
class UserMessages:
    """Sender-facing text for each non-clean outcome."""

    blocked: str = BLOCKED_MESSAGE
    flagged: str = FLAGGED_MESSAGE


def is_blocked(flags: Sequence[ModerationFlag], risk_score: int) -> bool:
    return risk_score >= BLOCK_THRESHOLD or any(f.severity == Severity.HIGH for f in flags)


def decide(
    flags: Sequence[ModerationFlag],
    risk_score: int,
    messages: UserMessages = UserMessages(),
) -> ModerationResult:
    """Build the final result for a message.

    High-severity categories block on their own; medium signals block once
    enough of them accumulate past ``BLOCK_THRESHOLD``.
    """
    flagged = len(flags) > 0
    blocked = is_blocked(flags, risk_score)

    if blocked:
        message = messages.blocked
    elif flagged:
        message = messages.flagged
    else:
        message = None

    return ModerationResult(
        flagged=flagged,
        flags=tuple(flags),
        risk_score=risk_score,
        blocked=blocked,
        message=message,
    )


def explain_flag(flag: ModerationFlag) -> str:
    """Human-readable explanation of why *flag* was raised."""
    return FLAG_EXPLANATIONS[flag.category]
