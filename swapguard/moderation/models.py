"""Data models for the message moderation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Category(Enum):
    """Kind of off-platform signal a flag represents."""

    PHONE = "phone"
    EMAIL = "email"
    PAYMENT_APP = "payment_app"
    SOCIAL_MEDIA = "social_media"
    EXTERNAL_LINK = "external_link"
    EVASION = "evasion"
    CRYPTO = "crypto"


class Severity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class ModerationFlag:
    """A single detected occurrence inside a message."""

    category: Category
    severity: Severity
    matched_text: str
    context: str  # surrounding original-case text for reviewers
    start: int = 0
    end: int = 0

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "matched_text": self.matched_text,
            "context": self.context,
        }


@dataclass(frozen=True)
class ModerationResult:
    """Verdict for one message.

    ``flagged`` is true exactly when ``flags`` is non-empty, except for
    results produced by the failure policy: those carry ``error``, have no
    flags, and are flagged so the message still reaches review.
    """

    flagged: bool
    flags: tuple[ModerationFlag, ...] = field(default_factory=tuple)
    risk_score: int = 0
    blocked: bool = False
    message: Optional[str] = None
    error: Optional[str] = None  # set only by the failure policy

    @property
    def needs_review(self) -> bool:
        return self.flagged or self.blocked

    @property
    def categories(self) -> list[Category]:
        seen: list[Category] = []
        for flag in self.flags:
            if flag.category not in seen:
                seen.append(flag.category)
        return seen

    def to_dict(self) -> dict:
        data = {
            "flagged": self.flagged,
            "blocked": self.blocked,
            "risk_score": self.risk_score,
            "message": self.message,
            "flags": [f.to_dict() for f in self.flags],
        }
        if self.error:
            data["error"] = self.error
        return data
