"""Tests for the decision engine."""

from swapguard.moderation.decision import (
    BLOCK_THRESHOLD,
    BLOCKED_MESSAGE,
    FLAGGED_MESSAGE,
    UserMessages,
    decide,
    explain_flag,
)
from swapguard.moderation.models import Category, ModerationFlag, Severity


def _flag(category: Category, severity: Severity) -> ModerationFlag:
    return ModerationFlag(category=category, severity=severity, matched_text="x", context="x")


def test_clean_verdict():
    result = decide([], 0)
    assert not result.flagged
    assert not result.blocked
    assert result.risk_score == 0
    assert result.message is None
    assert result.flags == ()


def test_medium_flag_is_flagged_not_blocked():
    result = decide([_flag(Category.EXTERNAL_LINK, Severity.MEDIUM)], 20)
    assert result.flagged
    assert not result.blocked
    assert result.message == FLAGGED_MESSAGE


def test_high_flag_blocks_regardless_of_score():
    result = decide([_flag(Category.PHONE, Severity.HIGH)], 0)
    assert result.blocked
    assert result.message == BLOCKED_MESSAGE


def test_threshold_blocks_medium_accumulation():
    flags = [_flag(Category.SOCIAL_MEDIA, Severity.MEDIUM)] * 4
    assert decide(flags, 80).blocked
    assert decide(flags[:3], BLOCK_THRESHOLD - 10).blocked is False
    assert decide(flags[:3], BLOCK_THRESHOLD).blocked


def test_custom_messages():
    messages = UserMessages(blocked="nope", flagged="hmm")
    assert decide([_flag(Category.EVASION, Severity.HIGH)], 60, messages).message == "nope"
    assert decide([_flag(Category.CRYPTO, Severity.MEDIUM)], 20, messages).message == "hmm"


def test_explain_flag():
    assert explain_flag(_flag(Category.PHONE, Severity.HIGH)) == "Contains a phone number"
    for category in Category:
        assert explain_flag(_flag(category, Severity.MEDIUM))
