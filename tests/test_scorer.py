"""Tests for the risk scorer."""

from swapguard.moderation.models import Category, ModerationFlag, Severity
from swapguard.moderation.scorer import MAX_SCORE, flag_weight, score_flags


def _flag(category: Category, severity: Severity) -> ModerationFlag:
    return ModerationFlag(category=category, severity=severity, matched_text="x", context="x")


def test_no_flags_scores_zero():
    assert score_flags([]) == 0


def test_weights_by_severity_and_category():
    assert flag_weight(_flag(Category.PHONE, Severity.HIGH)) == 50
    assert flag_weight(_flag(Category.EMAIL, Severity.HIGH)) == 50
    assert flag_weight(_flag(Category.PAYMENT_APP, Severity.HIGH)) == 55
    assert flag_weight(_flag(Category.EVASION, Severity.HIGH)) == 60
    assert flag_weight(_flag(Category.SOCIAL_MEDIA, Severity.MEDIUM)) == 20
    assert flag_weight(_flag(Category.EXTERNAL_LINK, Severity.MEDIUM)) == 20
    assert flag_weight(_flag(Category.CRYPTO, Severity.MEDIUM)) == 20
    assert flag_weight(_flag(Category.SOCIAL_MEDIA, Severity.LOW)) == 10


def test_flags_are_additive_not_deduplicated():
    flags = [_flag(Category.SOCIAL_MEDIA, Severity.MEDIUM), _flag(Category.SOCIAL_MEDIA, Severity.MEDIUM)]
    assert score_flags(flags) == 40
    flags.append(_flag(Category.CRYPTO, Severity.MEDIUM))
    assert score_flags(flags) == 60


def test_score_is_clamped():
    flags = [_flag(Category.PHONE, Severity.HIGH)] * 3
    assert score_flags(flags) == MAX_SCORE == 100


def test_score_is_monotonic():
    sequence = [
        _flag(Category.EXTERNAL_LINK, Severity.MEDIUM),
        _flag(Category.CRYPTO, Severity.LOW),
        _flag(Category.EMAIL, Severity.HIGH),
        _flag(Category.EVASION, Severity.HIGH),
        _flag(Category.SOCIAL_MEDIA, Severity.MEDIUM),
    ]
    scores = [score_flags(sequence[:n]) for n in range(len(sequence) + 1)]
    assert scores == sorted(scores)
    assert scores[-1] == 100
