"""Redactor -- masks phone numbers and email addresses for admin display.

This is a presentation helper for reviewers, not a security boundary.
Handles, links and payment-app names are left readable.
"""

from __future__ import annotations

from typing import Sequence

from swapguard.moderation.catalog import DEFAULT_CATALOG, Matcher, PatternCatalog
from swapguard.moderation.extractor import normalize_case, scan
from swapguard.moderation.models import Category

PHONE_PLACEHOLDER = "[PHONE REDACTED]"
EMAIL_PLACEHOLDER = "[EMAIL REDACTED]"


def _merged_spans(matchers: Sequence[Matcher], text: str) -> list[tuple[int, int]]:
    spans = sorted(span for m in matchers for span in scan(m, text) if span[0] < span[1])
    merged: list[tuple[int, int]] = []
    for start, end in spans:
        if merged and start < merged[-1][1]:
            merged[-1] = (merged[-1][0], max(end, merged[-1][1]))
        else:
            merged.append((start, end))
    return merged


def _mask(text: str, matchers: Sequence[Matcher], placeholder: str) -> str:
    spans = _merged_spans(matchers, normalize_case(text))
    if not spans:
        return text
    parts = []
    cursor = 0
    for start, end in spans:
        parts.append(text[cursor:start])
        parts.append(placeholder)
        cursor = end
    parts.append(text[cursor:])
    return "".join(parts)


def redact_message(text: str, catalog: PatternCatalog = DEFAULT_CATALOG) -> str:
    """Return a copy of *text* with phone numbers and emails replaced."""
    if not text:
        return text
    redacted = _mask(text, catalog.redaction_matchers(Category.PHONE), PHONE_PLACEHOLDER)
    return _mask(redacted, catalog.redaction_matchers(Category.EMAIL), EMAIL_PLACEHOLDER)
