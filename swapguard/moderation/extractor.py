"""Flag extractor -- applies the pattern catalog to a message.

Matching runs on a lower-cased copy of the text; matched text and review
context are sliced from the original so reviewers see the sender's casing.
Within one category a span that overlaps an already flagged span is not
flagged again, so "call me at 555-123-4567" yields a single phone flag.
"""

from __future__ import annotations

import logging
from typing import Iterable

from swapguard.moderation.catalog import DEFAULT_CATALOG, Matcher, PatternCatalog
from swapguard.moderation.models import Category, ModerationFlag

log = logging.getLogger("swapguard.extractor")

DEFAULT_CONTEXT_WINDOW = 20

# Known-benign matches per category. Compared exactly, after lower-casing
# and stripping trailing punctuation.
FALSE_POSITIVES: dict[Category, frozenset[str]] = {
    Category.SOCIAL_MEDIA: frozenset(
        {"@mention", "@example", "@all", "@here", "@everyone", "@noon", "@home"}
    ),
}

_TRAILING = ".,;:!?"


def normalize_case(text: str) -> str:
    """Lower-case *text* without changing its length.

    A few code points lower-case to more than one character; those are kept
    as-is so offsets in the normalized copy index the original.
    """
    chars = []
    for ch in text:
        lowered = ch.lower()
        chars.append(lowered if len(lowered) == 1 else ch)
    return "".join(chars)


def scan(matcher: Matcher, text: str) -> list[tuple[int, int]]:
    """Run one matcher, treating any failure as "no match"."""
    try:
        return list(matcher.find(text))
    except Exception:
        log.warning(
            "Matcher %s/%r failed; skipping it for this message",
            matcher.category.value,
            matcher.label,
            exc_info=True,
        )
        return []


def context_window(text: str, start: int, end: int, window: int = DEFAULT_CONTEXT_WINDOW) -> str:
    return text[max(0, start - window) : min(len(text), end + window)]


def is_false_positive(
    matched_text: str,
    category: Category,
    allowlist: dict[Category, frozenset[str]] | None = None,
) -> bool:
    """Check a candidate against the documented false positives for its category."""
    benign = (allowlist if allowlist is not None else FALSE_POSITIVES).get(category)
    if not benign:
        return False
    return matched_text.lower().rstrip(_TRAILING) in benign


def _overlaps(start: int, end: int, taken: Iterable[tuple[int, int]]) -> bool:
    return any(start < t_end and t_start < end for t_start, t_end in taken)


class FlagExtractor:
    """Turns a message into an ordered list of moderation flags."""

    def __init__(
        self,
        catalog: PatternCatalog = DEFAULT_CATALOG,
        context: int = DEFAULT_CONTEXT_WINDOW,
        allowed_handles: Iterable[str] = (),
    ) -> None:
        if context < 0:
            raise ValueError(f"context window must be >= 0, got {context}")
        self.catalog = catalog
        self.context = context

        handles = {f"@{catalog.platform_name}"}
        for handle in allowed_handles:
            handle = handle.strip().lower()
            if handle:
                handles.add(handle if handle.startswith("@") else f"@{handle}")

        self.allowlist = dict(FALSE_POSITIVES)
        self.allowlist[Category.SOCIAL_MEDIA] = FALSE_POSITIVES[Category.SOCIAL_MEDIA] | handles

    def extract(self, text: str) -> list[ModerationFlag]:
        """Flag every catalog match in *text*, in detection order."""
        if not text or text.isspace():
            return []

        normalized = normalize_case(text)
        flags: list[ModerationFlag] = []

        for category in self.catalog.categories:
            taken: list[tuple[int, int]] = []
            for matcher in self.catalog.for_category(category):
                for start, end in scan(matcher, normalized):
                    if start == end or _overlaps(start, end, taken):
                        continue
                    matched = text[start:end]
                    if is_false_positive(matched, category, self.allowlist):
                        log.debug("Suppressed %s false positive %r", category.value, matched)
                        continue
                    taken.append((start, end))
                    flags.append(
                        ModerationFlag(
                            category=category,
                            severity=matcher.severity,
                            matched_text=matched,
                            context=context_window(text, start, end, self.context),
                            start=start,
                            end=end,
                        )
                    )
                    log.debug("Flag %s/%s via %r", category.value, matcher.severity.value, matcher.label)

        return flags


_DEFAULT_EXTRACTOR = FlagExtractor()


def extract_flags(text: str) -> list[ModerationFlag]:
    """Extract flags with the default catalog and context window."""
    return _DEFAULT_EXTRACTOR.extract(text)
