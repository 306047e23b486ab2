"""Off-platform message moderation.

Scans marketplace messages for attempts to move a deal off the platform:
- Pattern catalog: per-category matchers and their severities
- Extractor: catalog matches as reviewable flags, minus known false positives
- Scorer: weighted 0-100 risk score
- Decision: block / flag / allow verdict
- Redactor: phone and email masking for admin display

The engine that chains these stages lives in ``swapguard.moderation.engine``.
"""

from swapguard.moderation.catalog import CATALOG_VERSION, DEFAULT_CATALOG, PatternCatalog, build_catalog
from swapguard.moderation.decision import explain_flag
from swapguard.moderation.extractor import FlagExtractor, extract_flags
from swapguard.moderation.models import Category, ModerationFlag, ModerationResult, Severity
from swapguard.moderation.redactor import redact_message
from swapguard.moderation.scorer import score_flags

__all__ = [
    "CATALOG_VERSION",
    "DEFAULT_CATALOG",
    "PatternCatalog",
    "build_catalog",
    "explain_flag",
    "FlagExtractor",
    "extract_flags",
    "Category",
    "ModerationFlag",
    "ModerationResult",
    "Severity",
    "redact_message",
    "score_flags",
]
