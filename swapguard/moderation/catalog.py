"""Pattern catalog -- the policy surface of the moderation engine.

Every signal the engine can raise is declared here as data: an ordered
table of matchers per category, each with the severity it carries.
Matchers run against a lower-cased copy of the message, so patterns are
written in lower case and compiled without ``re.IGNORECASE``.

The catalog is built once and never mutated; one instance can be shared
by any number of concurrent callers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

from swapguard.moderation.models import Category, Severity

CATALOG_VERSION = "1.0.0"

DEFAULT_PLATFORM_NAME = "gadgetswap"
DEFAULT_PLATFORM_DOMAIN = "gadgetswap.tech"

# Category processing order; flags are emitted in this order.
CATEGORY_ORDER: tuple[Category, ...] = (
    Category.PHONE,
    Category.EMAIL,
    Category.PAYMENT_APP,
    Category.SOCIAL_MEDIA,
    Category.EXTERNAL_LINK,
    Category.EVASION,
    Category.CRYPTO,
)

CATEGORY_SEVERITY: dict[Category, Severity] = {
    Category.PHONE: Severity.HIGH,
    Category.EMAIL: Severity.HIGH,
    Category.PAYMENT_APP: Severity.HIGH,
    Category.SOCIAL_MEDIA: Severity.MEDIUM,
    Category.EXTERNAL_LINK: Severity.MEDIUM,
    Category.EVASION: Severity.HIGH,
    Category.CRYPTO: Severity.MEDIUM,
}


@dataclass(frozen=True)
class MatcherDef:
    """Uncompiled catalog entry.

    ``<NAME>`` and ``<DOMAIN>`` placeholders are replaced with the escaped
    platform name and domain when the catalog is built.
    """

    label: str
    pattern: str
    redact: bool = False  # span is direct PII and is masked by the redactor


_DIGIT_WORD = r"(?:zero|oh|one|two|three|four|five|six|seven|eight|nine)"
_PAYMENT_APPS = r"(?:venmo|paypal|cash\s*app|zelle)"
# A domain ends at a path, port, query, closing bracket, punctuation or space.
# A dot only ends it when no further label follows.
_SITE_END = r"(?:[/:?#)\]>,;!'\"]|\.(?![a-z0-9-])|\s|$)"

PATTERN_TABLE: dict[Category, tuple[MatcherDef, ...]] = {
    Category.PHONE: (
        MatcherDef("separated digits", r"\b\d{3}[-.\s]?\d{3}[-.\s]?\d{4}\b", redact=True),
        MatcherDef("parenthesized area code", r"(?<!\w)\(\d{3}\)\s*\d{3}[-.\s]?\d{4}\b", redact=True),
        MatcherDef("bare digit run", r"\b\d{10,11}\b", redact=True),
        MatcherDef("digit by digit", r"(?<![\d.-])\d(?:[\s.-]\d){9,10}(?![\d])", redact=True),
        MatcherDef(
            "spelled-out digits",
            rf"\b{_DIGIT_WORD}(?:[\s,.-]+{_DIGIT_WORD}){{9,}}\b",
            redact=True,
        ),
        MatcherDef(
            "call me at",
            r"\b(?:call|text|msg|message|reach)\s+me\s*(?:at\b|on\b|@)?\s*:?\s*\d",
        ),
    ),
    Category.EMAIL: (
        MatcherDef("address", r"\b[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}\b", redact=True),
        MatcherDef(
            "spelled-out address",
            r"\b[a-z0-9._%+-]+(?:\s+at\s+|\s*[\[(]at[\])]\s*|\s*@\s*)[a-z0-9.-]+"
            r"(?:\s+dot\s+|\s*[\[(]dot[\])]\s*|\s*\.\s*)"
            r"(?:com|net|org|io|co|gmail|yahoo|hotmail|outlook)\b",
            redact=True,
        ),
        MatcherDef(
            "email me",
            r"\b(?:e-?mail\s+me\s*(?:at\b|:)|(?:my\s+)?e-?mail\s+(?:is\b|:)|e-?mail\s*:)"
            r"\s*[a-z0-9._%+-]+",
        ),
    ),
    Category.PAYMENT_APP: (
        MatcherDef(
            "payment platform",
            # not after a hyphen: "condition-wise" is not the Wise app
            r"(?<!-)\b(?:venmo|paypal|cash\s*app|zelle|apple\s*pay|google\s*pay|gpay|wise"
            r"|western\s*union|money\s*gram)\b",
        ),
        MatcherDef("cashtag", r"\$[a-z][a-z0-9_-]{2,}"),
        MatcherDef(
            "send via app",
            rf"\b(?:send|pay|transfer)\s*(?:me|to)?\s*(?:via|through|on|using)?\s*{_PAYMENT_APPS}",
        ),
        MatcherDef(
            "my app handle",
            rf"\b(?:my|add\s*me\s*on)\s*{_PAYMENT_APPS}\s*(?:is|:)?\s*@?[a-z0-9_-]+",
        ),
        MatcherDef(
            "paypal payment type",
            r"\b(?:goods\s*(?:and|&)\s*services|g\s*&\s*s|f\s*&\s*f|friends\s*(?:and|&)\s*family)\b",
        ),
        MatcherDef("paypal shorthand", r"\b(?:pp|paypal)\s*(?:me|g&s|f&f|goods|friends)\b"),
        MatcherDef(
            "bank transfer",
            r"\b(?:bank\s*transfer|wire\s*transfer|direct\s*deposit|ach|routing\s*number"
            r"|account\s*number)\b",
        ),
        MatcherDef("gift or prepaid card", r"\b(?:gift\s*card|prepaid\s*card|green\s*dot)s?\b"),
    ),
    Category.SOCIAL_MEDIA: (
        MatcherDef(
            "social platform",
            r"\b(?:instagram|insta|ig|facebook|fb|twitter|tiktok|snapchat|snap|telegram"
            r"|whatsapp|discord|signal)\b",
        ),
        MatcherDef("x", r"\bx\.com\b|\bon\s+x\b"),
        MatcherDef(
            "dm me on",
            r"\b(?:dm|message)\s*(?:me)?\s*(?:on|@)\s*(?:ig|insta|instagram|fb|twitter|snap"
            r"|telegram|whatsapp)",
        ),
        MatcherDef("handle", r"(?<![\w.%+-])@[a-z0-9_.]{3,30}\b"),
        MatcherDef("add me on", r"\b(?:add|follow|hit)\s+me\s+(?:up\s+)?(?:on\b|@)"),
    ),
    Category.EXTERNAL_LINK: (
        MatcherDef("url", rf"https?://(?!(?:www\.)?<DOMAIN>{_SITE_END})[^\s]+"),
        MatcherDef("www link", rf"\bwww\.(?!<DOMAIN>{_SITE_END})[^\s]+\.[a-z]{{2,}}"),
        MatcherDef(
            "visit my site",
            r"\b(?:check\s*out|see|visit|go\s*to)\s+(?:my|our)\s+(?:site|website|link|page)\b"
            r"(?!\s*:?\s*(?:https?://|www\.))",
        ),
    ),
    Category.EVASION: (
        MatcherDef(
            "off platform",
            r"\b(?:off\s*(?:the\s*)?(?:platform|site|app)|outside\s*(?:of\s*)?(?:here|<NAME>))\b",
        ),
        MatcherDef("avoid fees", r"\b(?:avoid|skip|bypass)\s*(?:the\s*)?(?:fees?|commission|platform)\b"),
        MatcherDef(
            "cheaper direct",
            r"\b(?:save|cheaper|better\s*deal)\s*(?:if|by)\s*(?:we|you|going)\s*(?:go\s*)?(?:direct|off)",
        ),
        MatcherDef(
            "can't use this site",
            r"\b(?:don['’]?t|can['’]?t|cannot)\s*(?:use|go\s*through)\s*(?:this|the)\s*"
            r"(?:site|platform|app)\b",
        ),
        MatcherDef(
            "cash only",
            r"\b(?:meet\s*up|local|cash|in\s*person)\s*(?:only|preferred|instead)\b",
        ),
    ),
    Category.CRYPTO: (
        MatcherDef(
            "cryptocurrency",
            r"\b(?:bitcoin|btc|ethereum|eth|crypto|usdt|usdc|tether|litecoin|ltc)\b",
        ),
        MatcherDef("ethereum address", r"\b0x[a-f0-9]{40}\b"),
        # base58 after lower-casing: the excluded upper-case letters fold into valid ones
        MatcherDef("bitcoin address", r"\b[13][a-z1-9]{25,34}\b"),
    ),
}


@dataclass(frozen=True)
class Matcher:
    """A compiled catalog entry."""

    category: Category
    severity: Severity
    label: str
    pattern: re.Pattern[str]
    redact: bool = False

    def find(self, text: str) -> Iterator[tuple[int, int]]:
        """Yield ``(start, end)`` spans of every match, left to right."""
        for match in self.pattern.finditer(text):
            yield match.start(), match.end()


@dataclass(frozen=True)
class PatternCatalog:
    """Ordered, read-only set of matchers for every category."""

    version: str
    platform_name: str
    platform_domain: str
    matchers: tuple[Matcher, ...]

    @property
    def categories(self) -> tuple[Category, ...]:
        return CATEGORY_ORDER

    def for_category(self, category: Category) -> tuple[Matcher, ...]:
        return tuple(m for m in self.matchers if m.category == category)

    def redaction_matchers(self, category: Category) -> tuple[Matcher, ...]:
        return tuple(m for m in self.for_category(category) if m.redact)

    def describe(self) -> list[dict]:
        """Plain-data view of the catalog for audit output."""
        return [
            {
                "category": m.category.value,
                "severity": m.severity.value,
                "label": m.label,
                "pattern": m.pattern.pattern,
            }
            for m in self.matchers
        ]


def build_catalog(
    platform_name: str = DEFAULT_PLATFORM_NAME,
    platform_domain: str = DEFAULT_PLATFORM_DOMAIN,
) -> PatternCatalog:
    """Compile the pattern table for a given platform identity."""
    name = re.escape(platform_name.lower())
    domain = re.escape(platform_domain.lower())

    matchers = []
    for category in CATEGORY_ORDER:
        severity = CATEGORY_SEVERITY[category]
        for entry in PATTERN_TABLE[category]:
            source = entry.pattern.replace("<NAME>", name).replace("<DOMAIN>", domain)
            matchers.append(
                Matcher(
                    category=category,
                    severity=severity,
                    label=entry.label,
                    pattern=re.compile(source),
                    redact=entry.redact,
                )
            )

    return PatternCatalog(
        version=CATALOG_VERSION,
        platform_name=platform_name.lower(),
        platform_domain=platform_domain.lower(),
        matchers=tuple(matchers),
    )


DEFAULT_CATALOG = build_catalog()
