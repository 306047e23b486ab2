"""Moderation engine -- the message-in, verdict-out entry point.

Runs the extractor, scorer and decision stages in order. An engine holds
only read-only state (config and compiled catalog), so one instance can
serve concurrent requests without locking.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional

from swapguard.config import EngineConfig, FailurePolicy
from swapguard.moderation.catalog import (
    DEFAULT_CATALOG,
    DEFAULT_PLATFORM_DOMAIN,
    DEFAULT_PLATFORM_NAME,
    build_catalog,
)
from swapguard.moderation.decision import decide
from swapguard.moderation.extractor import FlagExtractor
from swapguard.moderation.models import ModerationResult
from swapguard.moderation.redactor import redact_message
from swapguard.moderation.scorer import MAX_SCORE, score_flags

log = logging.getLogger("swapguard.engine")


class ModerationError(RuntimeError):
    """Raised when a message could not be scored and the policy is RAISE."""


class ModerationEngine:
    """Stateless message classifier configured by an EngineConfig."""

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()
        if (
            self.config.platform_name.lower() == DEFAULT_PLATFORM_NAME
            and self.config.platform_domain.lower() == DEFAULT_PLATFORM_DOMAIN
        ):
            self.catalog = DEFAULT_CATALOG
        else:
            self.catalog = build_catalog(self.config.platform_name, self.config.platform_domain)
        self.extractor = FlagExtractor(
            self.catalog,
            context=self.config.context_window,
            allowed_handles=self.config.allowed_handles,
        )

    # -- public API ----------------------------------------------------------

    def moderate(self, text: str) -> ModerationResult:
        """Scan one message and return its verdict."""
        if not isinstance(text, str):
            raise TypeError(f"message must be str, got {type(text).__name__}")
        try:
            return self._evaluate(text)
        except Exception as e:
            return self._on_failure(e)

    def moderate_many(
        self, texts: Iterable[str], max_workers: Optional[int] = None
    ) -> list[ModerationResult]:
        """Moderate several messages in parallel; results keep input order."""
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(self.moderate, texts))

    def should_block(self, text: str) -> bool:
        return self.moderate(text).blocked

    def redact(self, text: str) -> str:
        return redact_message(text, self.catalog)

    # -- stages --------------------------------------------------------------

    def _evaluate(self, text: str) -> ModerationResult:
        flags = self.extractor.extract(text)
        risk_score = score_flags(flags)
        result = decide(flags, risk_score, self.config.messages)

        if result.blocked:
            log.info(
                "Blocked message: score=%d categories=%s",
                result.risk_score,
                ",".join(c.value for c in result.categories),
            )
        return result

    def _on_failure(self, exc: Exception) -> ModerationResult:
        policy = self.config.failure_policy
        if policy == FailurePolicy.RAISE:
            raise ModerationError(f"Moderation failed: {exc}") from exc

        log.error("Moderation failed, applying %s policy", policy.value, exc_info=exc)
        blocked = policy == FailurePolicy.BLOCK
        return ModerationResult(
            flagged=True,
            flags=(),
            risk_score=MAX_SCORE if blocked else 0,
            blocked=blocked,
            message=self.config.messages.blocked if blocked else self.config.messages.flagged,
            error=f"{type(exc).__name__}: {exc}",
        )


_DEFAULT_ENGINE = ModerationEngine()


def moderate(text: str) -> ModerationResult:
    """Moderate *text* with the default engine."""
    return _DEFAULT_ENGINE.moderate(text)


def should_block_message(text: str) -> bool:
    """Quick check whether *text* would be refused delivery."""
    return _DEFAULT_ENGINE.should_block(text)
