"""Engine configuration, loaded from YAML.

Only platform identity, review context, the failure policy and sender-facing
text are configurable. Scoring weights and the block threshold are not.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import yaml

from swapguard.moderation.catalog import DEFAULT_PLATFORM_DOMAIN, DEFAULT_PLATFORM_NAME
from swapguard.moderation.decision import UserMessages
from swapguard.moderation.extractor import DEFAULT_CONTEXT_WINDOW


class ConfigError(ValueError):
    """Raised when a configuration file or mapping is invalid."""


class FailurePolicy(Enum):
    """What the engine returns when moderation itself crashes."""

    RAISE = "raise"  # Propagate as ModerationError
    REVIEW = "review"  # Deliver, but flag for manual review
    BLOCK = "block"  # Refuse delivery


@dataclass
class EngineConfig:
    """Settings for a ModerationEngine."""

    platform_name: str = DEFAULT_PLATFORM_NAME
    platform_domain: str = DEFAULT_PLATFORM_DOMAIN
    context_window: int = DEFAULT_CONTEXT_WINDOW
    failure_policy: FailurePolicy = FailurePolicy.RAISE
    allowed_handles: list[str] = field(default_factory=list)
    messages: UserMessages = field(default_factory=UserMessages)

    @classmethod
    def from_dict(cls, data: dict | None) -> EngineConfig:
        """Build a config from a parsed mapping; missing keys take defaults."""
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")

        try:
            policy = FailurePolicy(data.get("failure_policy", FailurePolicy.RAISE.value))
        except ValueError:
            allowed = ", ".join(p.value for p in FailurePolicy)
            raise ConfigError(
                f"Unknown failure_policy {data.get('failure_policy')!r} (expected one of: {allowed})"
            ) from None

        window = data.get("context_window", DEFAULT_CONTEXT_WINDOW)
        if not isinstance(window, int) or isinstance(window, bool) or window < 0:
            raise ConfigError(f"context_window must be a non-negative integer, got {window!r}")

        handles = data.get("allowed_handles") or []
        if not isinstance(handles, list):
            raise ConfigError("allowed_handles must be a list")

        msg_data = data.get("messages") or {}
        if not isinstance(msg_data, dict):
            raise ConfigError("messages must be a mapping")
        defaults = UserMessages()
        messages = UserMessages(
            blocked=msg_data.get("blocked", defaults.blocked),
            flagged=msg_data.get("flagged", defaults.flagged),
        )

        return cls(
            platform_name=str(data.get("platform_name", DEFAULT_PLATFORM_NAME)),
            platform_domain=str(data.get("platform_domain", DEFAULT_PLATFORM_DOMAIN)),
            context_window=window,
            failure_policy=policy,
            allowed_handles=[str(h) for h in handles],
            messages=messages,
        )


def load_config(path: str | Path) -> EngineConfig:
    """Load an engine config from a YAML file."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    return EngineConfig.from_dict(data)
