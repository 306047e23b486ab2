"""SwapGuard -- off-platform transaction detection for marketplace messages."""

__version__ = "0.1.0"

from swapguard.config import ConfigError, EngineConfig, FailurePolicy, load_config  # noqa: E402
from swapguard.moderation.engine import (  # noqa: E402
    ModerationEngine,
    ModerationError,
    moderate,
    should_block_message,
)

__all__ = [
    "__version__",
    "ConfigError",
    "EngineConfig",
    "FailurePolicy",
    "load_config",
    "ModerationEngine",
    "ModerationError",
    "moderate",
    "should_block_message",
]
