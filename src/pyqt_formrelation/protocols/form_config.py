"""Base configuration for relation evaluation.

Provides hooks for applications to customize how relation engines react to
cycles and unresolved names, and how verbosely they log.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CyclePolicy(Enum):
    """What to do when a relation is re-entered while it is still being evaluated."""
    RAISE = "raise"
    SKIP = "skip"


@dataclass
class RelationConfig:
    """Configuration for relation engine behavior.

    Applications can subclass this to provide custom configuration.

    Attributes:
        cycle_policy: RAISE converts a relation cycle into RelationCycleError,
            SKIP logs a warning and drops only the re-entrant evaluation
        warn_on_unresolved: Log unresolved logic/pattern/action names at WARNING
            (once per name per engine) instead of DEBUG
        debug_dispatch: Verbose INFO tracing of every check/evaluate/dispatch step
    """

    cycle_policy: CyclePolicy = CyclePolicy.RAISE
    warn_on_unresolved: bool = True
    debug_dispatch: bool = False


# Global config instance (set by application)
_relation_config: Optional[RelationConfig] = None


def set_relation_config(config: Optional[RelationConfig]) -> None:
    """Set the global relation configuration.

    Args:
        config: RelationConfig instance, or None to restore defaults
    """
    global _relation_config
    _relation_config = config


def get_relation_config() -> RelationConfig:
    """Get the current relation configuration.

    Returns:
        Current RelationConfig or default if not set
    """
    if _relation_config is None:
        return RelationConfig()
    return _relation_config
