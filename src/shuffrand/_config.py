"""Runtime configuration: retry budget, logging level, and initialization."""

from __future__ import annotations

import os
from dataclasses import dataclass

from shuffrand._logging import configure_logging
from shuffrand.constants import MAX_ATTEMPTS_TO_GENERATE_NUM

__all__ = [
    'RandomConfig',
    'get_config',
    'init',
    'reset_config',
]

_ATTEMPTS_CEILING = 10_000


@dataclass(frozen=True)
class RandomConfig:
    """Configuration for shuffrand.

    Attributes:
        max_attempts: Retry budget for one generation call.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
    """

    max_attempts: int = MAX_ATTEMPTS_TO_GENERATE_NUM
    log_level: str | None = None


_config: RandomConfig | None = None


def init(
    max_attempts: int | None = None,
    log_level: str | None = None,
) -> RandomConfig:
    """Initialize shuffrand with the given configuration.

    Args:
        max_attempts: Retry budget per generation call, clamped to
            [1, 10000]. Defaults to `MAX_ATTEMPTS_TO_GENERATE_NUM`.
        log_level: Logging level. Falls back to the SHUFFRAND_LOG_LEVEL
            environment variable; None leaves logging unconfigured. When a
            level is set, `configure_logging` replaces the root logger's
            handlers with a single structlog handler.

    Returns:
        The RandomConfig that was set.

    Example:
        ```python
        from shuffrand import init

        init(log_level='DEBUG')
        ```
    """
    global _config  # noqa: PLW0603

    if max_attempts is None:
        resolved_attempts = MAX_ATTEMPTS_TO_GENERATE_NUM
    else:
        resolved_attempts = max(1, min(_ATTEMPTS_CEILING, max_attempts))

    resolved_level = log_level or os.environ.get('SHUFFRAND_LOG_LEVEL') or None

    _config = RandomConfig(max_attempts=resolved_attempts, log_level=resolved_level)

    if resolved_level is not None:
        configure_logging(resolved_level)

    return _config


def get_config() -> RandomConfig:
    """Get the current configuration, or the defaults if `init` was never called."""
    if _config is None:
        return RandomConfig()
    return _config


def reset_config() -> None:
    """Drop any configuration set by `init`."""
    global _config  # noqa: PLW0603

    _config = None
