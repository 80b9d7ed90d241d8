"""Library configuration: LazyFxConfig and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from lazyfx._logging import configure_logging

__all__ = [
    'LazyFxConfig',
    'get_config',
    'init',
]


@dataclass(frozen=True)
class LazyFxConfig:
    """Configuration for lazyfx.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
        json_logs: Emit JSON logs when logging is configured, console output otherwise.
        fault_types: Exception types a FaultBoundary catches unless told otherwise.
    """

    log_level: str | None = None
    json_logs: bool = True
    fault_types: tuple[type[BaseException], ...] = (Exception,)


# Global configuration (set by init())
_config: LazyFxConfig | None = None


def _detect_log_level() -> str | None:
    """Read LAZYFX_LOG_LEVEL; empty or unset means no level."""
    level = os.environ.get('LAZYFX_LOG_LEVEL', '').strip().upper()
    return level or None


def _detect_json_logs() -> bool:
    """Read LAZYFX_LOG_FORMAT ("json" or "console").

    Priority:
    1. LAZYFX_LOG_FORMAT environment variable
    2. Default to JSON
    """
    env_format = os.environ.get('LAZYFX_LOG_FORMAT', '').lower()
    if env_format == 'console':
        return False
    if env_format and env_format != 'json':
        logging.warning("Unknown LAZYFX_LOG_FORMAT value '%s', defaulting to json", env_format)
    return True


def init(
    log_level: str | None = None,
    json_logs: bool | None = None,
    fault_types: tuple[type[BaseException], ...] | None = None,
) -> LazyFxConfig:
    """Initialize lazyfx with the specified configuration.

    Args:
        log_level: Logging level ("DEBUG", "INFO", etc.). Read from
            LAZYFX_LOG_LEVEL if None; still None means logging is not configured.
        json_logs: JSON or console rendering. Read from LAZYFX_LOG_FORMAT if None.
        fault_types: Default exception types caught by FaultBoundary.

    Returns:
        The LazyFxConfig that was set.

    Raises:
        TypeError: If fault_types contains something that is not an exception type.

    Example:
        ```python
        import lazyfx

        # Environment-driven
        lazyfx.init()

        # Explicit configuration
        lazyfx.init(log_level="DEBUG", json_logs=False, fault_types=(OSError, ValueError))
        ```
    """
    global _config  # noqa: PLW0603

    resolved_level = log_level if log_level is not None else _detect_log_level()
    resolved_json = json_logs if json_logs is not None else _detect_json_logs()

    if fault_types is None:
        resolved_faults: tuple[type[BaseException], ...] = (Exception,)
    else:
        resolved_faults = tuple(fault_types)
        for tp in resolved_faults:
            if not (isinstance(tp, type) and issubclass(tp, BaseException)):
                msg = f'fault_types entries must be exception types, got {tp!r}'
                raise TypeError(msg)

    _config = LazyFxConfig(
        log_level=resolved_level,
        json_logs=resolved_json,
        fault_types=resolved_faults,
    )

    if resolved_level is not None:
        configure_logging(resolved_level, json_output=resolved_json)

    return _config


def get_config() -> LazyFxConfig:
    """Get the current configuration.

    Unlike `init()`, this never touches logging: when `init()` has not been
    called, the defaults derived from the environment are returned.

    Returns:
        The current LazyFxConfig.

    Example:
        ```python
        from lazyfx import init, get_config

        init(fault_types=(ValueError,))
        config = get_config()
        print(config.fault_types)  # (<class 'ValueError'>,)
        ```
    """
    if _config is None:
        return LazyFxConfig(log_level=_detect_log_level(), json_logs=_detect_json_logs())
    return _config


def _reset() -> None:
    """Forget the stored configuration (test helper)."""
    global _config  # noqa: PLW0603
    _config = None
