"""Structured logging for lazyfx.

structlog events (such as a fault boundary engaging its fallback) and plain
stdlib records share one `ProcessorFormatter` on the root logger, so both come
out as the same JSON or console stream.

Nothing is configured on import; call `configure_logging()` (or `lazyfx.init()`
with a log level) at the application edge.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
]

type LogHook = Callable[[dict[str, Any]], None]

_hooks: list[LogHook] = []
# ids of hooks whose failure has already been reported
_reported: set[int] = set()


def _run_hooks(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Processor handing each hook its own copy of the event.

    A failing hook never breaks the log call. Its first failure is reported
    through the stdlib logger; later failures of the same hook are dropped.
    """
    for hook in tuple(_hooks):
        try:
            hook(event_dict.copy())
        except Exception as exc:
            if id(hook) in _reported:
                continue
            _reported.add(id(hook))
            logging.getLogger(__name__).warning(
                'Log hook %s failed with %r; further failures of this hook are not reported',
                getattr(hook, '__qualname__', repr(hook)),
                exc,
            )
    return event_dict


def _processor_chain(*, foreign: bool) -> list[Any]:
    """Processors for structlog events, or the pre-chain for stdlib records when `foreign`."""
    chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.ExtraAdder(),
        _run_hooks,
    ]
    if not foreign:
        chain += [
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ]
    return chain


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
) -> None:
    """Route structlog and stdlib logging through one root handler.

    Calling it again replaces the previous handler instead of adding another.

    Args:
        level: Logging level ("DEBUG", "INFO", ...); unknown names fall back to INFO.
        json_output: JSON lines when True, console rendering otherwise.
    """
    structlog.configure(
        processors=_processor_chain(foreign=False),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_processor_chain(foreign=True),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger.

    Before `configure_logging()` has run, the logger wraps a plain stdlib logger
    so a library that was never configured stays as quiet as stdlib logging.

    Args:
        name: Logger name, usually the caller's `__name__`.

    Returns:
        A structlog BoundLogger.
    """
    if structlog.is_configured():
        return structlog.get_logger(name)
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            _run_hooks,
            structlog.processors.KeyValueRenderer(key_order=['event']),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def add_log_hook(hook: LogHook) -> None:
    """Register a callable receiving a copy of every log event dict.

    Useful for metrics, alerting, or asserting on emitted events in tests.
    """
    _hooks.append(hook)


def remove_log_hook(hook: LogHook) -> None:
    """Unregister `hook`; unknown hooks are ignored."""
    if hook in _hooks:
        _hooks.remove(hook)
        _reported.discard(id(hook))


def clear_log_hooks() -> None:
    """Remove all registered log hooks."""
    _hooks.clear()
    _reported.clear()
