"""@safe and @safe_async: run a function behind a FaultBoundary and return a Result.

Each call builds a fresh `FaultBoundary.recovering(...)`, so the decorated
function guards exactly what a hand-written boundary would: the exception types
passed as `exceptions`, otherwise the configured `fault_types` at call time.
A caught exception becomes `Failure(exception)` and emits the usual
`fault_boundary.fallback` debug event.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, NoReturn

import wrapt

from lazyfx.boundary import FaultBoundary
from lazyfx.container import Failure, Result, Success

__all__ = ['safe', 'safe_async']

type _Faults = tuple[type[BaseException], ...] | None


def _reraise(exc: BaseException) -> Callable[[], NoReturn]:
    def _primary() -> NoReturn:
        raise exc

    return _primary


def safe[**P, T](
    func: Callable[P, T] | None = None,
    *,
    exceptions: _Faults = None,
) -> Any:
    """Turn a raising function into one returning `Success(value)` or `Failure(exception)`.

    Usable bare or with arguments:

        @safe
        def parse(body: str) -> Element: ...

        @safe(exceptions=(ElementTree.ParseError,))
        def parse_strict(body: str) -> Element: ...

    Exceptions outside the guarded types propagate unchanged.

    Args:
        func: The function to wrap (bare form).
        exceptions: Exception types to convert. Defaults to the configured
            `fault_types`, read on every call.

    Returns:
        The wrapped function, or a decorator when called with arguments only.
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, T],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Result[T, BaseException]:
        boundary = FaultBoundary.recovering(
            lambda: Success(wrapped(*args, **kwargs)),
            Failure,
            exceptions=exceptions,
        )
        return boundary.run()  # type: ignore[return-value]

    return wrapper if func is None else wrapper(func)


def safe_async[**P, T](
    func: Callable[P, Awaitable[T]] | None = None,
    *,
    exceptions: _Faults = None,
) -> Any:
    """Coroutine-function flavour of `safe`.

    The awaited outcome is settled by a FaultBoundary: a value becomes
    `Success(value)`, a guarded exception `Failure(exception)`, and anything
    else (including cancellation) is raised again from the boundary.
    """

    @wrapt.decorator
    async def wrapper(
        wrapped: Callable[P, Awaitable[T]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Result[T, BaseException]:
        try:
            value = await wrapped(*args, **kwargs)
        except BaseException as exc:  # noqa: BLE001
            boundary = FaultBoundary.recovering(_reraise(exc), Failure, exceptions=exceptions)
            return boundary.run()  # type: ignore[return-value]
        return Success(value)

    return wrapper if func is None else wrapper(func)
