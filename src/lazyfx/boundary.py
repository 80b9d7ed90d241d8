"""FaultBoundary: turn a native fault raised by a computation into a fallback container."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from lazyfx._config import get_config
from lazyfx._logging import get_logger
from lazyfx.container import Container, Failure, Result
from lazyfx.errors import Fault

__all__ = ['FaultBoundary']

type _Step = Callable[[Container[Any]], Container[Any]]


class FaultBoundary[T]:
    """Guard a container-producing computation with a fallback.

    `run()` calls `primary`; if it raises one of the guarded exception types,
    the fault is logged and the fallback's container is returned instead.

    `transform`/`bind` are recorded as steps applied to whichever container
    the guarded part produced. Those steps run outside the guard: a fault raised
    by a step propagates out of `run()`, and needs an outer FaultBoundary to
    be caught.

    Each `run()` is one independent execution (primary, maybe fallback, then
    the steps). Nothing is retried or remembered between runs.

    Example:
        ```python
        parse = FaultBoundary(
            lambda: Success(ElementTree.fromstring(body)),
            lambda: Failure(ValueError('Received invalid XML')),
        )
        parse.run()   # Success(<Element ...>) or Failure(ValueError(...))
        ```
    """

    __slots__ = ('_exceptions', '_primary', '_recover', '_steps')

    def __init__(
        self,
        primary: Callable[[], Container[T]],
        fallback: Callable[[], Container[T]] | None,
        *,
        exceptions: tuple[type[BaseException], ...] | None = None,
        _recover: Callable[[BaseException], Container[Any]] | None = None,
        _steps: tuple[_Step, ...] = (),
    ) -> None:
        """Create a boundary; neither computation is called here.

        Args:
            primary: Computation that may raise.
            fallback: Computation whose container replaces a faulted primary.
            exceptions: Exception types to catch. Defaults to the configured
                `fault_types` (Exception unless changed through `lazyfx.init`).

        Raises:
            TypeError: If no fallback is given.
        """
        if _recover is None and fallback is None:
            msg = 'FaultBoundary needs a fallback'
            raise TypeError(msg)
        self._primary = primary
        self._recover = _recover if _recover is not None else lambda _exc: fallback()
        self._exceptions = exceptions if exceptions is not None else get_config().fault_types
        self._steps = _steps

    @classmethod
    def of(
        cls,
        primary: Callable[[], Container[T]],
        fallback: Container[T],
        *,
        exceptions: tuple[type[BaseException], ...] | None = None,
    ) -> FaultBoundary[T]:
        """Boundary whose fallback is a fixed container."""
        return cls(primary, lambda: fallback, exceptions=exceptions)

    @classmethod
    def recovering(
        cls,
        primary: Callable[[], Container[T]],
        recover: Callable[[BaseException], Container[T]],
        *,
        exceptions: tuple[type[BaseException], ...] | None = None,
    ) -> FaultBoundary[T]:
        """Boundary whose fallback is built from the caught exception.

        Example:
            ```python
            FaultBoundary.recovering(lambda: Success(int(raw)), Failure).run()
            # Success(12) or Failure(ValueError("invalid literal ..."))
            ```
        """
        return cls(primary, None, exceptions=exceptions, _recover=recover)

    @classmethod
    def catching(
        cls,
        primary: Callable[[], Result[T, Fault]],
        *,
        exceptions: tuple[type[BaseException], ...] | None = None,
    ) -> FaultBoundary[T]:
        """Boundary whose fallback is `Failure(Fault)` describing the caught exception."""
        return cls.recovering(primary, lambda exc: Failure(Fault.from_exception(exc)), exceptions=exceptions)

    def _extend(self, step: _Step) -> FaultBoundary[Any]:
        return FaultBoundary(
            self._primary,
            None,
            exceptions=self._exceptions,
            _recover=self._recover,
            _steps=(*self._steps, step),
        )

    def transform[U](self, f: Callable[[T], U]) -> FaultBoundary[U]:
        """Apply `f` to the value of whichever branch ran."""
        return self._extend(lambda container: container.transform(f))  # type: ignore[return-value]

    def bind[U](self, f: Callable[[T], Container[U]]) -> FaultBoundary[U]:
        """Bind `f` on the container of whichever branch ran."""
        return self._extend(lambda container: container.bind(f))  # type: ignore[return-value]

    def run(self) -> Container[T]:
        """Execute the primary, falling back on a guarded fault, then apply the steps.

        Raises:
            Exception: Anything raised by the fallback, by a recorded step, or
                by the primary when its type is not guarded.
        """
        try:
            container: Container[Any] = self._primary()
        except self._exceptions as exc:
            get_logger(__name__).debug(
                'fault_boundary.fallback',
                error_type=type(exc).__name__,
                error=str(exc),
            )
            container = self._recover(exc)
        for step in self._steps:
            container = step(container)
        return container  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f'FaultBoundary({self._primary!r}, steps={len(self._steps)})'
