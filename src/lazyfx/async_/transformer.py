"""EffectTransformer: asynchronous sequencing and short-circuiting in one chain.

An EffectTransformer holds an `AsyncDeferred[Container[T]]`. Its `transform` and
`bind` reach through the asynchronous layer and operate on the Option/Result
inside, so Absent/Failure short-circuit the rest of the chain even across
await points, without the caller interleaving the two layers by hand.

Example:
    ```python
    program = (
        EffectTransformer.lift(AsyncDeferred(fetch_body))  # Success(body)
        .bind(parse_document)    # -> Result, or a FaultBoundary guarding the parse
        .bind(extract_records)   # -> Result
        .bind(pick_one)          # -> Result
        .transform(print_record) # skipped entirely if any step failed
    )

    outcome = await program.run().run()
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from lazyfx.async_.deferred import AsyncDeferred
from lazyfx.boundary import FaultBoundary
from lazyfx.container import Container, Success, is_container
from lazyfx.errors import ContainerTypeError

__all__ = ['EffectTransformer']


def _checked(value: Any, operation: str) -> Container[Any]:
    if not is_container(value):
        raise ContainerTypeError(type(value), operation)
    return value


def _settle(value: Any, operation: str) -> Container[Any]:
    """Run a FaultBoundary produced by a step; everything else must already be a container."""
    if isinstance(value, FaultBoundary):
        value = value.run()
    return _checked(value, operation)


class EffectTransformer[T]:
    """Async deferred computation of an Option or Result.

    Steps run in composition order. A step that resolves to something other
    than an Option/Result variant raises ContainerTypeError, which surfaces
    when the chain is awaited.

    Attributes:
        _deferred: The composed AsyncDeferred producing the inner container.
    """

    __slots__ = ('_deferred',)

    def __init__(self, deferred: AsyncDeferred[Container[T]]) -> None:
        self._deferred = deferred

    @classmethod
    def from_container(cls, container: Container[T]) -> EffectTransformer[T]:
        """Start a chain from an already-known container."""
        return cls(AsyncDeferred.pure(container))

    @classmethod
    def lift(
        cls,
        deferred: AsyncDeferred[Any],
        wrap: Callable[[Any], Container[T]] = Success,
    ) -> EffectTransformer[T]:
        """Start a chain from a plain AsyncDeferred by wrapping its value.

        Args:
            deferred: Produces a raw value.
            wrap: Turns that value into a container; Success by default,
                `lazyfx.option` to apply the falsy-is-absent policy.
        """
        return cls(deferred.transform(wrap))

    def transform[U](self, f: Callable[[T], U]) -> EffectTransformer[U]:
        """Once resolved, apply `inner.transform(f)`."""
        return EffectTransformer(
            self._deferred.transform(lambda inner: _checked(inner, 'transform').transform(f))
        )

    def bind[U](self, f: Callable[[T], Container[U] | FaultBoundary[U]]) -> EffectTransformer[U]:
        """Once resolved, apply `inner.bind(f)`.

        `f` returns a plain container, not another transformer: short-circuiting
        happens at the container level while sequencing stays in the async layer.
        If `f` returns a FaultBoundary, the boundary is run at that point and
        its container becomes the inner value.
        """

        def _step(inner: Any) -> Container[U]:
            return _settle(_checked(inner, 'bind').bind(f), 'bind')

        return EffectTransformer(self._deferred.transform(_step))

    def run(self) -> AsyncDeferred[Container[T]]:
        """Expose the composed chain; the caller runs it once at the outer edge."""
        return self._deferred

    def run_sync(self) -> Container[T]:
        """Run the composed chain to completion on a fresh event loop."""
        return self._deferred.run_sync()

    def __repr__(self) -> str:
        return f'EffectTransformer({self._deferred!r})'
