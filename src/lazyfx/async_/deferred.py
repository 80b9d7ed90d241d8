"""AsyncDeferred: a deferred computation whose result arrives asynchronously.

AsyncDeferred wraps a zero-argument callable returning an awaitable. Like
SyncDeferred, composing it never executes anything: each `run()` hands back a
fresh coroutine that performs one independent execution of the whole chain.

Example:
    ```python
    async def fetch_hot_list() -> str:
        ...

    program = (
        AsyncDeferred(fetch_hot_list)
        .transform(str.strip)
        .bind(lambda body: AsyncDeferred(lambda: store(body)))
    )

    # nothing has run yet
    await program.run()
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Coroutine
from typing import TYPE_CHECKING, Any

import anyio

if TYPE_CHECKING:
    from lazyfx.deferred import SyncDeferred

__all__ = ['AsyncDeferred']


class AsyncDeferred[T]:
    """Deferred asynchronous computation.

    Note:
        `run()` returns a coroutine; the thunk is invoked when that coroutine is
        first driven (awaited, or scheduled as a task). A fault raised by the
        thunk, or by any function composed after it, therefore surfaces as a
        failed awaitable and never out of `run()` itself. Nothing here catches
        it; use FaultBoundary for that.

    Note:
        The core combinators are backend-agnostic. `zip()` and `run_sync()`
        go through anyio.

    Attributes:
        _thunk: The zero-argument callable producing an awaitable.
    """

    __slots__ = ('_thunk',)

    def __init__(self, thunk: Callable[[], Awaitable[T]]) -> None:
        """Wrap a zero-argument callable without calling it.

        Args:
            thunk: Callable returning an awaitable (usually an async function).
        """
        self._thunk = thunk

    @classmethod
    def pure(cls, value: T) -> AsyncDeferred[T]:
        """Create an AsyncDeferred that resolves to `value`.

        Returns:
            AsyncDeferred whose every run resolves to the same value.
        """

        async def _pure() -> T:
            return value

        return cls(_pure)

    @classmethod
    def from_sync(cls, deferred: SyncDeferred[T]) -> AsyncDeferred[T]:
        """Lift a SyncDeferred; its thunk runs when the async chain reaches it."""

        async def _lifted() -> T:
            return deferred.run()

        return cls(_lifted)

    def transform[U](self, f: Callable[[T], U]) -> AsyncDeferred[U]:
        """Apply a sync function to the resolved value.

        Args:
            f: Sync function applied once the value is available.

        Returns:
            New AsyncDeferred producing `f(value)`.

        Example:
            ```python
            async def example():
                assert await AsyncDeferred.pure(5).transform(lambda x: x * 2).run() == 10
            ```
        """

        async def _mapped() -> U:
            return f(await self.run())

        return AsyncDeferred(_mapped)

    def bind[U](self, f: Callable[[T], AsyncDeferred[U]]) -> AsyncDeferred[U]:
        """Sequence with a step that returns another AsyncDeferred.

        Waits for this value, calls `f` on it, runs the AsyncDeferred that `f`
        returned and resolves to its value.

        Args:
            f: Function from the resolved value to the next AsyncDeferred.

        Returns:
            New AsyncDeferred producing the inner value.
        """
        return AsyncDeferred.join(self.transform(f))

    @staticmethod
    def join[U](outer: AsyncDeferred[AsyncDeferred[U]]) -> AsyncDeferred[U]:
        """Collapse one level: await `outer`, then await the deferred it produced."""

        async def _joined() -> U:
            inner = await outer.run()
            return await inner.run()

        return AsyncDeferred(_joined)

    def zip[U](self, other: AsyncDeferred[U]) -> AsyncDeferred[tuple[T, U]]:
        """Run two deferreds concurrently and pair their values.

        Both sides run inside one anyio task group. If either faults, the other
        is cancelled and the fault surfaces (wrapped in an ExceptionGroup, per
        task group semantics).

        Args:
            other: Another AsyncDeferred to run alongside this one.

        Returns:
            AsyncDeferred producing `(self_value, other_value)`.
        """

        async def _zipped() -> tuple[T, U]:
            left: list[T] = []
            right: list[U] = []

            async with anyio.create_task_group() as tg:

                async def run_self() -> None:
                    left.append(await self.run())

                async def run_other() -> None:
                    right.append(await other.run())

                tg.start_soon(run_self)
                tg.start_soon(run_other)

            return left[0], right[0]

        return AsyncDeferred(_zipped)

    def run(self) -> Coroutine[Any, Any, T]:
        """Start one independent execution.

        Returns:
            A fresh coroutine resolving to the value. Every call produces a new
            coroutine and invokes the thunk again when driven.
        """

        async def _run() -> T:
            return await self._thunk()

        return _run()

    def run_sync(self) -> T:
        """Run the chain to completion on a fresh event loop (for the outermost edge)."""
        return anyio.run(self.run)

    def __repr__(self) -> str:
        return f'AsyncDeferred({self._thunk!r})'
