"""SyncDeferred: a zero-argument computation that runs only when asked."""

from __future__ import annotations

from collections.abc import Callable

__all__ = ['SyncDeferred']


class SyncDeferred[T]:
    """Deferred synchronous computation.

    Building, transforming and binding a SyncDeferred never executes anything;
    each call to `run()` invokes the captured thunk again. Results are not cached.

    Attributes:
        _thunk: The zero-argument callable producing the value.

    Example:
        ```python
        read = SyncDeferred(lambda: open('config.toml').read())
        size = read.transform(len)   # nothing has been read yet
        size.run()                   # reads the file
        size.run()                   # reads it again
        ```
    """

    __slots__ = ('_thunk',)

    def __init__(self, thunk: Callable[[], T]) -> None:
        """Wrap a zero-argument callable without calling it.

        Args:
            thunk: The computation to defer.
        """
        self._thunk = thunk

    @classmethod
    def pure(cls, value: T) -> SyncDeferred[T]:
        """Wrap an already-computed value."""
        return cls(lambda: value)

    def transform[U](self, f: Callable[[T], U]) -> SyncDeferred[U]:
        """Run this computation, then apply `f` to its result."""
        return SyncDeferred(lambda: f(self.run()))

    def bind[U](self, f: Callable[[T], SyncDeferred[U]]) -> SyncDeferred[U]:
        """Run this computation, build the next deferred with `f`, and run that too.

        The nesting produced by `f` is collapsed at run time, so the returned
        deferred yields a plain `U`.
        """
        return SyncDeferred.join(self.transform(f))

    @staticmethod
    def join[U](outer: SyncDeferred[SyncDeferred[U]]) -> SyncDeferred[U]:
        """Collapse exactly one level: run `outer`, then run the deferred it produced."""
        return SyncDeferred(lambda: outer.run().run())

    def run(self) -> T:
        """Invoke the thunk and return its result. Faults propagate to the caller."""
        return self._thunk()

    def __repr__(self) -> str:
        return f'SyncDeferred({self._thunk!r})'
