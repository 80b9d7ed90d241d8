"""Mappable protocol: the capability shared by every container and deferred.

Uses PEP 695 type parameter syntax; type checkers infer Mappable[T] as covariant.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = ['Mappable']


@runtime_checkable
class Mappable[T](Protocol):
    """Anything exposing `transform` and `bind`.

    Implemented by Present/Absent, Success/Failure, SyncDeferred, AsyncDeferred,
    EffectTransformer and FaultBoundary. Collaborators plugged into a pipeline
    only need to satisfy this protocol.

    Example:
        ```python
        def double_all(m: Mappable[int]) -> Mappable[int]:
            return m.transform(lambda x: x * 2)

        double_all(Present(2))           # Present(value=4)
        double_all(SyncDeferred(lambda: 2)).run()  # 4
        ```
    """

    @abstractmethod
    def transform[U](self, f: Callable[[T], U]) -> Mappable[U]:
        """Apply a plain function to the value inside."""
        ...

    @abstractmethod
    def bind[U](self, f: Callable[[T], Any]) -> Mappable[U]:
        """Apply a function returning the same kind of Mappable, flattening one level."""
        ...
