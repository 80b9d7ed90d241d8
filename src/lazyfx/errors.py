"""Error types: raise-based exceptions plus the Fault struct for Result-based code."""

from __future__ import annotations

from typing import Any

import msgspec

__all__ = [
    'ContainerTypeError',
    'Fault',
    'FaultError',
    'LazyFxError',
    'UnwrapError',
]


class LazyFxError(Exception):
    """Base class for errors raised by lazyfx itself."""


class UnwrapError(LazyFxError):
    """unwrap() was called on an absorbing variant (Absent or Failure)."""

    def __init__(self, container: Any, message: str | None = None) -> None:
        self.container = container
        super().__init__(message or f'Called unwrap on {container!r}')


class ContainerTypeError(LazyFxError, TypeError):
    """A step produced something that is not an Option or Result variant."""

    def __init__(self, value_type: type, operation: str | None = None) -> None:
        self.value_type = value_type
        self.operation = operation
        msg = f"Expected an Option or Result container, got '{value_type.__name__}'"
        if operation:
            msg = f'{operation}: {msg}'
        super().__init__(msg)


# --- Native faults captured as values ---


class Fault(msgspec.Struct, frozen=True, gc=False):
    """A caught native fault - struct variant for Result[T, Fault]."""

    kind: str
    message: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> Fault:
        """Capture an exception's type name and message."""
        return cls(type(exc).__name__, str(exc))

    def to_exception(self) -> FaultError:
        """Convert to exception for raise-based code."""
        return FaultError(self.kind, self.message)


class FaultError(LazyFxError):
    """A caught native fault - exception variant."""

    def __init__(self, kind: str, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(f'{kind}: {message}' if message else kind)

    def to_struct(self) -> Fault:
        """Convert to struct for Result-based code."""
        return Fault(self.kind, self.message)
