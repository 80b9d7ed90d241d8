"""Option and Result containers as one tagged union.

Four frozen variants share a single set of combinators:

    Option[T]    = Present[T] | AbsentType      (singleton: Absent)
    Result[T, E] = Success[T] | Failure[E]

Every combinator is written once, as a `match` over the four variants, so the
Option and Result families cannot drift apart. `Absent` and `Failure(e)` are
absorbing: `transform`, `bind` and the other value-side combinators never call
the supplied function on them and hand the same variant back unchanged.

Example:
    ```python
    from lazyfx import Failure, Success, option

    option('rank-1').transform(str.upper)       # Present(value='RANK-1')
    option('').transform(str.upper)             # Absent

    Success(2).bind(lambda x: Failure('bad')).transform(lambda x: x + 1)
    # Failure(error='bad')
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Never, TypeIs, assert_never

import msgspec

from lazyfx.errors import ContainerTypeError, UnwrapError

__all__ = [
    'CONTAINER_TYPES',
    'Absent',
    'AbsentType',
    'Container',
    'Failure',
    'Option',
    'Present',
    'Result',
    'Success',
    'absent',
    'failure',
    'flatten',
    'from_nullable',
    'is_container',
    'option',
    'present',
    'sequence',
    'sequence_options',
    'success',
    'traverse',
]


class _ContainerOps:
    """Combinators shared by every variant.

    Dispatch happens by structural pattern matching on `self`, never by
    per-variant overrides.
    """

    __slots__ = ()

    # --- Predicates ---

    def is_present(self) -> TypeIs[Present[Any]]:
        """Return True for Present."""
        return isinstance(self, Present)

    def is_absent(self) -> TypeIs[AbsentType]:
        """Return True for Absent."""
        return isinstance(self, AbsentType)

    def is_success(self) -> TypeIs[Success[Any]]:
        """Return True for Success."""
        return isinstance(self, Success)

    def is_failure(self) -> TypeIs[Failure[Any]]:
        """Return True for Failure."""
        return isinstance(self, Failure)

    # --- Mappable ---

    def transform[U](self, f: Callable[[Any], U]) -> Container[U]:
        """Apply `f` to the contained value.

        Present(v) becomes Present(f(v)) and Success(v) becomes Success(f(v)).
        Absent and Failure are returned as-is and `f` is not called.

        Args:
            f: Function from the contained value to a new value.

        Returns:
            A container of the same family holding the transformed value.
        """
        match self:
            case Present(value):
                return Present(f(value))
            case Success(value):
                return Success(f(value))
            case AbsentType() | Failure():
                return self  # type: ignore[return-value]
            case _:
                assert_never(self)  # type: ignore[arg-type]

    def bind[U](self, f: Callable[[Any], Container[U]]) -> Container[U]:
        """Chain a step that itself returns a container.

        Present(v) and Success(v) return `f(v)` directly; Absent and Failure
        short-circuit without calling `f`. Also known as flatmap or and_then.

        Args:
            f: Function from the contained value to a container.

        Returns:
            The container returned by `f`, or the absorbing variant unchanged.
        """
        match self:
            case Present(value) | Success(value):
                return f(value)
            case AbsentType() | Failure():
                return self  # type: ignore[return-value]
            case _:
                assert_never(self)  # type: ignore[arg-type]

    def fold[B](self, on_absorbing: Callable[..., B], on_value: Callable[[Any], B]) -> B:
        """Collapse the container into a plain value, calling exactly one branch.

        Args:
            on_absorbing: Called with no arguments for Absent, or with the
                error for Failure.
            on_value: Called with the value for Present and Success.

        Returns:
            Whatever the selected branch returns.
        """
        match self:
            case Present(value) | Success(value):
                return on_value(value)
            case AbsentType():
                return on_absorbing()
            case Failure(error):
                return on_absorbing(error)
            case _:
                assert_never(self)  # type: ignore[arg-type]

    def transform_error[F](self, f: Callable[[Any], F]) -> Container[Any]:
        """Apply `f` to the error of a Failure; every other variant passes through."""
        match self:
            case Failure(error):
                return Failure(f(error))
            case Present() | Success() | AbsentType():
                return self  # type: ignore[return-value]
            case _:
                assert_never(self)  # type: ignore[arg-type]

    def recover(self, f: Callable[..., Container[Any]]) -> Container[Any]:
        """Replace an absorbing variant with the container `f` builds.

        `f` receives no arguments for Absent and the error for Failure.
        Value variants are returned unchanged without calling `f`.
        """
        match self:
            case AbsentType():
                return f()
            case Failure(error):
                return f(error)
            case Present() | Success():
                return self  # type: ignore[return-value]
            case _:
                assert_never(self)  # type: ignore[arg-type]

    def ok_or[E](self, error: E) -> Result[Any, E]:
        """Convert an Option to a Result: Present(v) -> Success(v), Absent -> Failure(error).

        Result variants are returned unchanged.
        """
        match self:
            case Present(value):
                return Success(value)
            case AbsentType():
                return Failure(error)
            case Success() | Failure():
                return self  # type: ignore[return-value]
            case _:
                assert_never(self)  # type: ignore[arg-type]

    def flatten(self) -> Container[Any]:
        """Collapse one level of container-of-container.

        Raises:
            ContainerTypeError: If a value variant does not hold a container.
        """
        match self:
            case Present(inner) | Success(inner):
                if not is_container(inner):
                    raise ContainerTypeError(type(inner), 'flatten')
                return inner
            case AbsentType() | Failure():
                return self  # type: ignore[return-value]
            case _:
                assert_never(self)  # type: ignore[arg-type]

    # --- Extraction ---

    def unwrap(self) -> Any:
        """Return the contained value.

        Raises:
            UnwrapError: If called on Absent or Failure.
        """
        match self:
            case Present(value) | Success(value):
                return value
            case AbsentType() | Failure():
                raise UnwrapError(self)
            case _:
                assert_never(self)  # type: ignore[arg-type]

    def unwrap_or[U](self, default: U) -> Any:
        """Return the contained value, or `default` for an absorbing variant."""
        match self:
            case Present(value) | Success(value):
                return value
            case AbsentType() | Failure():
                return default
            case _:
                assert_never(self)  # type: ignore[arg-type]

    def unwrap_or_else(self, f: Callable[..., Any]) -> Any:
        """Return the contained value, or compute one with `f` (same arity rule as `fold`)."""
        return self.fold(f, lambda value: value)


class Present[T](msgspec.Struct, _ContainerOps, frozen=True, gc=False):
    """Option variant holding a value.

    Examples:
        >>> Present(42).transform(lambda x: x + 1)
        Present(value=43)
    """

    value: T


class AbsentType(msgspec.Struct, _ContainerOps, frozen=True, gc=False):
    """Option variant for a missing value. Use the `Absent` singleton."""

    def __repr__(self) -> str:
        return 'Absent'


class Success[T](msgspec.Struct, _ContainerOps, frozen=True, gc=False):
    """Result variant holding a success value."""

    value: T


class Failure[E](msgspec.Struct, _ContainerOps, frozen=True, gc=False):
    """Result variant holding an error. The error is kept verbatim through a chain."""

    error: E


Absent: AbsentType = AbsentType()

type Option[T] = Present[T] | AbsentType
type Result[T, E] = Success[T] | Failure[E]
type Container[T] = Option[T] | Result[T, Any]

CONTAINER_TYPES: tuple[type, ...] = (Present, AbsentType, Success, Failure)


def is_container(value: object) -> TypeIs[Container[Any]]:
    """Check whether `value` is one of the four container variants."""
    return isinstance(value, CONTAINER_TYPES)


# ---------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------


def option[T](raw: T | None) -> Option[T]:
    """Build an Option from a possibly-missing raw value.

    Falsy-but-defined values (`0`, `""`, `False`, empty collections) become
    Absent, exactly like `None`. Use `from_nullable` when only `None` means
    missing.

    Examples:
        >>> option('x')
        Present(value='x')
        >>> option(0)
        Absent
    """
    if not raw:
        return Absent
    return Present(raw)


def from_nullable[T](raw: T | None) -> Option[T]:
    """Build an Option where only `None` is Absent.

    Examples:
        >>> from_nullable(0)
        Present(value=0)
    """
    if raw is None:
        return Absent
    return Present(raw)


def present[T](value: T) -> Option[T]:
    return Present(value)


def absent() -> Option[Never]:
    return Absent


def success[T](value: T) -> Result[T, Never]:
    return Success(value)


def failure[E](error: E) -> Result[Never, E]:
    return Failure(error)


def flatten[T](nested: Container[Container[T]]) -> Container[T]:
    """Free-function form of `flatten()`."""
    return nested.flatten()


# ---------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------


def traverse[U, T, E](items: Iterable[U], f: Callable[[U], Result[T, E]]) -> Result[list[T], E]:
    """Apply `f` to each item, collecting successes until the first Failure.

    Items after the first Failure are not consumed and `f` is not called on them.

    Raises:
        ContainerTypeError: If `f` returns something other than a Result.
    """
    values: list[T] = []
    for item in items:
        match f(item):
            case Success(value):
                values.append(value)
            case Failure() as err:
                return err
            case other:
                raise ContainerTypeError(type(other), 'traverse')
    return Success(values)


def sequence[T, E](results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Turn an iterable of Results into a Result of a list (first Failure wins)."""
    return traverse(results, lambda r: r)


def sequence_options[T](options: Iterable[Option[T]]) -> Option[list[T]]:
    """Turn an iterable of Options into an Option of a list (any Absent wins)."""
    values: list[T] = []
    for opt in options:
        match opt:
            case Present(value):
                values.append(value)
            case AbsentType():
                return Absent
            case other:
                raise ContainerTypeError(type(other), 'sequence_options')
    return Present(values)
