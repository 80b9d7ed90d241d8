"""Pytest configuration and shared fixtures for lazyfx tests."""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest
import structlog

from lazyfx import _config
from lazyfx._logging import clear_log_hooks


class CallSpy:
    """Wrap a function and count its invocations."""

    def __init__(self, fn: Callable[..., Any]) -> None:
        self._fn = fn
        self.calls: list[tuple[Any, ...]] = []

    def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        return self._fn(*args)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def spy() -> Callable[..., CallSpy]:
    """Factory fixture: spy(fn) returns a counting wrapper around fn."""
    return CallSpy


@pytest.fixture
def reset_state() -> Generator[None]:
    """Forget stored configuration, log hooks and structlog setup around a test."""
    _config._reset()
    clear_log_hooks()
    structlog.reset_defaults()
    yield
    _config._reset()
    clear_log_hooks()
    structlog.reset_defaults()


@pytest.fixture
def sample_present():
    """Sample Present value for testing."""
    from lazyfx import Present

    return Present(42)


@pytest.fixture
def sample_failure():
    """Sample Failure value for testing."""
    from lazyfx import Failure

    return Failure(ValueError('test error'))
