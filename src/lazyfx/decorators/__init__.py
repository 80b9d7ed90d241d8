"""Decorators for Result-based error handling."""

from lazyfx.decorators.safe import safe, safe_async

__all__ = [
    'safe',
    'safe_async',
]
