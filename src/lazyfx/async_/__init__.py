"""Asynchronous deferred computations.

AsyncDeferred: lazy async computation, re-executed on every run.
EffectTransformer: AsyncDeferred of an Option/Result with short-circuiting steps.
"""

from lazyfx.async_.deferred import AsyncDeferred
from lazyfx.async_.transformer import EffectTransformer

__all__ = [
    'AsyncDeferred',
    'EffectTransformer',
]
