"""lazyfx: immutable effect containers and combinators.

Option and Result containers, deferred sync/async computations, an effect
transformer joining asynchrony with short-circuiting, and fault boundaries
converting raised exceptions into containers.

Flat imports (preferred):
    from lazyfx import Present, Absent, Success, Failure, option
    from lazyfx import SyncDeferred, AsyncDeferred, EffectTransformer, FaultBoundary

Submodule imports (for organization):
    from lazyfx.container import Present, Absent, Success, Failure
    from lazyfx.async_ import AsyncDeferred, EffectTransformer
    from lazyfx.decorators import safe
"""

# Configuration
from lazyfx._config import LazyFxConfig, get_config, init

# Logging
from lazyfx._logging import configure_logging, get_logger

# Async
from lazyfx.async_ import AsyncDeferred, EffectTransformer

# Fault boundary
from lazyfx.boundary import FaultBoundary

# Containers
from lazyfx.container import (
    Absent,
    AbsentType,
    Container,
    Failure,
    Option,
    Present,
    Result,
    Success,
    absent,
    failure,
    flatten,
    from_nullable,
    is_container,
    option,
    present,
    sequence,
    sequence_options,
    success,
    traverse,
)

# Decorators
from lazyfx.decorators import safe, safe_async

# Deferred
from lazyfx.deferred import SyncDeferred

# Errors
from lazyfx.errors import ContainerTypeError, Fault, FaultError, LazyFxError, UnwrapError

# Protocol
from lazyfx.mappable import Mappable

__all__ = [
    # Containers
    'Absent',
    'AbsentType',
    # Async
    'AsyncDeferred',
    'Container',
    # Errors
    'ContainerTypeError',
    'EffectTransformer',
    'Failure',
    'Fault',
    # Fault boundary
    'FaultBoundary',
    'FaultError',
    # Configuration
    'LazyFxConfig',
    'LazyFxError',
    # Protocol
    'Mappable',
    'Option',
    'Present',
    'Result',
    'Success',
    # Deferred
    'SyncDeferred',
    'UnwrapError',
    'absent',
    # Logging
    'configure_logging',
    'failure',
    'flatten',
    'from_nullable',
    'get_config',
    'get_logger',
    'init',
    'is_container',
    'option',
    'present',
    # Decorators
    'safe',
    'safe_async',
    'sequence',
    'sequence_options',
    'success',
    'traverse',
]
