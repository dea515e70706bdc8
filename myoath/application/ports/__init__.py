"""Application ports - Interfaces to infrastructure."""
from myoath.application.ports.connection_pool import IConnectionPool, IRowStream
from myoath.application.ports.promise_library import (
    Capability,
    Deferred,
    Promise,
    PromiseLibrary,
)

__all__ = [
    "IConnectionPool",
    "IRowStream",
    "Capability",
    "Deferred",
    "Promise",
    "PromiseLibrary",
]
