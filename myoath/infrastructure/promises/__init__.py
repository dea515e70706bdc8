"""Promise library implementations."""

from myoath.infrastructure.promises.asyncio_promises import (
    AsyncioPromiseLibrary,
    FuturePromiseLibrary,
    get_promise_library,
)

__all__ = [
    "AsyncioPromiseLibrary",
    "FuturePromiseLibrary",
    "get_promise_library",
]
