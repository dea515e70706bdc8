"""Query exceptions."""
from myoath.domain.exceptions.query_errors import (
    MyOathError,
    DriverError,
    EmptyResultError,
    UnsupportedCapabilityError,
    EmptyIdentityError,
    NoRunningLoopError,
)

__all__ = [
    "MyOathError",
    "DriverError",
    "EmptyResultError",
    "UnsupportedCapabilityError",
    "EmptyIdentityError",
    "NoRunningLoopError",
]
