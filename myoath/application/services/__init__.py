"""Application services."""
from myoath.application.services.done_polyfill import DonePolyfill, ensure_done
from myoath.application.services.logger_registry import LoggerHandle, LoggerRegistry
from myoath.application.services.query_facade import QueryFacade

__all__ = [
    "DonePolyfill",
    "ensure_done",
    "LoggerHandle",
    "LoggerRegistry",
    "QueryFacade",
]
