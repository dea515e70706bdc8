"""
MyOath
=======
Capa fina sobre aiomysql: exec / get_stream / get_one_row /
get_one_value y los shorthands add / set / get / delete, con
resultados como promesas de una librería intercambiable.

    from myoath import create_query_facade

    db = create_query_facade()
    count = await db.get_one_value("SELECT COUNT(*) FROM users")
"""

from myoath.application.ports.promise_library import (
    Capability,
    Deferred,
    Promise,
    PromiseLibrary,
)
from myoath.application.services.logger_registry import LoggerHandle
from myoath.application.services.query_facade import QueryFacade
from myoath.container import (
    Container,
    create_query_facade,
    get_container,
    init_container,
    reset_container,
)
from myoath.domain.entities.query_result import FieldDescriptor, QueryResult
from myoath.domain.exceptions.query_errors import (
    DriverError,
    EmptyIdentityError,
    EmptyResultError,
    MyOathError,
    NoRunningLoopError,
    UnsupportedCapabilityError,
)
from myoath.infrastructure.persistence.aiomysql_pool import AiomysqlConnectionPool
from myoath.infrastructure.promises.asyncio_promises import (
    AsyncioPromiseLibrary,
    FuturePromiseLibrary,
    get_promise_library,
)
from myoath.shared.config.settings import Settings

__version__ = "0.2.0"

__all__ = [
    "AiomysqlConnectionPool",
    "AsyncioPromiseLibrary",
    "Capability",
    "Container",
    "Deferred",
    "DriverError",
    "EmptyIdentityError",
    "EmptyResultError",
    "FieldDescriptor",
    "FuturePromiseLibrary",
    "LoggerHandle",
    "MyOathError",
    "NoRunningLoopError",
    "Promise",
    "PromiseLibrary",
    "QueryFacade",
    "QueryResult",
    "Settings",
    "UnsupportedCapabilityError",
    "create_query_facade",
    "get_container",
    "get_promise_library",
    "init_container",
    "reset_container",
]
