"""Persistence implementations."""

from myoath.infrastructure.persistence.aiomysql_pool import (
    AiomysqlConnectionPool,
    PoolClosedError,
)
from myoath.infrastructure.persistence.placeholders import qmark_to_format

__all__ = [
    "AiomysqlConnectionPool",
    "PoolClosedError",
    "qmark_to_format",
]
