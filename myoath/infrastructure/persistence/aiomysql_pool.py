"""
MyOath – aiomysql Connection Pool
==================================
Implementación de IConnectionPool sobre aiomysql.

DECISIONES DE DISEÑO:

1. POOL LAZY:
   - aiomysql.create_pool() es async; se crea en la primera consulta,
     protegido por un asyncio.Lock para que dos consultas concurrentes
     no creen dos pools.

2. CURSORES:
   - query():  DictCursor (bufferizado) → filas como dict.
   - stream(): SSDictCursor (sin buffer) → fetchone() de a una fila,
     en el orden en que llegan del servidor.

3. PLACEHOLDERS:
   - "?" se traduce a "%s" sólo cuando hay parámetros. Sin parámetros
     la sentencia se envía tal cual (PyMySQL no aplica % con args=None).

4. CIERRE:
   - close() es definitivo: las llamadas posteriores fallan con
     PoolClosedError (la fachada lo envuelve en DriverError).
   - close() toma el mismo lock que la creación: un pool que termina
     de crearse después de close() se cierra ahí mismo y la consulta
     que lo pidió falla con PoolClosedError.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional, Sequence, Tuple

import aiomysql

from myoath.application.ports.connection_pool import IConnectionPool, IRowStream
from myoath.domain.entities.query_result import FieldDescriptor, QueryResult, Row
from myoath.infrastructure.persistence.placeholders import qmark_to_format
from myoath.shared.config.settings import Settings
from myoath.shared.logging.logger import get_logger

logger = get_logger("infrastructure.aiomysql_pool")


class PoolClosedError(RuntimeError):
    """El pool ya fue cerrado con close()."""


class _CursorRowStream(IRowStream):
    """Filas de un SSDictCursor ya ejecutado."""

    def __init__(self, cursor: aiomysql.SSDictCursor):
        self._cursor = cursor
        self._fields = FieldDescriptor.from_cursor(cursor.description)

    @property
    def fields(self) -> List[FieldDescriptor]:
        return self._fields

    def __aiter__(self) -> AsyncIterator[Row]:
        return self._rows()

    async def _rows(self) -> AsyncIterator[Row]:
        while True:
            row = await self._cursor.fetchone()
            if row is None:
                return
            yield row


class AiomysqlConnectionPool(IConnectionPool):
    """
    Pool MySQL async.

    USO:
        pool = AiomysqlConnectionPool(settings)
        result = await pool.query("SELECT * FROM t WHERE id = ?", [1])
        await pool.close()
    """

    def __init__(self, settings: Optional[Settings] = None, **pool_overrides: Any):
        self._settings = settings or Settings()
        self._pool_overrides = pool_overrides
        self._pool: Optional[aiomysql.Pool] = None
        self._lock = asyncio.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def _get_pool(self) -> aiomysql.Pool:
        if self._closed:
            raise PoolClosedError("Connection pool is closed")
        if self._pool is not None:
            return self._pool

        async with self._lock:
            if self._closed:
                raise PoolClosedError("Connection pool is closed")
            if self._pool is None:
                kwargs = {**self._settings.pool_kwargs(), **self._pool_overrides}
                logger.info(
                    "Creando pool MySQL %s@%s:%s/%s (min=%s, max=%s)",
                    kwargs.get("user"),
                    kwargs.get("host"),
                    kwargs.get("port"),
                    kwargs.get("db"),
                    kwargs.get("minsize"),
                    kwargs.get("maxsize"),
                )
                pool = await aiomysql.create_pool(**kwargs)
                if self._closed:
                    # close() llegó mientras se creaba
                    pool.close()
                    await pool.wait_closed()
                    raise PoolClosedError("Connection pool is closed")
                self._pool = pool
        return self._pool

    @staticmethod
    def _prepare(sql: str, params: Optional[Sequence[Any]]) -> Tuple[str, Optional[tuple]]:
        if not params:
            return sql, None
        return qmark_to_format(sql), tuple(params)

    async def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> QueryResult:
        pool = await self._get_pool()
        statement, args = self._prepare(sql, params)

        async with pool.acquire() as conn:
            async with conn.cursor(aiomysql.DictCursor) as cursor:
                await cursor.execute(statement, args)
                rows = await cursor.fetchall() if cursor.description else ()
                if not self._settings.db_autocommit:
                    await conn.commit()
                return QueryResult(
                    rows=list(rows),
                    fields=FieldDescriptor.from_cursor(cursor.description),
                    affected_rows=cursor.rowcount,
                    insert_id=cursor.lastrowid or None,
                )

    @asynccontextmanager
    async def stream(
        self,
        sql: str,
        params: Optional[Sequence[Any]] = None,
    ) -> AsyncIterator[IRowStream]:
        pool = await self._get_pool()
        statement, args = self._prepare(sql, params)

        async with pool.acquire() as conn:
            async with conn.cursor(aiomysql.SSDictCursor) as cursor:
                await cursor.execute(statement, args)
                yield _CursorRowStream(cursor)

    async def close(self) -> None:
        """Cierra el pool y todas sus conexiones.

        Espera a que termine una creación en curso, así ningún pool
        queda abierto después de retornar.
        """
        self._closed = True
        async with self._lock:
            if self._pool is None:
                return
            pool, self._pool = self._pool, None
            pool.close()
            await pool.wait_closed()
        logger.info("Pool MySQL cerrado")
