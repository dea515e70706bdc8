"""
MyOath – Query Facade
======================
Ejecución de SQL parametrizado sobre un pool, con resultados como
promesas de una librería intercambiable.

USO:
    db = QueryFacade(pool, AsyncioPromiseLibrary())

    row = await db.get_one_row("SELECT * FROM users WHERE id = ?", [user_id])

    db.exec("SELECT * FROM users").then(on_result, on_error).done()

    (db.get_stream("SELECT * FROM users ORDER BY id")
        .progress(on_row)
        .done(on_end))

GARANTÍAS:
- Ninguna operación lanza de forma síncrona: todos los errores llegan
  como rechazo de la promesa. Cada llamada debe hacerse con el event
  loop corriendo; el trabajo corre en su propia task. Llamar sin loop
  es un error de programación y lanza NoRunningLoopError en el acto
  (no hay loop donde entregar el rechazo).
- Las llamadas concurrentes no comparten estado salvo el pool y el
  registro de loggers.
- No hay reintentos ni cancelación.
- Toda promesa retornada tiene done() (nativo o polyfill).
"""

from __future__ import annotations

import asyncio
from typing import Any, Coroutine, List, Mapping, Optional, Sequence, Set, Union

from myoath.application.ports.connection_pool import IConnectionPool
from myoath.application.ports.promise_library import (
    Capability,
    Deferred,
    Promise,
    PromiseLibrary,
)
from myoath.application.services.done_polyfill import ensure_done
from myoath.application.services.logger_registry import (
    LogCallback,
    LoggerHandle,
    LoggerRegistry,
)
from myoath.domain.entities.query_result import FieldDescriptor, QueryResult, Row
from myoath.domain.exceptions.query_errors import (
    DriverError,
    EmptyResultError,
    MyOathError,
    NoRunningLoopError,
    UnsupportedCapabilityError,
)
from myoath.domain.services.sql_builder import (
    build_delete,
    build_insert,
    build_select_one,
    build_upsert,
)
from myoath.shared.logging.logger import get_logger

logger = get_logger("query_facade")

Parameters = Optional[Sequence[Any]]


class QueryFacade:
    """
    Fachada de consultas: exec, stream y shorthands CRUD.

    Los métodos públicos se llaman desde código que corre en un event
    loop de asyncio; fuera de él lanzan NoRunningLoopError.
    """

    def __init__(
        self,
        pool: IConnectionPool,
        promises: PromiseLibrary,
        log_prefix: str = "MyOath: ",
    ):
        self._pool = pool
        self._promises = promises
        self._loggers = LoggerRegistry(log_prefix)
        # Referencias fuertes a las tasks en vuelo
        self._tasks: Set[asyncio.Task] = set()

    @property
    def promises(self) -> PromiseLibrary:
        return self._promises

    # ════════════════════════════════════════════════════════════════
    #  LOGGERS
    # ════════════════════════════════════════════════════════════════

    def add_logger(self, callback: LogCallback) -> LoggerHandle:
        return self._loggers.add(callback)

    def remove_logger(self, target: Union[LoggerHandle, LogCallback]) -> bool:
        return self._loggers.remove(target)

    def _log(self, message: str) -> None:
        self._loggers.emit(message)

    # ════════════════════════════════════════════════════════════════
    #  PLUMBING
    # ════════════════════════════════════════════════════════════════

    @staticmethod
    def _running_loop(operation: str) -> asyncio.AbstractEventLoop:
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            raise NoRunningLoopError(operation) from None

    def _launch(
        self,
        operation: str,
        work: Coroutine[Any, Any, Any],
        deferred: Optional[Deferred] = None,
    ) -> Promise:
        """Corre `work` en una task y liquida el Deferred con su resultado."""
        try:
            loop = self._running_loop(operation)
        except NoRunningLoopError:
            work.close()
            raise
        if deferred is None:
            deferred = self._promises.defer()
        task = loop.create_task(self._settle(deferred, work))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return ensure_done(deferred.promise, self._promises)

    @staticmethod
    async def _settle(deferred: Deferred, work: Coroutine[Any, Any, Any]) -> None:
        try:
            value = await work
        except Exception as exc:
            deferred.reject(exc)
        else:
            deferred.resolve(value)

    def _driver_error(self, exc: Exception, sql: Optional[str]) -> DriverError:
        self._log(f"Error: {exc}")
        logger.warning("Fallo del driver (%s): %s", exc.__class__.__name__, exc)
        return DriverError(exc, sql)

    # ════════════════════════════════════════════════════════════════
    #  OPERACIONES
    # ════════════════════════════════════════════════════════════════

    def exec(self, sql: str, parameters: Parameters = None) -> Promise:
        """Resuelve con QueryResult; rechaza con DriverError."""
        return self._launch("exec", self._exec(sql, parameters))

    async def _exec(self, sql: str, parameters: Parameters = None) -> QueryResult:
        self._log(f"Exec: {sql}")
        logger.debug("exec: %s %r", sql, parameters)
        try:
            result = await self._pool.query(sql, parameters)
        except Exception as exc:
            raise self._driver_error(exc, sql) from exc
        self._log("Success")
        return result

    def get_stream(self, sql: str, parameters: Parameters = None) -> Promise:
        """
        Notifica cada fila (progress) y resuelve con los FieldDescriptor.

        Requiere Capability.PROGRESS. Sin ella rechaza de inmediato con
        UnsupportedCapabilityError y no ejecuta la consulta.
        """
        self._running_loop("get_stream")
        deferred = self._promises.defer()
        if not self._promises.supports(Capability.PROGRESS):
            self._log(f"getStream unsupported by '{self._promises.name}'")
            deferred.reject(
                UnsupportedCapabilityError(self._promises.name, Capability.PROGRESS.value)
            )
            return ensure_done(deferred.promise, self._promises)
        return self._launch("get_stream", self._stream(sql, parameters, deferred), deferred)

    async def _stream(self, sql: str, parameters: Parameters, deferred: Deferred) -> List[FieldDescriptor]:
        self._log(f"getStream: {sql}")
        logger.debug("stream: %s %r", sql, parameters)
        try:
            async with self._pool.stream(sql, parameters) as rows:
                self._log("getStream Fields")
                fields = rows.fields
                async for row in rows:
                    self._log("getStream row")
                    deferred.notify(row)
        except MyOathError:
            raise
        except Exception as exc:
            raise self._driver_error(exc, sql) from exc
        self._log("getStream end")
        return fields

    def get_one_row(self, sql: str, parameters: Parameters = None) -> Promise:
        """Resuelve con la primera fila, o False si no hay filas."""
        return self._launch("get_one_row", self._get_one_row(sql, parameters))

    async def _get_one_row(self, sql: str, parameters: Parameters = None) -> Union[Row, bool]:
        result = await self._exec(sql, parameters)
        row = result.first_row()
        return row if row is not None else False

    def get_one_value(self, sql: str, parameters: Parameters = None) -> Promise:
        """Primera columna de la primera fila; EmptyResultError si no hay filas."""
        return self._launch("get_one_value", self._get_one_value(sql, parameters))

    async def _get_one_value(self, sql: str, parameters: Parameters = None) -> Any:
        result = await self._exec(sql, parameters)
        if not result.rows:
            raise EmptyResultError(sql)
        return result.first_value()

    # ─── Shorthands ─────────────────────────────────────────────────────

    def add(self, table: str, data: Mapping[str, Any]) -> Promise:
        """INSERT con las claves de `data`. Resuelve con QueryResult."""
        return self._launch("add", self._add(table, data))

    async def _add(self, table: str, data: Mapping[str, Any]) -> QueryResult:
        sql, parameters = build_insert(table, data)
        return await self._exec(sql, parameters)

    def set(self, table: str, identity: Mapping[str, Any], data: Mapping[str, Any]) -> Promise:
        """
        Upsert: INSERT ... ON DUPLICATE KEY UPDATE.

        PRECONDICIÓN: la tabla necesita un UNIQUE/PRIMARY KEY sobre las
        columnas de `identity`; sin él se inserta una fila duplicada y
        MySQL no reporta error.
        """
        return self._launch("set", self._set(table, identity, data))

    async def _set(
        self,
        table: str,
        identity: Mapping[str, Any],
        data: Mapping[str, Any],
    ) -> QueryResult:
        sql, parameters = build_upsert(table, identity, data)
        return await self._exec(sql, parameters)

    def get(self, table: str, identity: Mapping[str, Any]) -> Promise:
        """Primera fila que coincide con `identity`, o False."""
        return self._launch("get", self._get(table, identity))

    async def _get(self, table: str, identity: Mapping[str, Any]) -> Union[Row, bool]:
        sql, parameters = build_select_one(table, identity)
        return await self._get_one_row(sql, parameters)

    def delete(self, table: str, identity: Mapping[str, Any]) -> Promise:
        """Borra las filas que coinciden con `identity`. Resuelve con filas afectadas."""
        return self._launch("delete", self._delete(table, identity))

    async def _delete(self, table: str, identity: Mapping[str, Any]) -> int:
        sql, parameters = build_delete(table, identity)
        result = await self._exec(sql, parameters)
        return result.affected_rows

    # ─── Lifecycle ──────────────────────────────────────────────────────

    def end(self) -> Promise:
        """Cierra el pool. Las llamadas posteriores rechazan con DriverError."""
        return self._launch("end", self._end())

    async def _end(self) -> None:
        self._log("End")
        try:
            await self._pool.close()
        except Exception as exc:
            raise self._driver_error(exc, None) from exc
        logger.info("Pool cerrado")
