"""
MyOath – Application Port: Connection Pool
===========================================
Interfaz hacia el cliente de base de datos.

El pool es una caja negra: protocolo, reconexión y concurrencia son
responsabilidad de la implementación. La fachada sólo necesita:

- query():  sentencia bufferizada → QueryResult
- stream(): sentencia sin buffer → filas de a una, en orden del servidor
- close():  cierra el pool; llamadas posteriores fallan
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, AsyncContextManager, AsyncIterator, List, Optional, Sequence

from myoath.domain.entities.query_result import FieldDescriptor, QueryResult, Row


class IRowStream(ABC):
    """Filas de una consulta en curso."""

    @property
    @abstractmethod
    def fields(self) -> List[FieldDescriptor]:
        """Metadatos de columnas, disponibles apenas se ejecuta la sentencia."""

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[Row]:
        pass


class IConnectionPool(ABC):
    """
    Pool de conexiones.

    Los placeholders de `sql` son "?" y se corresponden 1:1 con
    `params`. Los errores del driver se propagan tal cual; la fachada
    los envuelve.
    """

    @abstractmethod
    async def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> QueryResult:
        pass

    @abstractmethod
    def stream(
        self,
        sql: str,
        params: Optional[Sequence[Any]] = None,
    ) -> AsyncContextManager[IRowStream]:
        """
        USO:
            async with pool.stream(sql, params) as rows:
                fields = rows.fields
                async for row in rows:
                    ...
        """

    @abstractmethod
    async def close(self) -> None:
        pass
