"""
MyOath – Query Exceptions
==========================
Errores que la fachada entrega como rechazo de la promesa.

Ninguno se lanza de forma síncrona desde la API pública: el caller
siempre los recibe en el callback de rechazo (o al hacer await).
La excepción es NoRunningLoopError: sin event loop no hay dónde
entregar un rechazo, así que se lanza en la llamada.

JERARQUÍA:
    MyOathError (base)
    ├── DriverError
    ├── EmptyResultError
    ├── UnsupportedCapabilityError
    ├── EmptyIdentityError
    └── NoRunningLoopError
"""

from __future__ import annotations

from typing import Optional


class MyOathError(Exception):
    """Excepción base de la librería."""

    def __init__(self, message: str, code: str = "MYOATH_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error": self.code,
            "message": self.message,
        }


class DriverError(MyOathError):
    """Error reportado por el driver (SQL inválido, conexión caída, pool cerrado)."""

    def __init__(self, original: BaseException, sql: Optional[str] = None):
        super().__init__(str(original) or original.__class__.__name__, code="DRIVER_ERROR")
        self.original = original
        self.sql = sql
        self.__cause__ = original


class EmptyResultError(MyOathError):
    """Se pidió un valor escalar pero la consulta no devolvió filas."""

    def __init__(self, sql: str):
        super().__init__("Requested one value but got no rows", code="EMPTY_RESULT")
        self.sql = sql


class UnsupportedCapabilityError(MyOathError):
    """La librería de promesas configurada no soporta la operación pedida."""

    def __init__(self, library: str, capability: str):
        super().__init__(
            f"Promise library '{library}' does not support {capability}",
            code="UNSUPPORTED_CAPABILITY",
        )
        self.library = library
        self.capability = capability


class EmptyIdentityError(MyOathError):
    """Shorthand llamado sin columnas de identidad (WHERE vacío)."""

    def __init__(self, table: str):
        super().__init__(
            f"Identity for table '{table}' has no columns", code="EMPTY_IDENTITY"
        )
        self.table = table


class NoRunningLoopError(MyOathError):
    """Operación de la fachada llamada fuera de un event loop corriendo."""

    def __init__(self, operation: str):
        super().__init__(
            f"{operation}() must be called from a running asyncio event loop",
            code="NO_RUNNING_LOOP",
        )
        self.operation = operation
