"""
MyOath – Domain Layer
======================
Núcleo puro de la librería. CERO dependencias externas.

Este módulo contiene:
- entities/: QueryResult, FieldDescriptor
- services/: Builders de SQL para los shorthands
- exceptions/: Errores entregados como rechazo

REGLA DE DEPENDENCIA:
Este módulo NO puede importar de:
- infrastructure/
- application/
- Librerías externas (aiomysql, pydantic, etc.)
"""

from myoath.domain.entities.query_result import FieldDescriptor, QueryResult, Row
from myoath.domain.exceptions.query_errors import (
    MyOathError,
    DriverError,
    EmptyResultError,
    UnsupportedCapabilityError,
    EmptyIdentityError,
)

__all__ = [
    "FieldDescriptor",
    "QueryResult",
    "Row",
    "MyOathError",
    "DriverError",
    "EmptyResultError",
    "UnsupportedCapabilityError",
    "EmptyIdentityError",
]
