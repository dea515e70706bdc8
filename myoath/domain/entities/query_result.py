"""
MyOath – Domain Entity: QueryResult
====================================
Resultado de una sentencia: filas + metadatos de columnas.

- Row: dict columna → valor (lo que devuelve un DictCursor).
- FieldDescriptor: una entrada de cursor.description (PEP 249).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

Row = Dict[str, Any]


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Metadatos de una columna del resultado."""

    name: str
    type_code: Optional[int] = None
    display_size: Optional[int] = None
    internal_size: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    null_ok: Optional[bool] = None

    @classmethod
    def from_description(cls, entry: Sequence[Any]) -> "FieldDescriptor":
        """Construye desde la 7-tupla de cursor.description."""
        padded = list(entry) + [None] * (7 - len(entry))
        return cls(*padded[:7])

    @classmethod
    def from_cursor(cls, description: Optional[Sequence[Sequence[Any]]]) -> List["FieldDescriptor"]:
        # description es None para INSERT/UPDATE/DELETE
        if not description:
            return []
        return [cls.from_description(entry) for entry in description]


@dataclass(slots=True)
class QueryResult:
    """
    Filas y columnas de una sentencia ejecutada.

    affected_rows / insert_id reflejan el OK packet de MySQL en
    sentencias DML (rowcount / lastrowid del cursor).
    """

    rows: List[Row] = field(default_factory=list)
    fields: List[FieldDescriptor] = field(default_factory=list)
    affected_rows: int = 0
    insert_id: Optional[int] = None

    def first_row(self) -> Optional[Row]:
        return self.rows[0] if self.rows else None

    def first_value(self) -> Any:
        """Valor de la primera columna de la primera fila."""
        row = self.rows[0]
        if self.fields:
            return row[self.fields[0].name]
        return next(iter(row.values()))

    def to_dict(self) -> dict:
        return {
            "rows": self.rows,
            "fields": [f.name for f in self.fields],
            "affected_rows": self.affected_rows,
            "insert_id": self.insert_id,
        }
