"""
MyOath – Domain Service: SQL Shorthand Builder
===============================================
Construye las sentencias de add / set / get / delete.

Reglas:
- Los valores SIEMPRE viajan como parámetros ligados (placeholder "?").
- Tablas y columnas se citan con backticks; no se parametrizan.
  El caller es responsable de no pasar identificadores controlados
  por un atacante.
- El orden de columnas es el orden de inserción del dict.

Funciones puras: no tocan el pool ni hacen I/O.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Tuple

from myoath.domain.exceptions.query_errors import EmptyIdentityError

Statement = Tuple[str, List[Any]]


def quote_identifier(name: str) -> str:
    """`name` con los backticks internos duplicados."""
    return "`" + str(name).replace("`", "``") + "`"


def _where(table: str, identity: Mapping[str, Any]) -> Statement:
    if not identity:
        raise EmptyIdentityError(table)
    clauses = [f"{quote_identifier(column)} = ?" for column in identity]
    return "(" + ") AND (".join(clauses) + ")", list(identity.values())


def build_insert(table: str, data: Mapping[str, Any]) -> Statement:
    """INSERT INTO `t` (`a`, `b`) VALUES (?, ?)"""
    columns = ", ".join(quote_identifier(column) for column in data)
    values = ", ".join("?" for _ in data)
    sql = f"INSERT INTO {quote_identifier(table)} ({columns}) VALUES ({values})"
    return sql, list(data.values())


def build_upsert(
    table: str,
    identity: Mapping[str, Any],
    data: Mapping[str, Any],
) -> Statement:
    """
    INSERT ... ON DUPLICATE KEY UPDATE.

    Columnas insertadas: identidad (con sus valores) y luego las de
    data que no estén en identidad. El UPDATE asigna todas las columnas
    de data. Si data repite una columna de identidad, el valor nuevo
    sólo se aplica cuando hay conflicto.

    PRECONDICIÓN: la tabla debe tener un UNIQUE/PRIMARY KEY sobre las
    columnas de identidad. Sin él MySQL inserta una fila nueva y no
    reporta error.
    """
    if not identity:
        raise EmptyIdentityError(table)

    insert_values = dict(identity)
    for column, value in data.items():
        if column not in insert_values:
            insert_values[column] = value

    sql, parameters = build_insert(table, insert_values)

    if data:
        assignments = ", ".join(f"{quote_identifier(column)} = ?" for column in data)
        parameters.extend(data.values())
    else:
        # Sin datos: UPDATE no-op para que la sentencia siga siendo válida
        first = quote_identifier(next(iter(identity)))
        assignments = f"{first} = {first}"

    return f"{sql} ON DUPLICATE KEY UPDATE {assignments}", parameters


def build_select_one(table: str, identity: Mapping[str, Any]) -> Statement:
    """SELECT * FROM `t` WHERE (`a` = ?) AND (`b` = ?) LIMIT 1"""
    where, parameters = _where(table, identity)
    return f"SELECT * FROM {quote_identifier(table)} WHERE {where} LIMIT 1", parameters


def build_delete(table: str, identity: Mapping[str, Any]) -> Statement:
    """DELETE FROM `t` WHERE (`a` = ?) AND (`b` = ?)"""
    where, parameters = _where(table, identity)
    return f"DELETE FROM {quote_identifier(table)} WHERE {where}", parameters
