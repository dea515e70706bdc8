"""Domain services (puros, sin I/O)."""
from myoath.domain.services.sql_builder import (
    quote_identifier,
    build_insert,
    build_upsert,
    build_select_one,
    build_delete,
)

__all__ = [
    "quote_identifier",
    "build_insert",
    "build_upsert",
    "build_select_one",
    "build_delete",
]
