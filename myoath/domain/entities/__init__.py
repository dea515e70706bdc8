"""Domain entities."""
from myoath.domain.entities.query_result import FieldDescriptor, QueryResult, Row

__all__ = ["FieldDescriptor", "QueryResult", "Row"]
