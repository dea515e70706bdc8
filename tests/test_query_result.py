"""Tests for result entities and error payloads."""

from myoath.domain.entities.query_result import FieldDescriptor, QueryResult
from myoath.domain.exceptions.query_errors import (
    DriverError,
    EmptyResultError,
    UnsupportedCapabilityError,
)


class TestQueryResult:
    def test_first_row_and_value(self):
        result = QueryResult(
            rows=[{"b": 2, "a": 1}],
            fields=[FieldDescriptor(name="a"), FieldDescriptor(name="b")],
        )
        assert result.first_row() == {"b": 2, "a": 1}
        # first column comes from the field metadata, not dict order
        assert result.first_value() == 1

    def test_first_value_without_fields(self):
        assert QueryResult(rows=[{"x": 9}]).first_value() == 9

    def test_empty(self):
        result = QueryResult()
        assert result.first_row() is None
        assert result.to_dict() == {
            "rows": [],
            "fields": [],
            "affected_rows": 0,
            "insert_id": None,
        }


class TestErrorPayloads:
    def test_driver_error(self):
        original = ConnectionRefusedError("connection refused")
        error = DriverError(original, "SELECT 1")
        assert error.to_dict() == {"error": "DRIVER_ERROR", "message": "connection refused"}
        assert error.__cause__ is original

    def test_driver_error_without_message_uses_class_name(self):
        assert DriverError(TimeoutError()).message == "TimeoutError"

    def test_empty_result(self):
        assert EmptyResultError("SELECT 1").to_dict()["error"] == "EMPTY_RESULT"

    def test_unsupported_capability(self):
        error = UnsupportedCapabilityError("future", "progress")
        assert "future" in error.message
        assert error.code == "UNSUPPORTED_CAPABILITY"
