"""Tests for the shorthand SQL builders."""

import pytest

from myoath.domain.exceptions.query_errors import EmptyIdentityError
from myoath.domain.services.sql_builder import (
    build_delete,
    build_insert,
    build_select_one,
    build_upsert,
    quote_identifier,
)


class TestQuoteIdentifier:
    def test_plain(self):
        assert quote_identifier("users") == "`users`"

    def test_embedded_backtick_doubled(self):
        assert quote_identifier("we`ird") == "`we``ird`"


class TestBuildInsert:
    def test_columns_in_insertion_order(self):
        sql, params = build_insert("t", {"b": 2, "a": "x"})
        assert sql == "INSERT INTO `t` (`b`, `a`) VALUES (?, ?)"
        assert params == [2, "x"]

    def test_values_never_interpolated(self):
        sql, params = build_insert("t", {"c": "'; DROP TABLE t; --"})
        assert "DROP" not in sql
        assert params == ["'; DROP TABLE t; --"]

    def test_empty_data(self):
        sql, params = build_insert("t", {})
        assert sql == "INSERT INTO `t` () VALUES ()"
        assert params == []


class TestBuildUpsert:
    def test_disjoint_identity_and_data(self):
        sql, params = build_upsert("t", {"id": 7}, {"c": "x", "d": 1})
        assert sql == (
            "INSERT INTO `t` (`id`, `c`, `d`) VALUES (?, ?, ?) "
            "ON DUPLICATE KEY UPDATE `c` = ?, `d` = ?"
        )
        assert params == [7, "x", 1, "x", 1]

    def test_data_overrides_identity_column_on_conflict(self):
        sql, params = build_upsert("t", {"c": "baz"}, {"c": "bazinga"})
        assert sql == "INSERT INTO `t` (`c`) VALUES (?) ON DUPLICATE KEY UPDATE `c` = ?"
        assert params == ["baz", "bazinga"]

    def test_empty_data_is_noop_update(self):
        sql, params = build_upsert("t", {"id": 1}, {})
        assert sql.endswith("ON DUPLICATE KEY UPDATE `id` = `id`")
        assert params == [1]

    def test_empty_identity(self):
        with pytest.raises(EmptyIdentityError):
            build_upsert("t", {}, {"c": 1})


class TestBuildSelectAndDelete:
    def test_select_one(self):
        sql, params = build_select_one("t", {"a": 1, "b": "x"})
        assert sql == "SELECT * FROM `t` WHERE (`a` = ?) AND (`b` = ?) LIMIT 1"
        assert params == [1, "x"]

    def test_delete(self):
        sql, params = build_delete("t", {"c": "bar"})
        assert sql == "DELETE FROM `t` WHERE (`c` = ?)"
        assert params == ["bar"]

    @pytest.mark.parametrize("builder", [build_select_one, build_delete])
    def test_empty_identity_rejected(self, builder):
        with pytest.raises(EmptyIdentityError) as exc_info:
            builder("t", {})
        assert exc_info.value.code == "EMPTY_IDENTITY"
        assert exc_info.value.table == "t"
