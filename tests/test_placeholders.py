"""Tests for qmark → format placeholder translation."""

import pytest

from myoath.infrastructure.persistence.placeholders import qmark_to_format


class TestQmarkToFormat:
    @pytest.mark.parametrize(
        "sql, expected",
        [
            ("SELECT * FROM t WHERE c = ?", "SELECT * FROM t WHERE c = %s"),
            ("INSERT INTO t (a, b) VALUES (?, ?)", "INSERT INTO t (a, b) VALUES (%s, %s)"),
            ("SELECT 'why?' FROM t WHERE c = ?", "SELECT 'why?' FROM t WHERE c = %s"),
            ('SELECT "a?b", ?', 'SELECT "a?b", %s'),
            ("SELECT `we?ird` FROM t WHERE c = ?", "SELECT `we?ird` FROM t WHERE c = %s"),
            ("SELECT 'it''s?' , ?", "SELECT 'it''s?' , %s"),
            ("SELECT 'a\\'?' , ?", "SELECT 'a\\'?' , %s"),
        ],
    )
    def test_placeholders(self, sql, expected):
        assert qmark_to_format(sql) == expected

    def test_percent_doubled_everywhere(self):
        sql = "SELECT * FROM t WHERE c LIKE 'foo%' AND d = ? AND e % 2 = 0"
        assert qmark_to_format(sql) == (
            "SELECT * FROM t WHERE c LIKE 'foo%%' AND d = %s AND e %% 2 = 0"
        )

    def test_comments_left_alone(self):
        sql = "SELECT ? -- really?\n, ? /* what? */ # huh?"
        assert qmark_to_format(sql) == "SELECT %s -- really?\n, %s /* what? */ # huh?"

    def test_double_dash_without_space_is_not_comment(self):
        assert qmark_to_format("SELECT 1--?") == "SELECT 1--%s"
