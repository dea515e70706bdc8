"""Shared fixtures: an in-memory connection pool and facades over it."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Sequence

import pytest

from myoath.application.ports.connection_pool import IConnectionPool, IRowStream
from myoath.application.services.query_facade import QueryFacade
from myoath.domain.entities.query_result import FieldDescriptor, QueryResult
from myoath.infrastructure.promises.asyncio_promises import get_promise_library


def make_result(columns: Sequence[str], *values: Sequence[Any], **extra: Any) -> QueryResult:
    """QueryResult with one dict per value tuple."""
    return QueryResult(
        rows=[dict(zip(columns, row)) for row in values],
        fields=[FieldDescriptor(name=c) for c in columns],
        **extra,
    )


class FakeRowStream(IRowStream):
    def __init__(self, fields, rows, error):
        self._fields = fields
        self._rows_data = rows
        self._error = error

    @property
    def fields(self) -> List[FieldDescriptor]:
        return self._fields

    def __aiter__(self):
        return self._rows()

    async def _rows(self):
        for row in self._rows_data:
            await asyncio.sleep(0)
            yield row
        if self._error is not None:
            raise self._error


class FakeConnectionPool(IConnectionPool):
    """Records every statement; answers from canned results."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.results: Dict[str, QueryResult] = {}
        self.errors: Dict[str, Exception] = {}
        self.default_result = QueryResult()
        self.stream_fields: List[FieldDescriptor] = []
        self.stream_rows: List[dict] = []
        self.stream_error: Optional[Exception] = None
        self.close_error: Optional[Exception] = None
        self.closed = False

    def _record(self, sql, params):
        self.calls.append((sql, list(params) if params else []))
        if self.closed:
            raise RuntimeError("Connection pool is closed")

    async def query(self, sql, params=None):
        self._record(sql, params)
        await asyncio.sleep(0)
        if sql in self.errors:
            raise self.errors[sql]
        return self.results.get(sql, self.default_result)

    @asynccontextmanager
    async def stream(self, sql, params=None):
        self._record(sql, params)
        yield FakeRowStream(self.stream_fields, self.stream_rows, self.stream_error)

    async def close(self):
        if self.close_error is not None:
            raise self.close_error
        self.closed = True


@pytest.fixture
def fake_pool() -> FakeConnectionPool:
    return FakeConnectionPool()


@pytest.fixture(params=["asyncio", "future"])
def facade(request, fake_pool) -> QueryFacade:
    """A facade over the fake pool, once per shipped promise library."""
    return QueryFacade(fake_pool, get_promise_library(request.param))


@pytest.fixture
def progress_facade(fake_pool) -> QueryFacade:
    return QueryFacade(fake_pool, get_promise_library("asyncio"))


@pytest.fixture
def plain_facade(fake_pool) -> QueryFacade:
    return QueryFacade(fake_pool, get_promise_library("future"))


@pytest.fixture
def log_lines(facade) -> List[str]:
    lines: List[str] = []
    facade.add_logger(lines.append)
    return lines


async def drain(ticks: int = 10) -> None:
    """Let scheduled callbacks run."""
    for _ in range(ticks):
        await asyncio.sleep(0)
