from types import SimpleNamespace

import pytest


class FakeQuery:
    """Chainable stand-in for a supabase table query builder."""

    def __init__(self, table: "FakeTable") -> None:
        self.table = table
        self.calls: list[tuple] = []
        self.payload = None

    def __getattr__(self, name):
        if name in {"select", "eq", "gte", "lte", "order", "limit", "in_", "delete"}:
            def _record(*args, **kwargs):
                self.calls.append((name, args, kwargs))
                return self

            return _record
        raise AttributeError(name)

    def insert(self, payload):
        self.calls.append(("insert", (payload,), {}))
        self.payload = payload
        return self

    def execute(self):
        self.table.queries.append(self)
        if self.table.error is not None:
            raise self.table.error
        if self.payload is not None:
            return SimpleNamespace(data=[{"id": self.table.next_id, **self.payload}])
        return SimpleNamespace(data=list(self.table.rows))


class FakeTable:
    def __init__(self, rows=None, error=None, next_id="route-1") -> None:
        self.rows = rows or []
        self.error = error
        self.next_id = next_id
        self.queries: list[FakeQuery] = []


class FakeSupabase:
    def __init__(self, **tables: FakeTable) -> None:
        self.tables = tables

    def table(self, name: str) -> FakeQuery:
        table = self.tables.setdefault(name, FakeTable())
        return FakeQuery(table)


@pytest.fixture
def fake_supabase():
    return FakeSupabase


@pytest.fixture
def fake_table():
    return FakeTable
