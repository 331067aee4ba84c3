from __future__ import annotations

from typing import Any

import asyncpg
import pytest
from fastapi.testclient import TestClient

from core import db
from main import app
from movies.service import MovieService


class FakeDatabase:
    """
    In-memory stand-in for `core.db.Database` that understands the handful
    of statements in `movies.repository`.

    `failures` maps a statement keyword (SELECT, INSERT, UPDATE, DELETE) to
    an exception raised the next time such a statement runs.
    """

    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self.failures: dict[str, Exception] = {}
        self.statements: list[str] = []

    def _keyword(self, sql: str) -> str:
        keyword = sql.split(None, 1)[0].upper()
        self.statements.append(keyword)
        failure = self.failures.pop(keyword, None)
        if failure is not None:
            raise failure
        return keyword

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        self._keyword(sql)
        row = self.rows.get(args[0])
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        self._keyword(sql)
        return [dict(row) for row in self.rows.values()]

    async def execute(self, sql: str, *args: Any) -> str:
        keyword = self._keyword(sql)
        if keyword == "INSERT":
            movie_id, name = args
            if movie_id in self.rows:
                raise asyncpg.UniqueViolationError('duplicate key value violates unique constraint "movies_pkey"')
            self.rows[movie_id] = {"id": movie_id, "name": name}
            return "INSERT 0 1"
        if keyword == "UPDATE":
            name, movie_id = args
            if movie_id not in self.rows:
                return "UPDATE 0"
            self.rows[movie_id]["name"] = name
            return "UPDATE 1"
        if keyword == "DELETE":
            removed = self.rows.pop(args[0], None)
            return f"DELETE {0 if removed is None else 1}"
        return keyword


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def service(fake_db: FakeDatabase) -> MovieService:
    return MovieService(fake_db)


@pytest.fixture
def client(fake_db: FakeDatabase):
    app.dependency_overrides[db.get_database] = lambda: fake_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
