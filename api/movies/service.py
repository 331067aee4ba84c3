"""
Movie business logic.

`MovieService` owns the read-then-write rules for create/update and turns
driver failures into the errors in `movies.errors`. It is built per request
around an injected `Database` handle (see `get_movie_service`).
"""

from __future__ import annotations

import asyncio
from contextlib import contextmanager
from typing import Iterator

import asyncpg
import pydantic
from fastapi import Depends

from core import db

from . import repository
from .errors import AlreadyExistsError, CorruptDataError, NotExistsError, NotFoundError, StorageError
from .schemas import Movie

# command_timeout surfaces as asyncio.TimeoutError, which is not an OSError before 3.11.
_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


@contextmanager
def _storage_errors() -> Iterator[None]:
    try:
        yield
    except _DRIVER_ERRORS as exc:
        raise StorageError(str(exc) or type(exc).__name__) from exc


def _identification(movie_id: int) -> str:
    return f"ID: {movie_id}"


class MovieService:
    def __init__(self, database: db.Database) -> None:
        self._db = database

    async def list(self) -> list[Movie]:
        with _storage_errors():
            rows = await repository.list_movies(self._db)
        try:
            return [Movie.model_validate(row) for row in rows]
        except pydantic.ValidationError as exc:
            raise StorageError(f"Malformed movie row: {exc}") from exc

    async def get(self, movie_id: int) -> Movie:
        with _storage_errors():
            row = await repository.get_movie(self._db, movie_id)
        if row is None:
            raise NotFoundError(f"No movie with id {movie_id}.")
        try:
            return Movie.model_validate(row)
        except pydantic.ValidationError as exc:
            raise CorruptDataError(f"Movie row {movie_id} cannot be decoded: {exc}") from exc

    async def create(self, movie: Movie) -> None:
        try:
            await self.get(movie.id)
        except NotFoundError:
            pass
        else:
            raise AlreadyExistsError(_identification(movie.id))

        # The primary key closes the gap between the lookup and the insert.
        try:
            with _storage_errors():
                await repository.insert_movie(self._db, movie_id=movie.id, name=movie.name)
        except StorageError as exc:
            if isinstance(exc.__cause__, asyncpg.UniqueViolationError):
                raise AlreadyExistsError(_identification(movie.id)) from exc.__cause__
            raise

    async def update(self, movie_id: int, movie: Movie) -> None:
        try:
            await self.get(movie_id)
        except NotFoundError as exc:
            raise NotExistsError(_identification(movie_id)) from exc

        with _storage_errors():
            await repository.update_movie_name(self._db, movie_id, name=movie.name)

    async def delete(self, movie_id: int) -> None:
        with _storage_errors():
            await repository.delete_movie(self._db, movie_id)


def get_movie_service(database: db.Database = Depends(db.get_database)) -> MovieService:
    return MovieService(database)
