"""
Movie persistence (raw SQL).

Each function takes the `Database` handle explicitly; nothing here reaches
for a global pool.
"""

from __future__ import annotations

from core.db import Database

MOVIES_DDL = """
CREATE TABLE IF NOT EXISTS movies (
    id BIGINT PRIMARY KEY,
    name TEXT NOT NULL
)
"""


async def ensure_schema(database: Database) -> None:
    await database.execute(MOVIES_DDL)


async def list_movies(database: Database) -> list[dict]:
    return await database.fetch_all(
        """
        SELECT id, name
        FROM movies
        """
    )


async def get_movie(database: Database, movie_id: int) -> dict | None:
    return await database.fetch_one(
        """
        SELECT id, name
        FROM movies
        WHERE id = $1
        """,
        movie_id,
    )


async def insert_movie(database: Database, *, movie_id: int, name: str) -> None:
    await database.execute(
        """
        INSERT INTO movies (id, name)
        VALUES ($1, $2)
        """,
        movie_id,
        name,
    )


async def update_movie_name(database: Database, movie_id: int, *, name: str) -> None:
    await database.execute(
        """
        UPDATE movies
        SET name = $1
        WHERE id = $2
        """,
        name,
        movie_id,
    )


async def delete_movie(database: Database, movie_id: int) -> None:
    await database.execute(
        """
        DELETE FROM movies
        WHERE id = $1
        """,
        movie_id,
    )
