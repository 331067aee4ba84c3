"""
Movie API endpoints.

Handlers read the raw request instead of declaring a body model so that
decode failures become our 400 rather than FastAPI's 422. Each handler also
re-checks the request method; methods nobody handles on a bound path land
in `method_not_allowed`, which produces the same 405.
"""

from __future__ import annotations

import logging
import re

import pydantic
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import PlainTextResponse

from .errors import MovieServiceError, ValidationError
from .schemas import INT64_MAX, INT64_MIN, Movie
from .service import MovieService, get_movie_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/movies")

SUCCESS_BODY = "success"

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def _method_not_allowed(log_message: str) -> HTTPException:
    logger.warning("[405 - Method Not Allowed] %s", log_message)
    return HTTPException(status_code=status.HTTP_405_METHOD_NOT_ALLOWED, detail="Method not allowed")


def _bad_request(response_message: str, log_message: str) -> HTTPException:
    logger.warning("[400 - Bad Request] %s", log_message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=response_message)


def _server_error(exc: Exception) -> HTTPException:
    logger.error("[500 - Internal Server Error] %s", exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Service unreachable")


def _require_method(request: Request, allowed: str, operation: str) -> None:
    if request.method != allowed:
        raise _method_not_allowed(f"{request.method} method to {operation}")


def _parse_id(raw: str) -> int:
    # int() alone would also take "1_000" and " 1 ".
    try:
        if not _ID_PATTERN.fullmatch(raw):
            raise ValueError(f"invalid syntax: {raw!r}")
        value = int(raw)
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(f"value out of range: {raw!r}")
    except ValueError as exc:
        raise _bad_request("Invalid ID", f"parsing id: {exc}") from exc
    return value


async def _parse_valid_movie(request: Request) -> Movie:
    body = await request.body()
    try:
        movie = Movie.model_validate_json(body)
    except pydantic.ValidationError as exc:
        raise _bad_request("Invalid request body", str(exc)) from exc

    try:
        movie.validate_record()
    except ValidationError as exc:
        raise _bad_request("Invalid request body", "invalid movie-object") from exc
    return movie


@router.get("")
async def list_movies(
    request: Request,
    service: MovieService = Depends(get_movie_service),
) -> list[Movie]:
    _require_method(request, "GET", "GetMovies")
    try:
        return await service.list()
    except MovieServiceError as exc:
        raise _server_error(exc) from exc


@router.get("/{id}")
async def get_movie(
    id: str,
    request: Request,
    service: MovieService = Depends(get_movie_service),
) -> Movie:
    _require_method(request, "GET", "GetMovie")
    movie_id = _parse_id(id)
    try:
        return await service.get(movie_id)
    except MovieServiceError as exc:
        raise _server_error(exc) from exc


@router.post("", status_code=status.HTTP_201_CREATED, response_class=PlainTextResponse)
async def create_movie(
    request: Request,
    service: MovieService = Depends(get_movie_service),
) -> str:
    _require_method(request, "POST", "CreateMovie")
    movie = await _parse_valid_movie(request)
    try:
        await service.create(movie)
    except MovieServiceError as exc:
        raise _server_error(exc) from exc
    return SUCCESS_BODY


@router.put("/{id}", response_class=PlainTextResponse)
async def update_movie(
    id: str,
    request: Request,
    service: MovieService = Depends(get_movie_service),
) -> str:
    _require_method(request, "PUT", "UpdateMovie")
    movie_id = _parse_id(id)
    movie = await _parse_valid_movie(request)
    try:
        await service.update(movie_id, movie)
    except MovieServiceError as exc:
        raise _server_error(exc) from exc
    return SUCCESS_BODY


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_movie(
    id: str,
    request: Request,
    service: MovieService = Depends(get_movie_service),
) -> Response:
    _require_method(request, "DELETE", "DeleteMovie")
    movie_id = _parse_id(id)
    try:
        await service.delete(movie_id)
    except MovieServiceError as exc:
        raise _server_error(exc) from exc
    # 204 carries no body on the wire.
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.api_route("", methods=[m for m in _ALL_METHODS if m not in ("GET", "POST")], include_in_schema=False)
@router.api_route("/{id}", methods=[m for m in _ALL_METHODS if m not in ("GET", "PUT", "DELETE")], include_in_schema=False)
async def method_not_allowed(request: Request) -> None:
    raise _method_not_allowed(f"{request.method} method to {request.url.path}")
