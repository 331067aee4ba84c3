"""
Service-layer errors.

The HTTP layer catches `MovieServiceError` as a whole; the subclasses exist
so callers (and tests) can tell the conditions apart.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """A movie record is missing a required field."""


class MovieServiceError(RuntimeError):
    pass


class StorageError(MovieServiceError):
    """The query or statement failed in the driver or the database."""


class NotFoundError(MovieServiceError):
    pass


class CorruptDataError(NotFoundError):
    """A row exists but cannot be decoded into a movie."""


class _RecordError(MovieServiceError):
    template = ""

    def __init__(self, identification: str) -> None:
        self.identification = identification
        super().__init__(self.template.format(identification))


class AlreadyExistsError(_RecordError):
    template = "A record by [{}] already exists in the database!"


class NotExistsError(_RecordError):
    template = "A record by [{}] does not exist in the database!"
