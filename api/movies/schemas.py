"""
Pydantic schema for the movie record.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .errors import ValidationError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class Movie(BaseModel):
    # Strict: "1" is not an id and 5 is not a name. Missing fields take
    # zero values; unknown fields are ignored.
    model_config = ConfigDict(strict=True, extra="ignore")

    id: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)
    name: str = ""

    def validate_record(self) -> None:
        if not self.name:
            raise ValidationError("name is missing")
