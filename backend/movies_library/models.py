"""Movie record and its field constraints.

A `Movie` can be built with missing or out-of-range fields so callers can
hand any candidate to the controller; `validate_movie` decides whether it may
reach the store.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

MIN_YEAR_RELEASED = 1900
MIN_RATING = 0.0
MAX_RATING = 10.0


def max_year_released() -> int:
    """Latest accepted release year: next calendar year (UTC)."""
    return datetime.now(timezone.utc).year + 1


class Movie(BaseModel):
    """A movie in the catalog. `id` is the store-assigned document id."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(default=None, alias="_id")
    title: str | None = None
    director: str | None = None
    year_released: int | None = None
    genre: str | None = None
    duration: int | None = None  # minutes
    rating: float | None = None


class _MovieConstraints(BaseModel):
    """Strict view of a Movie; construction succeeds only for valid records."""

    title: str = Field(min_length=1)
    director: str = Field(min_length=1)
    year_released: int = Field(ge=MIN_YEAR_RELEASED)
    genre: str = Field(min_length=1)
    duration: int = Field(gt=0)
    rating: float = Field(ge=MIN_RATING, le=MAX_RATING)

    @field_validator("title", "director", "genre")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("year_released")
    @classmethod
    def not_after_next_year(cls, v: int) -> int:
        upper = max_year_released()
        if v > upper:
            raise ValueError(f"must be at most {upper}")
        return v


def movie_validation_errors(movie: Movie) -> list[str]:
    """Return human-readable constraint failures for `movie` (empty if valid)."""
    try:
        _MovieConstraints.model_validate(movie.model_dump(exclude={"id"}))
    except ValidationError as e:
        return [
            f"{'.'.join(str(x) for x in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
    return []


def validate_movie(movie: Movie) -> bool:
    """True if every required field is present and within its constraints."""
    return not movie_validation_errors(movie)
