"""Custom exceptions for the movies library."""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a failed library operation."""

    VALIDATION = "validation"
    ARGUMENT = "argument"
    NOT_FOUND = "not_found"
    INVALID_OPERATION = "invalid_operation"


class MoviesLibraryError(Exception):
    """Base exception for movies library errors."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MovieValidationError(MoviesLibraryError, ValueError):
    """Movie failed field validation; raised before any store call."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str = "Movie is not valid.", errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


class MovieArgumentError(MoviesLibraryError, ValueError):
    """Required string argument was missing or blank."""

    kind = ErrorKind.ARGUMENT


class MovieNotFoundError(MoviesLibraryError, LookupError):
    """Title fragment search matched no movies."""

    kind = ErrorKind.NOT_FOUND


class InvalidMovieOperationError(MoviesLibraryError, RuntimeError):
    """Operation targeted a movie that does not exist."""

    kind = ErrorKind.INVALID_OPERATION
