"""Exception hierarchy shared by the board, solver and generator packages."""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for every error raised by colorflow."""


class MalformedBoardError(PuzzleError, ValueError):
    """The cell matrix does not describe a well-formed board."""


class InvalidDimensionsError(MalformedBoardError):
    """Width/height are non-positive or describe a single cell."""


class OutOfBoundsError(PuzzleError, IndexError):
    """A path step would leave the board."""


class EmptyPathError(PuzzleError, IndexError):
    """A step was removed from a path that has none."""


class SearchLimitExceededError(PuzzleError, RuntimeError):
    """Raised when a search crosses its configured expansion budget."""

    def __init__(
        self,
        message: str = "Search expansion budget exhausted",
        *,
        limit: int | None = None,
        observed: int | None = None,
    ) -> None:
        super().__init__(message)
        self.limit = limit
        self.observed = observed


class GenerationFailedError(PuzzleError, RuntimeError):
    """No acceptable board was found within the attempt budget."""

    def __init__(self, message: str, *, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


__all__ = [
    "PuzzleError",
    "MalformedBoardError",
    "InvalidDimensionsError",
    "OutOfBoundsError",
    "EmptyPathError",
    "SearchLimitExceededError",
    "GenerationFailedError",
]
