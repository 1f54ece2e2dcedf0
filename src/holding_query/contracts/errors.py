"""
Error contracts for the holding query engine.

Every failure a query can report is raised synchronously as one of the
exceptions below. Operations whose contract defines an empty result
(for example summing an empty account list) return that result instead
of raising.

Hierarchy:
    HoldingQueryError
        NotFoundError              single-result lookup had no match
        IndeterminateResultError   "most popular" query ended in a tie
        InvalidArgumentError       caller supplied an out-of-range argument
        ExportError                writing the account export failed

The specific errors also derive from the matching built-in exception
(LookupError, ValueError, OSError) so callers can catch either form.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any


class HoldingQueryError(Exception):
    """Base class for all holding query errors."""


class NotFoundError(HoldingQueryError, LookupError):
    """Exception raised when a single-result lookup has no match."""

    def __init__(self, message: str, query: str | None = None) -> None:
        """
        Initialize NotFoundError.

        Args:
            message: Error message
            query: Name of the query that found nothing
        """
        self.query = query
        super().__init__(f"{message}" + (f" (query: {query})" if query else ""))


class IndeterminateResultError(HoldingQueryError):
    """Exception raised when a query has no single deterministic winner."""

    def __init__(self, message: str, candidates: Iterable[Any] = ()) -> None:
        """
        Initialize IndeterminateResultError.

        Args:
            message: Error message
            candidates: Values tied for the winning position
        """
        self.candidates = tuple(candidates)
        super().__init__(message)


class InvalidArgumentError(HoldingQueryError, ValueError):
    """Exception raised when an argument is outside its permitted range."""

    def __init__(self, argument: str, value: Any, reason: str) -> None:
        """
        Initialize InvalidArgumentError.

        Args:
            argument: Name of the offending argument
            value: Value that was supplied
            reason: Why the value was rejected
        """
        self.argument = argument
        self.value = value
        super().__init__(f"Invalid value for '{argument}': {value!r} ({reason})")


class ExportError(HoldingQueryError, OSError):
    """Exception raised when the account export cannot be written."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        """
        Initialize ExportError.

        Args:
            message: Error message
            path: Target file of the failed export
        """
        self.path = Path(path) if path is not None else None
        super().__init__(f"{message}" + (f" (path: {path})" if path is not None else ""))
