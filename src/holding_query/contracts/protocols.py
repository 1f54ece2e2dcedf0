"""
Protocol definitions for holding query components.

Defines interfaces using Python's Protocol (PEP 544) for structural
typing. Components implementing these protocols can be:
- Easily mocked for unit testing
- Swapped for different implementations

    HoldingLoaderProtocol -> HoldingQueryEngine -> AccountExporter

The loader is the external collaborator that builds the hierarchy once
before any query runs.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from holding_query.domain.entities import Account, Company, Holding, User

T = TypeVar("T")

# Caller-supplied match and conversion logic
UserPredicate = Callable[["User"], bool]
UserConverter = Callable[["User"], T]
CompanyAction = Callable[["Company"], object]


@runtime_checkable
class HoldingLoaderProtocol(Protocol):
    """
    Protocol for components that build the holding hierarchy.

    Implementations may build the tree from mock generators, files or
    databases. The engine never sees the source format.
    """

    def load(self) -> tuple[Holding, ...]:
        """
        Build and return the complete, immutable hierarchy.

        Returns:
            Holdings in their significant order

        Raises:
            DataLoadError: If the hierarchy cannot be built
        """
        ...


@runtime_checkable
class AccountExporterProtocol(Protocol):
    """Protocol for components that write accounts to a file."""

    def export(self, accounts: Iterable[Account], path: str | Path) -> int:
        """
        Write accounts to path.

        Args:
            accounts: Accounts in the order they should be written
            path: Destination file

        Returns:
            Number of lines written

        Raises:
            ExportError: If the file cannot be written
        """
        ...
