"""Unit of work protocol."""

from types import TracebackType
from typing import Protocol, Optional


class UnitOfWork(Protocol):
    """
    Transaction boundary shared by the repositories of one request.

    Used as a re-entrant context manager: only the outermost block commits
    (on success) or rolls back (on error).
    """

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        ...
