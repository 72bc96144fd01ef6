"""SQLAlchemy implementation of UnitOfWork."""

from types import TracebackType
from typing import Optional

from sqlalchemy.orm import Session


class SqlAlchemyUnitOfWork:
    """
    Re-entrant transaction scope over one session.

    Nested blocks join the outer one; the outermost block commits on success
    and rolls back if anything inside raised.
    """

    def __init__(self, db: Session):
        self._db = db
        self._depth = 0

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self._depth += 1
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self._depth -= 1
        if self._depth > 0:
            return
        if exc_type is None:
            self._db.commit()
        else:
            self._db.rollback()
