"""SQLAlchemy implementation of MarketControlRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from brokerage.core.timezone import to_utc
from brokerage.domain.models import MarketControlEntry
from brokerage.repositories.sqlalchemy.orm_models import MarketControlORM


class SqlAlchemyMarketControlRepository:
    """SQLAlchemy-backed market control repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, bucket: str) -> Optional[MarketControlEntry]:
        """Retrieve the control entry for a bucket."""
        orm_control = (
            self._db.query(MarketControlORM)
            .populate_existing()
            .filter(MarketControlORM.bucket == bucket)
            .first()
        )
        return self._to_domain(orm_control) if orm_control else None

    def list_all(self) -> list[MarketControlEntry]:
        """List all control entries."""
        orm_controls = self._db.query(MarketControlORM).order_by(MarketControlORM.bucket).all()
        return [self._to_domain(c) for c in orm_controls]

    def upsert(self, entry: MarketControlEntry) -> MarketControlEntry:
        """Insert or update the entry keyed by bucket."""
        orm_control = (
            self._db.query(MarketControlORM)
            .filter(MarketControlORM.bucket == entry.bucket)
            .first()
        )

        if orm_control:
            orm_control.active = entry.active
            orm_control.price_override = entry.price_override
            orm_control.paused_at = entry.paused_at
        else:
            orm_control = MarketControlORM(
                bucket=entry.bucket,
                active=entry.active,
                price_override=entry.price_override,
                paused_at=entry.paused_at,
            )
            self._db.add(orm_control)

        self._db.flush()
        return self._to_domain(orm_control)

    @staticmethod
    def _to_domain(orm: MarketControlORM) -> MarketControlEntry:
        """Convert ORM model to domain model."""
        return MarketControlEntry(
            bucket=orm.bucket,
            active=bool(orm.active),
            price_override=(
                Decimal(str(orm.price_override)) if orm.price_override is not None else None
            ),
            paused_at=to_utc(orm.paused_at) if orm.paused_at else None,
        )
