"""Record store backed by SQLModel / async SQLAlchemy."""

from stablecoin_tracker.db.store import RecordStore, SqlRecordStore
from stablecoin_tracker.db.unit_of_work import UnitOfWork, UOWFactoryType, create_uow_factory

__all__ = ["RecordStore", "SqlRecordStore", "UnitOfWork", "UOWFactoryType", "create_uow_factory"]
