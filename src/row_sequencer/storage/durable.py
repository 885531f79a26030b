import datetime
import logging
import threading

import sqlalchemy as sa
import sqlalchemy.orm as so
from sqlalchemy.exc import SQLAlchemyError

from ..errors import StorageWriteFailure
from ..helpers.sessions import session_guard

logger = logging.getLogger(__name__)


class DurableBase(so.DeclarativeBase):
    pass


class CounterStateRecord(DurableBase):
    """
    One row per persisted key. The allocator only ever writes its counter key.
    """
    __tablename__ = "counter_state"

    key: so.Mapped[str] = so.mapped_column(sa.String(255), primary_key=True)
    value: so.Mapped[str] = so.mapped_column(sa.String(64), nullable=False)
    updated_at: so.Mapped[datetime.datetime] = so.mapped_column(
        sa.DateTime,
        nullable=False,
        default=sa.func.current_timestamp(),
        onupdate=sa.func.current_timestamp(),
    )


class SQLDurableStore:
    """
    DurableStore backed by the ``counter_state`` table.

    Every write commits immediately; a failed write is rolled back and raised
    as StorageWriteFailure. Shares the session guard with any tabular store
    on the same session.
    """

    def __init__(self, session: so.Session, *, create_table: bool = True):
        self.session = session
        self._guard = session_guard(session)
        if create_table:
            if session.bind is None:
                raise RuntimeError("Session is not bound to an engine")
            with self._guard:
                DurableBase.metadata.create_all(session.connection(), tables=[CounterStateRecord.__table__])  # type: ignore[list-item]
                session.commit()

    def get(self, key: str) -> str | None:
        with self._guard:
            return self.session.execute(
                sa.select(CounterStateRecord.value).where(CounterStateRecord.key == key)
            ).scalar_one_or_none()

    def set(self, key: str, value: str) -> None:
        with self._guard:
            try:
                self.session.merge(CounterStateRecord(key=key, value=str(value)))
                self.session.commit()
            except SQLAlchemyError as e:
                self.session.rollback()
                logger.error(f"Failed to persist durable key {key}: {e}")
                raise StorageWriteFailure(f"Could not persist durable key '{key}'") from e

    def delete(self, key: str) -> None:
        with self._guard:
            try:
                self.session.execute(
                    sa.delete(CounterStateRecord).where(CounterStateRecord.key == key)
                )
                self.session.commit()
            except SQLAlchemyError as e:
                self.session.rollback()
                raise StorageWriteFailure(f"Could not delete durable key '{key}'") from e


class MemoryDurableStore:
    """
    Dictionary-backed DurableStore for single-process use and tests.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})
        self._guard = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._guard:
            return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        with self._guard:
            self._values[key] = str(value)

    def delete(self, key: str) -> None:
        with self._guard:
            self._values.pop(key, None)
