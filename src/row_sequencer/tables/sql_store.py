import logging
from typing import Any, Sequence, Type

import sqlalchemy as sa
import sqlalchemy.orm as so
from sqlalchemy.exc import SQLAlchemyError

from ..errors import StorageWriteFailure
from ..helpers.parsing import parse_timestamp
from ..helpers.sessions import session_guard
from .base.typing import SequencedTableProtocol

logger = logging.getLogger(__name__)


class SQLTabularStore:
    """
    Tabular store over an ORM table using the SequencedTableBase mixin.

    Data row ``n`` is the (n-2)th row ordered by the row-order primary key.
    Each write commits on its own; a failed write is rolled back and raised
    as StorageWriteFailure. Calls are serialised per session, so one session
    can back several submitter threads.
    """

    def __init__(
        self,
        session: so.Session,
        tableclass: Type[SequencedTableProtocol],
        id_column: str = "ID",
    ):
        if session.bind is None:
            raise RuntimeError("Session is not bound to an engine")
        self.session = session
        self._guard = session_guard(session)
        self.tableclass = tableclass
        self._id_col = tableclass.column_for(id_column)
        self._order_col = tableclass.row_order_column()
        self.id_column = self._id_col.key

    def last_row(self) -> int:
        with self._guard:
            count = self.session.execute(
                sa.select(sa.func.count()).select_from(self.tableclass.__table__)
            ).scalar_one()
        return count + 1

    def _window(self, column: sa.ColumnElement, start_row: int, count: int) -> list[Any]:
        if start_row < 2 or count <= 0:
            return []
        stmt = (
            sa.select(column)
            .order_by(self._order_col)
            .offset(start_row - 2)
            .limit(count)
        )
        with self._guard:
            return list(self.session.execute(stmt).scalars())

    def read_ids(self, start_row: int, count: int) -> list[Any]:
        return self._window(self._id_col, start_row, count)

    def read_id(self, row: int) -> Any:
        values = self.read_ids(row, 1)
        return values[0] if values else None

    def write_ids(self, start_row: int, values: Sequence[Any]) -> None:
        values = list(values)
        if not values:
            return
        table = self.tableclass.__table__
        stmt = (
            sa.update(table)
            .where(table.c[self._order_col.name] == sa.bindparam("_row_key"))
            .values({self._id_col.name: sa.bindparam("_new_id")})
        )
        with self._guard:
            row_keys = self._window(self._order_col, start_row, len(values))
            if len(row_keys) != len(values):
                raise StorageWriteFailure(
                    f"Rows {start_row}..{start_row + len(values) - 1} extend past the last row"
                )
            try:
                self.session.execute(
                    stmt,
                    [{"_row_key": k, "_new_id": v} for k, v in zip(row_keys, values)],
                )
                self.session.commit()
            except SQLAlchemyError as e:
                self.session.rollback()
                logger.error(f"Failed writing {len(values)} id(s) to {table.name} from row {start_row}: {e}")
                raise StorageWriteFailure(f"Could not write ids to {table.name}") from e

    def write_id(self, row: int, value: Any) -> None:
        self.write_ids(row, [value])

    def append(self, payload: Any = None, submitted_at: Any = None) -> int:
        """
        Append a row with no id and return its row number.
        """
        values: dict[str, Any] = {"payload": payload}
        timestamp = parse_timestamp(submitted_at)
        if timestamp is not None:
            values["submitted_at"] = timestamp
        with self._guard:
            try:
                result = self.session.execute(sa.insert(self.tableclass.__table__).values(values))
                row_key = result.inserted_primary_key[0]
                self.session.commit()
            except SQLAlchemyError as e:
                self.session.rollback()
                raise StorageWriteFailure(f"Could not append to {self.tableclass.__tablename__}") from e

            position = self.session.execute(
                sa.select(sa.func.count())
                .select_from(self.tableclass.__table__)
                .where(self._order_col <= row_key)
            ).scalar_one()
        return position + 1
