from typing import Protocol, ClassVar, runtime_checkable, Any, Sequence
import sqlalchemy.orm as so
import sqlalchemy as sa


@runtime_checkable
class TabularStoreProtocol(Protocol):
    """
    Structural protocol for append-mostly row stores with a designated id column.

    Rows are addressed the way a sheet is: row 1 is the header and data rows
    start at 2, in append order. ``last_row()`` is 1 when there is no data.
    Cell values are returned as stored; callers strict-parse them.
    """

    id_column: str

    def last_row(self) -> int: ...

    def read_ids(self, start_row: int, count: int) -> list[Any]: ...

    def write_ids(self, start_row: int, values: Sequence[Any]) -> None: ...

    def read_id(self, row: int) -> Any: ...

    def write_id(self, row: int, value: Any) -> None: ...


@runtime_checkable
class SequencedTableProtocol(Protocol):
    """
    Structural protocol for ORM-mapped *table classes* usable as a tabular store.
    """

    __tablename__: ClassVar[str]
    __table__: ClassVar[sa.Table]

    @classmethod
    def mapper_for(cls) -> so.Mapper: ...

    @classmethod
    def pk_names(cls) -> list[str]: ...

    @classmethod
    def pk_columns(cls) -> list[sa.ColumnElement]: ...

    @classmethod
    def model_columns(cls) -> dict[str, sa.ColumnElement]: ...

    @classmethod
    def row_order_column(cls) -> sa.ColumnElement: ...

    @classmethod
    def column_for(cls, name: str) -> sa.Column: ...
