import datetime
import sqlalchemy as sa
import sqlalchemy.orm as so
from typing import Any, Type, cast
import logging

from ...errors import ConfigurationError

logger = logging.getLogger(__name__)

class SequencedTableBase:
    """
    Mixin for SQLAlchemy ORM-mapped tables holding sequenced submissions:

    - an autoincrementing row-order primary key (append order)
    - a submission timestamp and an opaque JSON payload
    - primary key and id column introspection

    The id column itself is declared by the concrete table, under whatever
    name the deployment configures.
    """

    __abstract__ = True

    row_num: so.Mapped[int] = so.mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    submitted_at: so.Mapped[datetime.datetime] = so.mapped_column(
        sa.DateTime, nullable=False, default=sa.func.current_timestamp()
    )
    payload: so.Mapped[Any] = so.mapped_column(sa.JSON, nullable=True)

    @classmethod
    def mapper_for(cls: Type) -> so.Mapper:
        mapper = sa.inspect(cls)
        if not mapper:
            raise TypeError(f"{cls.__name__} is not a mapped ORM class")
        return cast(so.Mapper, mapper)

    @classmethod
    def pk_columns(cls) -> list[sa.ColumnElement]:
        pks = list(cls.mapper_for().primary_key)
        if not pks:
            raise ValueError(f"{cls.__name__} has no primary key")
        return pks

    @classmethod
    def pk_names(cls) -> list[str]:
        return [c.key for c in cls.pk_columns() if c.key is not None]

    @classmethod
    def model_columns(cls) -> dict[str, sa.ColumnElement]:
        mapper = cls.mapper_for()
        return {c.key: c for c in mapper.columns if c.key is not None}

    @classmethod
    def row_order_column(cls) -> sa.ColumnElement:
        pks = cls.pk_columns()
        if len(pks) != 1:
            raise ValueError(
                f"{cls.__name__} has composite PK; row ordering not supported"
            )
        return pks[0]

    @classmethod
    def column_for(cls, name: str) -> sa.Column:
        """
        Resolve the designated id column by name, case-insensitively, the way
        a header lookup would.
        """
        columns = cls.model_columns()
        if name in columns:
            return cast(sa.Column, columns[name])
        lowered = {k.lower(): c for k, c in columns.items()}
        col = lowered.get(name.lower())
        if col is None:
            raise ConfigurationError(f'ID column "{name}" not found on {cls.__name__}')
        return cast(sa.Column, col)

