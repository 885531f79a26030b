import sqlalchemy as sa
import sqlalchemy.orm as so
from sqlalchemy.orm import DeclarativeBase
from row_sequencer.tables import SequencedTableBase


class Base(DeclarativeBase):
    pass


class SubmissionTable(Base, SequencedTableBase):
    __tablename__ = "form_responses"

    ID: so.Mapped[int | None] = so.mapped_column(sa.Integer, nullable=True)


class UnmanagedBase(DeclarativeBase):
    pass


# never created; only used for introspection
class CompositeTable(UnmanagedBase, SequencedTableBase):
    __tablename__ = "composite_responses"

    other: so.Mapped[int] = so.mapped_column(sa.Integer, primary_key=True)
    record_id: so.Mapped[int | None] = so.mapped_column(sa.Integer, nullable=True)
