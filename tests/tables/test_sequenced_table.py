import pytest
from sqlalchemy.exc import NoInspectionAvailable

from row_sequencer.errors import ConfigurationError
from row_sequencer.tables import SequencedTableBase
from row_sequencer.tables.base.typing import SequencedTableProtocol

from tests.models import CompositeTable, SubmissionTable


def test_pk_introspection():
    assert SubmissionTable.pk_names() == ["row_num"]
    assert SubmissionTable.row_order_column().key == "row_num"

def test_protocol_conformance():
    assert isinstance(SubmissionTable, SequencedTableProtocol)

def test_mixin_columns_present():
    cols = SubmissionTable.model_columns()
    assert {"row_num", "submitted_at", "payload", "ID"} <= set(cols)

def test_column_lookup_is_case_insensitive():
    assert SubmissionTable.column_for("ID").key == "ID"
    assert SubmissionTable.column_for("id").key == "ID"

def test_missing_id_column_raises():
    with pytest.raises(ConfigurationError, match="not found"):
        SubmissionTable.column_for("Patient ID")

def test_composite_pk_has_no_row_order():
    with pytest.raises(ValueError, match="composite"):
        CompositeTable.row_order_column()

def test_unmapped_class_raises():
    class T(SequencedTableBase):
        __tablename__ = "t"
    with pytest.raises(NoInspectionAvailable):
        T.pk_columns()
