from .base import (
    SequencedTableBase,
    TabularStoreProtocol,
    SequencedTableProtocol,
)
from .sql_store import SQLTabularStore
from .frame_store import FrameTabularStore
from .lookup import find_row_by_id

__all__ = [
    "SequencedTableBase",
    "TabularStoreProtocol",
    "SequencedTableProtocol",
    "SQLTabularStore",
    "FrameTabularStore",
    "find_row_by_id",
]
