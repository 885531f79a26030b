from .orm_table import SequencedTableBase
from .typing import TabularStoreProtocol, SequencedTableProtocol

__all__ = [
    "SequencedTableBase",
    "TabularStoreProtocol",
    "SequencedTableProtocol",
]
