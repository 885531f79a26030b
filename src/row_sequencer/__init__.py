from .config import SequenceConfig
from .errors import (
    SequencerError,
    ConfigurationError,
    InvalidSubmission,
    LockTimeoutError,
    StorageWriteFailure,
)
from .locks import (
    ThreadLockCoordinator,
    LockToken,
    DOCUMENT_LOCK,
    ALLOCATION_LOCK,
)
from .allocation import Allocator, Submission, AttemptResult, AttemptStatus
from .reconcile import Reconciler, ReconciliationReport
from .admin import AdminReset
from .storage import CounterState, MemoryCache, MemoryDurableStore, SQLDurableStore
from .tables import (
    SequencedTableBase,
    SQLTabularStore,
    FrameTabularStore,
    find_row_by_id,
)
from .manager import SequenceManager

__all__ = [
    "SequenceConfig",
    "SequencerError",
    "ConfigurationError",
    "InvalidSubmission",
    "LockTimeoutError",
    "StorageWriteFailure",
    "ThreadLockCoordinator",
    "LockToken",
    "DOCUMENT_LOCK",
    "ALLOCATION_LOCK",
    "Allocator",
    "Submission",
    "AttemptResult",
    "AttemptStatus",
    "Reconciler",
    "ReconciliationReport",
    "AdminReset",
    "CounterState",
    "MemoryCache",
    "MemoryDurableStore",
    "SQLDurableStore",
    "SequencedTableBase",
    "SQLTabularStore",
    "FrameTabularStore",
    "find_row_by_id",
    "SequenceManager",
]
