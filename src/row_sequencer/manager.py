import logging
import time
from typing import Any, Callable, Type

import sqlalchemy.orm as so

from .admin import AdminReset
from .allocation import Allocator, Submission
from .config import SequenceConfig
from .locks import LockCoordinatorProtocol, ThreadLockCoordinator
from .reconcile import Reconciler, ReconciliationReport
from .storage import CounterState, MemoryCache, MemoryDurableStore, SQLDurableStore
from .storage.typing import DurableStoreProtocol, FastCacheProtocol
from .tables import SQLTabularStore, find_row_by_id
from .tables.base.typing import SequencedTableProtocol, TabularStoreProtocol

logger = logging.getLogger(__name__)


class SequenceManager:
    """
    Wires an allocator, reconciler and admin reset around one tabular store
    and one set of locks and counter tiers.

    Instances sharing a store must also share the lock coordinator, cache and
    durable store, otherwise mutual exclusion does not hold.
    """

    def __init__(
        self,
        store: TabularStoreProtocol,
        *,
        locks: LockCoordinatorProtocol | None = None,
        cache: FastCacheProtocol | None = None,
        durable: DurableStoreProtocol | None = None,
        config: SequenceConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config or SequenceConfig()
        self.store = store
        self.locks = locks if locks is not None else ThreadLockCoordinator()
        self.counter = CounterState(
            cache if cache is not None else MemoryCache(),
            durable if durable is not None else MemoryDurableStore(),
            self.config,
        )
        self.allocator = Allocator(store, self.locks, self.counter, self.config, sleep=sleep)
        self.reconciler = Reconciler(store, self.locks, self.counter, self.config, sleep=sleep)
        self.admin = AdminReset(self.locks, self.counter, self.config)

    @classmethod
    def for_session(
        cls,
        session: so.Session,
        tableclass: Type[SequencedTableProtocol],
        *,
        config: SequenceConfig | None = None,
        **kwargs: Any,
    ) -> "SequenceManager":
        """
        Build a manager whose rows and durable counter live in the session's database.
        """
        config = config or SequenceConfig()
        store = SQLTabularStore(session, tableclass, id_column=config.id_column)
        if kwargs.get("durable") is None:
            kwargs["durable"] = SQLDurableStore(session)
        return cls(store, config=config, **kwargs)

    def on_submit(self, submission: Any) -> int | None:
        return self.allocator.allocate(submission)

    def submit(self, payload: Any = None, submitted_at: Any = None) -> int | None:
        """
        Append a new row and assign it an id.
        """
        append = getattr(self.store, "append", None)
        if append is None:
            raise TypeError(f"{type(self.store).__name__} does not support appending rows")
        row = append(payload, submitted_at)
        return self.on_submit(Submission(row=row, payload=payload))

    def resolve_last_id(self) -> int:
        return self.allocator.resolve_last_id()

    def nightly_fix_all(self) -> ReconciliationReport:
        return self.reconciler.repair_all()

    def reset_storage(self) -> bool:
        return self.admin.reset_storage()

    def reset_id_storage(self) -> str:
        if self.reset_storage():
            logger.info("Successfully reset ID storage (cache and durable store)")
            return "ID storage reset successfully"
        logger.warning("Failed to reset ID storage")
        return "Failed to reset ID storage"

    def find_row(self, record_id: Any) -> int | None:
        return find_row_by_id(self.store, record_id)
