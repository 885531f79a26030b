import logging
import time
from typing import Callable

from ..config import SequenceConfig
from ..helpers.parsing import strict_parse_int
from ..locks import DOCUMENT_LOCK, LockCoordinatorProtocol, hold
from ..storage.counter import CounterState
from ..tables.base.typing import TabularStoreProtocol
from .report import ReconciliationReport

logger = logging.getLogger(__name__)


class Reconciler:
    """
    Rewrites the whole id column to ``start_id, start_id + increment, ...``.

    Runs under the document lock only, in fixed-size batches. If a batch
    fails, batches already written keep their corrections and the error
    propagates once the lock is released.
    """

    def __init__(
        self,
        store: TabularStoreProtocol,
        locks: LockCoordinatorProtocol,
        counter: CounterState,
        config: SequenceConfig,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.store = store
        self.locks = locks
        self.counter = counter
        self.config = config
        self._sleep = sleep

    def repair_all(self) -> ReconciliationReport:
        report = ReconciliationReport(start_id=self.config.start_id)
        with hold(self.locks, DOCUMENT_LOCK, self.config.reconcile_lock_timeout):
            try:
                self._repair(report)
            except Exception as e:
                logger.error(
                    f"Reconciliation aborted after {report.batches_written} batch(es) "
                    f"({report.rows_scanned} row(s)): {e}"
                )
                raise
        logger.info(report.summary())
        return report

    def _repair(self, report: ReconciliationReport) -> None:
        batch_size = self.config.batch_size
        increment = self.config.increment
        last_row = self.store.last_row()
        expected_id = self.config.start_id

        for start in range(2, last_row + 1, batch_size):
            if start > 2 and self.config.batch_pause:
                self._sleep(self.config.batch_pause)

            count = min(batch_size, last_row - start + 1)
            current = self.store.read_ids(start, count)
            fixed: list[int] = []
            for offset, value in enumerate(current):
                if strict_parse_int(value) != expected_id:
                    report.record(row=start + offset, previous=value, corrected=expected_id)
                fixed.append(expected_id)
                expected_id += increment

            if not fixed:
                break
            self.store.write_ids(start, fixed)
            report.rows_scanned += len(fixed)
            report.batches_written += 1
            report.final_id = fixed[-1]
            logger.debug(f"Reconciled rows {start}..{start + len(fixed) - 1}")

        if report.final_id is not None:
            self.counter.store(report.final_id)
