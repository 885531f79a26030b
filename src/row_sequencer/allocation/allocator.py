import logging
import time
from contextlib import ExitStack
from typing import Any, Callable

from ..config import SequenceConfig
from ..errors import InvalidSubmission
from ..helpers.parsing import strict_parse_int
from ..locks import ALLOCATION_LOCK, DOCUMENT_LOCK, LockCoordinatorProtocol, hold
from ..storage.counter import CounterState
from ..tables.base.typing import TabularStoreProtocol
from .results import AttemptResult, AttemptStatus

logger = logging.getLogger(__name__)


class Allocator:
    """
    Assigns the next sequential id to a submitted row under mutual exclusion.

    Each attempt takes the document lock and then the allocation lock,
    resolves the last id (cache, then durable store, then the store's last
    row), writes ``last + increment`` into the target row and persists it as
    the new counter. Recoverable failures are retried with linear backoff up
    to ``max_retries`` attempts; after that the row is left without an id.
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

    def allocate(self, submission: Any) -> int | None:
        """Return the assigned id, or None when no id was assigned."""
        try:
            row = self._validate(submission)
        except InvalidSubmission as e:
            logger.warning(f"{e}; no id assigned")
            return None

        max_retries = self.config.max_retries
        for attempt in range(max_retries):
            is_last = attempt >= max_retries - 1
            result = self._attempt(row, attempt, is_last)

            if result.status is AttemptStatus.SUCCESS:
                logger.info(f"Assigned id {result.value} to row {row}")
                return result.value

            if result.status is AttemptStatus.FATAL:
                logger.warning(f"Giving up on row {row}: {result.error}")
                return None

            logger.warning(
                f"Allocation attempt {attempt + 1}/{max_retries} for row {row} failed: {result.error!r}"
            )
            if not is_last and not self.config.hold_locks_during_backoff:
                self._backoff(attempt)

        logger.warning(f"No id assigned to row {row} after {max_retries} attempts")
        return None

    def _validate(self, submission: Any) -> int:
        row = getattr(submission, "row", None)
        if isinstance(row, bool) or not isinstance(row, int) or row < 2:
            raise InvalidSubmission(row)
        try:
            last_row = self.store.last_row()
        except Exception as e:
            # the attempt re-checks the row under lock
            logger.debug(f"Could not read last row before allocating row {row}: {e!r}")
            return row
        if row > last_row:
            raise InvalidSubmission(row, last_row)
        return row

    def _attempt(self, row: int, attempt: int, is_last: bool) -> AttemptResult:
        with ExitStack() as held:
            try:
                held.enter_context(hold(self.locks, DOCUMENT_LOCK, self.config.lock_timeout))
                held.enter_context(hold(self.locks, ALLOCATION_LOCK, self.config.lock_timeout))

                last_row = self.store.last_row()
                if row > last_row:
                    return AttemptResult.fatal(InvalidSubmission(row, last_row))

                new_id = self.resolve_last_id() + self.config.increment
                self.store.write_id(row, new_id)
                self.counter.store(new_id)
                return AttemptResult.success(new_id)
            except Exception as e:
                # legacy ordering: sleep before the locks of this attempt unwind
                if self.config.hold_locks_during_backoff and not is_last:
                    self._backoff(attempt)
                return AttemptResult.recoverable(e)

    def _backoff(self, attempt: int) -> None:
        delay = self.config.backoff_base * (attempt + 1)
        logger.debug(f"Backing off {delay}s before allocation attempt {attempt + 2}")
        self._sleep(delay)

    def resolve_last_id(self) -> int:
        """
        Last assigned id, by strict priority: cache, durable store, tail row.
        """
        cached = self.counter.cached()
        if cached is not None:
            logger.debug(f"Last id {cached} resolved from cache")
            return cached

        durable = self.counter.durable_value()
        if durable is not None:
            logger.debug(f"Last id {durable} resolved from durable store")
            return durable

        return self._tail_id()

    def _tail_id(self) -> int:
        last_row = self.store.last_row()
        if last_row < 2:
            return self.config.floor_id
        tail = strict_parse_int(self.store.read_id(last_row))
        if tail is None:
            logger.debug(f"Row {last_row} has no usable id; starting from {self.config.floor_id}")
            return self.config.floor_id
        logger.debug(f"Last id {tail} resolved from row {last_row}")
        return tail
