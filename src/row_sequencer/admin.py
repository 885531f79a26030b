import logging

from .config import SequenceConfig
from .locks import ALLOCATION_LOCK, DOCUMENT_LOCK, LockCoordinatorProtocol, hold
from .storage.counter import CounterState

logger = logging.getLogger(__name__)


class AdminReset:
    """
    Clears the cached and durable counter so the next allocation re-derives
    it from the store's last row. The tabular store is never touched.
    """

    def __init__(
        self,
        locks: LockCoordinatorProtocol,
        counter: CounterState,
        config: SequenceConfig,
    ):
        self.locks = locks
        self.counter = counter
        self.config = config

    def reset_storage(self) -> bool:
        """Return True when both counter tiers were cleared. Never raises."""
        try:
            with hold(self.locks, DOCUMENT_LOCK, self.config.lock_timeout), \
                    hold(self.locks, ALLOCATION_LOCK, self.config.lock_timeout):
                self.counter.clear()
        except Exception as e:
            logger.error(f"Error resetting id storage: {e!r}")
            return False
        logger.info(f"Cleared counter keys {self.config.cache_key} / {self.config.durable_key}")
        return True
