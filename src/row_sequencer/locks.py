import threading
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, Protocol, runtime_checkable

from .errors import LockTimeoutError

logger = logging.getLogger(__name__)

DOCUMENT_LOCK = "document"
ALLOCATION_LOCK = "allocation"

# Every caller that needs both locks takes them in this order.
LOCK_ORDER = (DOCUMENT_LOCK, ALLOCATION_LOCK)


@dataclass(eq=False)
class LockToken:
    """
    Proof of holding a named lock for one critical section.
    """
    name: str
    released: bool = False
    _lock: Any = field(default=None, repr=False)


@runtime_checkable
class LockCoordinatorProtocol(Protocol):

    def acquire(self, lock_name: str, timeout: float) -> LockToken: ...

    def release(self, token: LockToken | None) -> None: ...


class ThreadLockCoordinator:
    """
    In-process coordinator issuing named exclusive locks.

    Locks are created lazily per name and shared by every caller holding a
    reference to the same coordinator. There is no reader/writer distinction.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def _lock_for(self, lock_name: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(lock_name)
            if lock is None:
                lock = threading.Lock()
                self._locks[lock_name] = lock
            return lock

    def acquire(self, lock_name: str, timeout: float) -> LockToken:
        lock = self._lock_for(lock_name)
        if not lock.acquire(timeout=timeout):
            raise LockTimeoutError(lock_name, timeout)
        logger.debug(f"Acquired '{lock_name}' lock")
        return LockToken(name=lock_name, _lock=lock)

    def release(self, token: LockToken | None) -> None:
        """Release a held token. Releasing None or an already released token is a no-op."""
        if token is None or token.released:
            return
        token.released = True
        try:
            token._lock.release()
        except RuntimeError:
            logger.warning(f"'{token.name}' lock was not held at release")
            return
        logger.debug(f"Released '{token.name}' lock")

    def is_locked(self, lock_name: str) -> bool:
        return self._lock_for(lock_name).locked()

@contextmanager
def hold(coordinator: LockCoordinatorProtocol, lock_name: str, timeout: float) -> Iterator[LockToken]:
    """
    Scoped acquisition for any coordinator: the lock is released on every
    exit path once acquired.
    """
    token = coordinator.acquire(lock_name, timeout)
    try:
        yield token
    finally:
        coordinator.release(token)
