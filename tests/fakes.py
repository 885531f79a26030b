from row_sequencer.errors import LockTimeoutError, StorageWriteFailure
from row_sequencer.locks import LockToken, ThreadLockCoordinator
from row_sequencer.tables import FrameTabularStore


class UnavailableLocks:
    """Every acquisition times out."""

    def __init__(self, unavailable: set[str] | None = None):
        self.unavailable = unavailable
        self.inner = ThreadLockCoordinator()
        self.attempts: list[str] = []
        self.released: list[LockToken | None] = []

    def acquire(self, lock_name: str, timeout: float) -> LockToken:
        self.attempts.append(lock_name)
        if self.unavailable is None or lock_name in self.unavailable:
            raise LockTimeoutError(lock_name, timeout)
        return self.inner.acquire(lock_name, timeout)

    def release(self, token: LockToken | None) -> None:
        self.released.append(token)
        self.inner.release(token)


class RecordingLocks(ThreadLockCoordinator):
    """Thread locks that log acquire/release order."""

    def __init__(self, events: list | None = None):
        super().__init__()
        self.events = events if events is not None else []

    def acquire(self, lock_name: str, timeout: float) -> LockToken:
        token = super().acquire(lock_name, timeout)
        self.events.append(("acquire", lock_name))
        return token

    def release(self, token: LockToken | None) -> None:
        if token is not None and not token.released:
            self.events.append(("release", token.name))
        super().release(token)


class FlakyWrites:
    """Wraps a store so the first ``failures`` writes raise."""

    def __init__(self, store, failures: int):
        self.store = store
        self.failures = failures
        self.write_calls = 0
        self.id_column = store.id_column

    def last_row(self):
        return self.store.last_row()

    def read_ids(self, start_row, count):
        return self.store.read_ids(start_row, count)

    def read_id(self, row):
        return self.store.read_id(row)

    def write_ids(self, start_row, values):
        self.write_calls += 1
        if self.failures > 0:
            self.failures -= 1
            raise StorageWriteFailure("simulated write failure")
        self.store.write_ids(start_row, values)

    def write_id(self, row, value):
        self.write_ids(row, [value])


class BrokenCounterTier:
    """A cache/durable tier whose every operation raises."""

    def get(self, key):
        raise RuntimeError("tier unavailable")

    def put(self, key, value, ttl):
        raise RuntimeError("tier unavailable")

    def set(self, key, value):
        raise RuntimeError("tier unavailable")

    def remove(self, key):
        raise RuntimeError("tier unavailable")

    def delete(self, key):
        raise RuntimeError("tier unavailable")


def make_frame_store(ids, id_column: str = "ID") -> FrameTabularStore:
    store = FrameTabularStore.empty(id_column)
    for n, value in enumerate(ids):
        row = store.append({"name": f"patient {n}"})
        store.write_id(row, value)
    return store
