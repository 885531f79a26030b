import pytest
import sqlalchemy as sa
import sqlalchemy.orm as so

from row_sequencer import SequenceConfig, ThreadLockCoordinator
from row_sequencer.storage import CounterState, MemoryCache, MemoryDurableStore
from row_sequencer.tables import FrameTabularStore, SQLTabularStore

from tests.models import Base, SubmissionTable


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class RecordingSleep:
    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float):
        self.calls.append(seconds)


@pytest.fixture
def engine():
    return sa.create_engine("sqlite:///:memory:")

@pytest.fixture
def session(engine):
    Base.metadata.create_all(engine)
    with so.Session(engine) as s:
        yield s

@pytest.fixture
def config():
    return SequenceConfig(backoff_base=0.0, batch_pause=0.0, lock_timeout=0.05, reconcile_lock_timeout=0.05)

@pytest.fixture
def clock():
    return FakeClock()

@pytest.fixture
def sleeper():
    return RecordingSleep()

@pytest.fixture
def locks():
    return ThreadLockCoordinator()

@pytest.fixture
def cache(clock):
    return MemoryCache(clock=clock)

@pytest.fixture
def durable():
    return MemoryDurableStore()

@pytest.fixture
def counter(cache, durable, config):
    return CounterState(cache, durable, config)

@pytest.fixture
def frame_store():
    return FrameTabularStore.empty("ID")

@pytest.fixture
def sql_store(session):
    return SQLTabularStore(session, SubmissionTable, id_column="ID")
