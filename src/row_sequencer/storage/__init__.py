from .cache import MemoryCache
from .durable import SQLDurableStore, MemoryDurableStore, CounterStateRecord
from .counter import CounterState
from .typing import FastCacheProtocol, DurableStoreProtocol

__all__ = [
    "MemoryCache",
    "SQLDurableStore",
    "MemoryDurableStore",
    "CounterStateRecord",
    "CounterState",
    "FastCacheProtocol",
    "DurableStoreProtocol",
]
