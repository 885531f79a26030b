from dataclasses import dataclass, replace as dc_replace
from typing import Any

from .errors import ConfigurationError

_COUNTER_SUFFIX = "LAST_ID"

@dataclass(frozen=True)
class SequenceConfig:
    """
    Immutable configuration shared by the allocator, reconciler and admin reset.

    Timeouts, backoff and pauses are in seconds.
    """

    id_column: str = "ID"
    start_id: int = 1
    increment: int = 1
    max_retries: int = 3
    batch_size: int = 500
    cache_ttl: int = 21600
    cache_prefix: str = "ID_"
    durable_prefix: str = "ID_"

    lock_timeout: float = 10.0
    reconcile_lock_timeout: float = 30.0
    backoff_base: float = 2.0
    batch_pause: float = 1.0
    hold_locks_during_backoff: bool = False

    def __post_init__(self):
        if not self.id_column:
            raise ConfigurationError("id_column must be a non-empty column name")
        if self.increment <= 0:
            raise ConfigurationError(
                f"increment must be positive for strictly increasing ids, got {self.increment}"
            )
        if self.max_retries < 1:
            raise ConfigurationError(f"max_retries must be at least 1, got {self.max_retries}")
        if self.batch_size < 1:
            raise ConfigurationError(f"batch_size must be at least 1, got {self.batch_size}")
        if self.cache_ttl <= 0:
            raise ConfigurationError(f"cache_ttl must be positive, got {self.cache_ttl}")
        for name in ("lock_timeout", "reconcile_lock_timeout", "backoff_base", "batch_pause"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} cannot be negative")

    @property
    def cache_key(self) -> str:
        return f"{self.cache_prefix}{_COUNTER_SUFFIX}"

    @property
    def durable_key(self) -> str:
        return f"{self.durable_prefix}{_COUNTER_SUFFIX}"

    @property
    def floor_id(self) -> int:
        """The counter value that makes the next allocation yield start_id."""
        return self.start_id - self.increment

    def replace(self, **changes: Any) -> "SequenceConfig":
        return dc_replace(self, **changes)
