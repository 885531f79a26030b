import logging

from ..config import SequenceConfig
from ..helpers.parsing import strict_parse_int
from .typing import FastCacheProtocol, DurableStoreProtocol

logger = logging.getLogger(__name__)


class CounterState:
    """
    The last-assigned id, held redundantly in a FastCache (with TTL) and a
    DurableStore (no expiry).

    Reads never raise on bad content: a stored value that does not strictly
    parse as a safe integer reads as None.
    """

    def __init__(
        self,
        cache: FastCacheProtocol,
        durable: DurableStoreProtocol,
        config: SequenceConfig,
    ):
        self.cache = cache
        self.durable = durable
        self.config = config

    def _parse(self, raw: str | None, tier: str) -> int | None:
        if raw is None:
            return None
        value = strict_parse_int(raw)
        if value is None:
            logger.warning(f"Ignoring unparseable {tier} counter value {raw!r}")
        return value

    def cached(self) -> int | None:
        return self._parse(self.cache.get(self.config.cache_key), "cache")

    def durable_value(self) -> int | None:
        return self._parse(self.durable.get(self.config.durable_key), "durable")

    def store(self, value: int) -> None:
        text = str(value)
        self.cache.put(self.config.cache_key, text, self.config.cache_ttl)
        self.durable.set(self.config.durable_key, text)

    def clear(self) -> None:
        self.cache.remove(self.config.cache_key)
        self.durable.delete(self.config.durable_key)
