from typing import Protocol, runtime_checkable


@runtime_checkable
class FastCacheProtocol(Protocol):
    """
    Ephemeral key -> string store with a per-entry time-to-live.
    """

    def get(self, key: str) -> str | None: ...

    def put(self, key: str, value: str, ttl: float) -> None: ...

    def remove(self, key: str) -> None: ...


@runtime_checkable
class DurableStoreProtocol(Protocol):
    """
    Persistent key -> string store with no expiry.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...
