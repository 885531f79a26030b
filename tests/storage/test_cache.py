from row_sequencer.storage import MemoryCache


def test_put_and_get(cache):
    cache.put("ID_LAST_ID", "7", 60)
    assert cache.get("ID_LAST_ID") == "7"

def test_entries_expire_after_ttl(cache, clock):
    cache.put("ID_LAST_ID", "7", 60)
    clock.advance(59.9)
    assert cache.get("ID_LAST_ID") == "7"
    clock.advance(0.1)
    assert cache.get("ID_LAST_ID") is None
    cache.put("ID_LAST_ID", "8", 60)
    assert cache.get("ID_LAST_ID") == "8"

def test_remove_is_idempotent(cache):
    cache.put("k", "v", 10)
    cache.remove("k")
    cache.remove("k")
    assert cache.get("k") is None

def test_values_are_stored_as_strings():
    cache = MemoryCache()
    cache.put("k", 12, 10)  # type: ignore[arg-type]
    assert cache.get("k") == "12"
