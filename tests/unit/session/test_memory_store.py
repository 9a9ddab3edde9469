"""Tests for the in-process session store."""

from tasktrack.core.modules.session.store import MemorySessionStore


class TestMemorySessionStore:
    async def test_expired_key_reads_as_absent(self, clock):
        store = MemorySessionStore(clock=clock)
        await store.put("session:a", "x", 10)

        clock.advance(9_999)
        assert await store.get("session:a") == "x"
        clock.advance(1)
        assert await store.get("session:a") is None
        assert len(store) == 0

    async def test_write_sweeps_expired_entries(self, clock):
        store = MemorySessionStore(clock=clock)
        await store.put("session:a", "x", 10)
        await store.put("session:b", "y", 60)
        clock.advance(10_000)

        await store.put("session:c", "z", 10)

        assert len(store) == 2
        assert await store.get("session:b") == "y"
        assert await store.get("session:c") == "z"

    async def test_overwrite_resets_expiry(self, clock):
        store = MemorySessionStore(clock=clock)
        await store.put("session:a", "x", 10)
        clock.advance(5_000)
        await store.put("session:a", "x2", 10)
        clock.advance(6_000)
        assert await store.get("session:a") == "x2"
