import asyncio

from pinpoint.cache import TTLCache


def test_get_and_set():
    async def scenario():
        cache = TTLCache(ttl_seconds=60)
        assert await cache.get("a") is None
        await cache.set("a", 1)
        assert await cache.get("a") == 1
        assert await cache.invalidate("a") is True
        assert await cache.invalidate("a") is False
        await cache.set("b", 2)
        await cache.clear()
        assert await cache.get("b") is None

    asyncio.run(scenario())


def test_entries_expire():
    async def scenario():
        cache = TTLCache(ttl_seconds=0.05)
        await cache.set("a", 1)
        await cache.set("b", 2, ttl_seconds=60)
        await asyncio.sleep(0.1)
        assert await cache.get("a") is None
        assert await cache.get("b") == 2

        await cache.set("c", 3)
        await cache.set("d", 4)
        await asyncio.sleep(0.1)
        assert await cache.purge_expired() == 2
        assert await cache.get("b") == 2

    asyncio.run(scenario())


def test_refresh_slides_expiry():
    async def scenario():
        cache = TTLCache(ttl_seconds=0.2)
        await cache.set("a", 1)
        await asyncio.sleep(0.12)
        assert await cache.get("a", refresh=True) == 1
        await asyncio.sleep(0.12)
        assert await cache.get("a") == 1

    asyncio.run(scenario())


def test_non_positive_ttl_drops_entry():
    async def scenario():
        cache = TTLCache(ttl_seconds=60)
        await cache.set("a", 1)
        await cache.set("a", 2, ttl_seconds=0)
        assert await cache.get("a") is None

    asyncio.run(scenario())
