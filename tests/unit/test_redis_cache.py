"""Unit tests for CacheService with a mocked redis.asyncio client."""

import json
from unittest.mock import AsyncMock, MagicMock

import redis.asyncio as redis

from care_access.core.config import Settings
from care_access.infrastructure.cache.redis_cache import CacheService


def _service(client: AsyncMock | MagicMock) -> CacheService:
    return CacheService(redis_client=client, settings=Settings(redis_enabled=True))


async def test_get_returns_decoded_json() -> None:
    client = AsyncMock()
    client.get.return_value = json.dumps({"assigned_only": True, "branch_only": False})
    cache = _service(client)
    assert await cache.get("k") == {"assigned_only": True, "branch_only": False}
    client.get.assert_awaited_once_with("k")


async def test_get_miss_returns_none() -> None:
    client = AsyncMock()
    client.get.return_value = None
    assert await _service(client).get("k") is None


async def test_set_uses_setex_with_ttl() -> None:
    client = AsyncMock()
    cache = _service(client)
    assert await cache.set("k", {"a": 1}, ttl=42) is True
    client.setex.assert_awaited_once_with("k", 42, json.dumps({"a": 1}))


async def test_unavailable_cache_returns_defaults() -> None:
    cache = CacheService(settings=Settings())
    assert not cache.is_available()
    assert await cache.get("k") is None
    assert await cache.set("k", 1) is False
    assert await cache.delete("k") is False
    assert await cache.delete_pattern("k*") == 0


async def test_redis_error_is_logged_and_swallowed() -> None:
    client = AsyncMock()
    client.get.side_effect = redis.ResponseError("WRONGTYPE")
    cache = _service(client)
    assert await cache.get("k") is None
    assert cache.is_available()


async def test_connection_loss_retries_after_reconnect(monkeypatch) -> None:
    stale = AsyncMock()
    stale.get.side_effect = redis.ConnectionError("gone")
    fresh = AsyncMock()
    fresh.get.return_value = json.dumps(1)
    cache = _service(stale)

    async def fake_connect() -> None:
        cache.redis = fresh
        cache._connected = True

    monkeypatch.setattr(cache, "connect", fake_connect)
    assert await cache.get("k") == 1
    stale.aclose.assert_awaited_once()


async def test_connection_loss_without_reconnect_disables_cache(monkeypatch) -> None:
    stale = AsyncMock()
    stale.delete.side_effect = redis.ConnectionError("gone")
    cache = _service(stale)
    monkeypatch.setattr(cache, "connect", AsyncMock())
    assert await cache.delete("k") is False
    assert not cache.is_available()


async def test_delete_pattern_scans_and_unlinks() -> None:
    keys = ["role_permission:t1:a", "role_permission:t1:b"]

    async def scan_iter(match: str):
        assert match == "role_permission:t1:*"
        for key in keys:
            yield key

    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=[2])
    pipe_ctx = MagicMock()
    pipe_ctx.__aenter__ = AsyncMock(return_value=pipe)
    pipe_ctx.__aexit__ = AsyncMock(return_value=False)

    client = MagicMock()
    client.scan_iter = scan_iter
    client.pipeline = MagicMock(return_value=pipe_ctx)

    deleted = await _service(client).delete_pattern("role_permission:t1:*")
    assert deleted == 2
    pipe.unlink.assert_called_once_with(*keys)
    client.pipeline.assert_called_once_with(transaction=False)


async def test_disconnect_closes_client() -> None:
    client = AsyncMock()
    cache = _service(client)
    await cache.disconnect()
    client.aclose.assert_awaited_once()
    assert not cache.is_available()
