# tests/services/test_cache_service.py
from unittest.mock import MagicMock, patch

import redis

from app.services.cache_service import CacheService


def _cache_with_client():
    cache = CacheService(enabled=False, ttl_seconds=60)
    cache.redis_client = MagicMock()
    return cache


def test_disabled_cache_is_a_no_op():
    cache = CacheService(enabled=False)

    assert cache.available is False
    assert cache.get_json("categories:x") is None
    assert cache.set_json("categories:x", [1]) is False
    assert cache.invalidate_prefix("categories") == 0


def test_unreachable_redis_disables_cache():
    client = MagicMock()
    client.ping.side_effect = redis.ConnectionError("refused")
    with patch("app.services.cache_service.redis.from_url", return_value=client):
        cache = CacheService(redis_url="redis://cache:6379/2", enabled=True)

    assert cache.available is False


def test_build_key_is_deterministic():
    first = CacheService.build_key("services", take=10, skip=0, provider=None)
    second = CacheService.build_key("services", provider=None, skip=0, take=10)

    assert first == second == "services:provider=None:skip=0:take=10"


def test_set_and_get_json():
    cache = _cache_with_client()

    assert cache.set_json("categories:a", [{"slug": "plumbing"}]) is True
    cache.redis_client.setex.assert_called_once_with(
        "categories:a", 60, '[{"slug":"plumbing"}]'
    )

    cache.redis_client.get.return_value = '[{"slug":"plumbing"}]'
    assert cache.get_json("categories:a") == [{"slug": "plumbing"}]


def test_get_json_tolerates_redis_errors():
    cache = _cache_with_client()
    cache.redis_client.get.side_effect = redis.TimeoutError("slow")

    assert cache.get_json("categories:a") is None


def test_invalidate_prefix():
    cache = _cache_with_client()
    cache.redis_client.scan_iter.return_value = iter(["categories:a", "categories:b"])
    cache.redis_client.delete.return_value = 2

    assert cache.invalidate_prefix("categories") == 2
    cache.redis_client.scan_iter.assert_called_once_with(match="categories*")
    cache.redis_client.delete.assert_called_once_with("categories:a", "categories:b")
