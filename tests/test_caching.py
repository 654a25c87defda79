"""Tests for the Redis dashboard cache."""

from unittest.mock import MagicMock

from app.core.redis_client import CacheManager


def test_cache_manager_get_json():
    """Test CacheManager get_json method."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    # Test cache miss
    mock_redis.get.return_value = None
    assert cache_manager.get_json("dashboard:users") is None

    # Test cache hit
    mock_redis.reset_mock()
    mock_redis.get.return_value = '[{"role": "citizen"}]'
    assert cache_manager.get_json("dashboard:users") == [{"role": "citizen"}]
    mock_redis.get.assert_called_once_with("dashboard:users")


def test_cache_manager_set_json_with_and_without_ttl():
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    assert cache_manager.set_json("k", {"a": 1}) is True
    mock_redis.set.assert_called_once_with("k", '{"a": 1}')

    assert cache_manager.set_json("k", {"a": 1}, ttl=60) is True
    mock_redis.setex.assert_called_once_with("k", 60, '{"a": 1}')


def test_cache_fails_open():
    """Redis errors never reach the caller."""
    mock_redis = MagicMock()
    mock_redis.get.side_effect = ConnectionError("redis down")
    mock_redis.setex.side_effect = ConnectionError("redis down")
    mock_redis.keys.side_effect = ConnectionError("redis down")
    mock_redis.delete.side_effect = ConnectionError("redis down")
    cache_manager = CacheManager(redis_client=mock_redis)

    assert cache_manager.get_json("k") is None
    assert cache_manager.set_json("k", [], ttl=10) is False
    assert cache_manager.delete("k") is False
    assert cache_manager.invalidate_dashboard() == 0


def test_invalidate_dashboard_deletes_matching_keys():
    mock_redis = MagicMock()
    mock_redis.keys.return_value = ["dashboard:users", "dashboard:centers"]
    mock_redis.delete.return_value = 2
    cache_manager = CacheManager(redis_client=mock_redis)

    assert cache_manager.invalidate_dashboard() == 2
    mock_redis.keys.assert_called_once_with("dashboard:*")
    mock_redis.delete.assert_called_once_with("dashboard:users", "dashboard:centers")


def test_invalidate_dashboard_with_nothing_cached():
    mock_redis = MagicMock()
    mock_redis.keys.return_value = []
    cache_manager = CacheManager(redis_client=mock_redis)

    assert cache_manager.invalidate_dashboard() == 0
    mock_redis.delete.assert_not_called()
