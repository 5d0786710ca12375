"""Tests for settings validation."""

import pytest

from todo_api.config import Settings, settings


def test_defaults():
    assert settings.cache_ttl > 0
    assert settings.store_timeout > 0


def test_rejects_non_positive_ttl():
    with pytest.raises(ValueError, match="CACHE_TTL"):
        Settings(cache_ttl=0)


def test_rejects_non_positive_timeouts():
    with pytest.raises(ValueError, match="STORE_TIMEOUT"):
        Settings(store_timeout=0)
    with pytest.raises(ValueError, match="CACHE_TIMEOUT"):
        Settings(cache_timeout=-1.0)


def test_rejects_bad_pool_size():
    with pytest.raises(ValueError, match="DB_POOL_SIZE"):
        Settings(db_pool_size=0)
