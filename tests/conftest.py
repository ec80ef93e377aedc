"""
Shared test fixtures: an in-memory Redis double and a mocked transport.
"""

from unittest.mock import Mock

import pytest

from exchange_rates.application.services import ConversionService, ExchangeRateService
from exchange_rates.infrastructure.cache.redis_cache import RedisCacheService
from exchange_rates.infrastructure.providers.base import ExchangeRateTransport


class InMemoryRedis:
    """Implements the handful of redis.Redis calls the cache service makes."""

    def __init__(self):
        self.store: dict[str, bytes] = {}
        self.expiries: dict[str, object] = {}

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, ex=None):
        self.store[key] = value.encode() if isinstance(value, str) else value
        self.expiries[key] = ex
        return True

    def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
        return removed


@pytest.fixture
def redis_client():
    return InMemoryRedis()


@pytest.fixture
def cache(redis_client):
    return RedisCacheService(redis_client=redis_client)


@pytest.fixture
def transport():
    return Mock(spec=ExchangeRateTransport)


@pytest.fixture
def rate_service(transport, cache):
    return ExchangeRateService(transport=transport, cache=cache)


@pytest.fixture
def conversion_service(rate_service):
    return ConversionService(rate_service=rate_service)
