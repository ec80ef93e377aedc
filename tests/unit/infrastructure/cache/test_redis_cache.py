# nosec B101


import json
from datetime import date, datetime, timedelta
from decimal import Decimal
from unittest.mock import Mock

import pytest
import redis

from exchange_rates.domain.exceptions.currency import CacheError
from exchange_rates.infrastructure.cache.redis_cache import RedisCacheService


# ============================================================================
# TEST: build_cache_key()
# ============================================================================

def test_single_date_key_format():
    cache_service = RedisCacheService(redis_client=Mock())

    key = cache_service.build_cache_key('EUR', 'GBP', date(2019, 11, 8))

    assert key == 'xr_EUR_GBP_2019-11-08'


def test_date_range_key_format():
    cache_service = RedisCacheService(redis_client=Mock())

    key = cache_service.build_cache_key('GBP', 'EUR', date(2019, 11, 4), date(2019, 11, 8))

    assert key == 'xr_GBP_EUR_2019-11-04_2019-11-08'


def test_key_ignores_time_of_day():
    cache_service = RedisCacheService(redis_client=Mock())

    assert cache_service.build_cache_key('EUR', 'GBP', datetime(2019, 11, 8, 23, 59)) == 'xr_EUR_GBP_2019-11-08'


def test_keys_differ_for_distinct_queries():
    cache_service = RedisCacheService(redis_client=Mock())

    keys = {
        cache_service.build_cache_key('EUR', 'GBP', date(2019, 11, 8)),
        cache_service.build_cache_key('GBP', 'EUR', date(2019, 11, 8)),
        cache_service.build_cache_key('EUR', 'GBP', date(2019, 11, 7)),
        cache_service.build_cache_key('EUR', 'GBP', date(2019, 11, 7), date(2019, 11, 8)),
        cache_service.currencies_key,
    }

    assert len(keys) == 5


def test_custom_prefix():
    cache_service = RedisCacheService(redis_client=Mock(), prefix='rates')

    assert cache_service.build_cache_key('EUR', 'GBP', date(2019, 11, 8)) == 'rates_EUR_GBP_2019-11-08'
    assert cache_service.currencies_key == 'rates_currencies'


# ============================================================================
# TEST: get_from_cache()
# ============================================================================

def test_get_cache_hit_decodes_json():
    mock_redis = Mock()
    mock_redis.get.return_value = b'"0.86158"'
    cache_service = RedisCacheService(redis_client=mock_redis)

    assert cache_service.get_from_cache('xr_EUR_GBP_2019-11-08') == '0.86158'
    mock_redis.get.assert_called_once_with('xr_EUR_GBP_2019-11-08')


def test_get_cache_miss_returns_none():
    mock_redis = Mock()
    mock_redis.get.return_value = None
    cache_service = RedisCacheService(redis_client=mock_redis)

    assert cache_service.get_from_cache('xr_EUR_GBP_2019-11-08') is None


def test_get_redis_failure_is_treated_as_miss(caplog):
    mock_redis = Mock()
    mock_redis.get.side_effect = redis.ConnectionError('Connection refused')
    cache_service = RedisCacheService(redis_client=mock_redis)

    assert cache_service.get_from_cache('xr_EUR_GBP_2019-11-08') is None
    assert 'Cache read failed' in caplog.text


def test_get_malformed_json_is_treated_as_miss(caplog):
    mock_redis = Mock()
    mock_redis.get.return_value = '{ invalid json }'
    cache_service = RedisCacheService(redis_client=mock_redis)

    assert cache_service.get_from_cache('xr_EUR_GBP_2019-11-08') is None
    assert 'Invalid json data' in caplog.text


# ============================================================================
# TEST: store_in_cache() / forget()
# ============================================================================

def test_store_serializes_decimals_as_strings():
    mock_redis = Mock()
    cache_service = RedisCacheService(redis_client=mock_redis)

    cache_service.store_in_cache('xr_GBP_EUR_2019-11-04_2019-11-05', {
        '2019-11-04': Decimal('1.1578362356'),
        '2019-11-05': Decimal('1.1612648497'),
    })

    key, payload = mock_redis.set.call_args[0]
    assert key == 'xr_GBP_EUR_2019-11-04_2019-11-05'
    assert json.loads(payload) == {'2019-11-04': '1.1578362356', '2019-11-05': '1.1612648497'}
    assert mock_redis.set.call_args[1] == {'ex': None}


def test_store_uses_configured_ttl():
    mock_redis = Mock()
    cache_service = RedisCacheService(redis_client=mock_redis, ttl=timedelta(hours=1))

    cache_service.store_in_cache('xr_currencies', ['EUR', 'GBP'])

    mock_redis.set.assert_called_once_with('xr_currencies', '["EUR", "GBP"]', ex=timedelta(hours=1))


def test_store_rejects_unserializable_values():
    cache_service = RedisCacheService(redis_client=Mock())

    with pytest.raises(CacheError) as exc_info:
        cache_service.store_in_cache('xr_currencies', object())

    assert 'xr_currencies' in str(exc_info.value)


def test_forget_deletes_key():
    mock_redis = Mock()
    cache_service = RedisCacheService(redis_client=mock_redis)

    cache_service.forget('xr_EUR_GBP_2019-11-08')

    mock_redis.delete.assert_called_once_with('xr_EUR_GBP_2019-11-08')


def test_forget_is_idempotent(cache, redis_client):
    cache.store_in_cache('xr_EUR_GBP_2019-11-08', '0.86158')

    cache.forget('xr_EUR_GBP_2019-11-08')
    cache.forget('xr_EUR_GBP_2019-11-08')

    assert cache.get_from_cache('xr_EUR_GBP_2019-11-08') is None
    assert redis_client.store == {}


def test_store_overwrites_existing_entry(cache):
    cache.store_in_cache('xr_EUR_GBP_2019-11-08', '0.123456')
    cache.store_in_cache('xr_EUR_GBP_2019-11-08', '0.86158')

    assert cache.get_from_cache('xr_EUR_GBP_2019-11-08') == '0.86158'
