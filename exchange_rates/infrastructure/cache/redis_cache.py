import json
import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Any

import redis

from exchange_rates.domain.exceptions.currency import CacheError
from exchange_rates.domain.models.currency import format_date

logger = logging.getLogger(__name__)


class CacheJSONEncoder(json.JSONEncoder):
    def default(self, o):
        if isinstance(o, Decimal):
            return str(o)
        return super().default(o)


class RedisCacheService:
    DEFAULT_PREFIX = "xr"
    CURRENCIES_SUFFIX = "currencies"

    def __init__(
        self,
        redis_client: redis.Redis,
        prefix: str = DEFAULT_PREFIX,
        ttl: timedelta | None = None,
    ):
        self.redis = redis_client
        self.prefix = prefix
        self.ttl = ttl

    @property
    def currencies_key(self) -> str:
        return f"{self.prefix}_{self.CURRENCIES_SUFFIX}"

    def build_cache_key(
        self,
        from_currency: str,
        to_currency: str,
        date: date,
        end_date: date | None = None,
    ) -> str:
        key = f"{self.prefix}_{from_currency}_{to_currency}_{format_date(date)}"
        if end_date is not None:
            key += f"_{format_date(end_date)}"
        return key

    def get_from_cache(self, key: str) -> Any | None:
        """Return the cached value for ``key``, or None on a miss.

        A failing or corrupted store counts as a miss so that lookups fall
        through to the provider instead of failing.
        """
        try:
            data = self.redis.get(key)
        except redis.RedisError as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None

        if data is None:
            logger.debug(f"Cache miss: {key}")
            return None

        try:
            value = json.loads(data)
        except (TypeError, ValueError) as e:
            logger.warning(f"Invalid json data cached under {key}: {e}")
            return None

        logger.debug(f"Cache hit: {key}")
        return value

    def store_in_cache(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value, cls=CacheJSONEncoder)
        except (TypeError, ValueError) as e:
            raise CacheError(f"Cannot cache value for {key}: {e}") from e

        self.redis.set(key, payload, ex=self.ttl)
        logger.debug(f"Cached {key}")

    def forget(self, key: str) -> None:
        self.redis.delete(key)
        logger.debug(f"Evicted {key}")
