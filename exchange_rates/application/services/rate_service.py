import logging
from datetime import date
from decimal import Decimal
from typing import Any

from exchange_rates.application.services.validation import CurrencyValidator
from exchange_rates.domain.models.currency import RateQuery, format_date, weekdays_between
from exchange_rates.infrastructure.cache.redis_cache import RedisCacheService
from exchange_rates.infrastructure.providers.base import ExchangeRateTransport

logger = logging.getLogger(__name__)

SAME_CURRENCY_RATE = "1.0"


class ExchangeRateService:
    """Looks up exchange rates from the provider, going through the cache.

    Single rates are returned as strings so the provider's precision is
    kept as-is; date ranges are returned as ``{'YYYY-MM-DD': Decimal}``
    ordered by date.
    """

    def __init__(
        self,
        transport: ExchangeRateTransport,
        cache: RedisCacheService,
        validator: CurrencyValidator | None = None,
    ):
        self.transport = transport
        self.cache = cache
        self.validator = validator or CurrencyValidator()
        self._bust_cache = False

    def should_bust_cache(self, bust_cache: bool = True) -> "ExchangeRateService":
        """Evict instead of reading on the next cache lookup only."""
        self._bust_cache = bust_cache
        return self

    def currencies(self) -> list[str]:
        key = self.cache.currencies_key

        cached = self._attempt_to_resolve_from_cache(key)
        if cached is not None:
            return list(cached)

        response = self.transport.request("/latest", {})
        currencies = [response["base"], *response["rates"]]

        self.cache.store_in_cache(key, currencies)
        return currencies

    def exchange_rate(self, from_currency: str, to_currency: str, date: date | None = None) -> str:
        query = RateQuery(from_currency, to_currency, date)

        self.validator.validate_currency_code(from_currency)
        self.validator.validate_currency_code(to_currency)
        if date is not None:
            self.validator.validate_date(date)

        if query.is_same_currency:
            return SAME_CURRENCY_RATE

        key = self.cache.build_cache_key(from_currency, to_currency, date or _today())

        cached = self._attempt_to_resolve_from_cache(key)
        if cached is not None:
            return str(cached)

        if date is not None:
            response = self.transport.request(f"/{format_date(date)}", {"base": from_currency})
        else:
            response = self.transport.request("/latest", {"base": from_currency})
        rate = str(response["rates"][to_currency])

        self.cache.store_in_cache(key, rate)
        return rate

    def exchange_rate_between_date_range(
        self, from_currency: str, to_currency: str, date: date, end_date: date
    ) -> dict[str, Decimal]:
        query = RateQuery(from_currency, to_currency, date, end_date)

        self.validator.validate_currency_code(from_currency)
        self.validator.validate_currency_code(to_currency)
        self.validator.validate_date_range(date, end_date)

        if query.is_same_currency:
            return {format_date(day): Decimal(SAME_CURRENCY_RATE) for day in weekdays_between(date, end_date)}

        key = self.cache.build_cache_key(from_currency, to_currency, date, end_date)

        cached = self._attempt_to_resolve_from_cache(key)
        if cached is not None:
            return _sorted_rates(cached)

        response = self.transport.request(
            "/history",
            {
                "base": from_currency,
                "start_at": format_date(date),
                "end_at": format_date(end_date),
                "symbols": to_currency,
            },
        )
        rates = _sorted_rates({day: rate[to_currency] for day, rate in response["rates"].items()})

        self.cache.store_in_cache(key, rates)
        return rates

    def _attempt_to_resolve_from_cache(self, key: str) -> Any | None:
        if self._bust_cache:
            logger.info(f"Busting cache for {key}")
            self.cache.forget(key)
            self._bust_cache = False
            return None

        return self.cache.get_from_cache(key)


def _today() -> date:
    return date.today()


def _sorted_rates(rates: dict[str, Any]) -> dict[str, Decimal]:
    return {day: Decimal(str(rates[day])) for day in sorted(rates)}
