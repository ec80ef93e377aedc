"""Exchange-rate lookups and conversions backed by exchangeratesapi and Redis."""

from exchange_rates.application.services import ConversionService, CurrencyValidator, ExchangeRateService
from exchange_rates.config.dependencies import create_conversion_service, create_exchange_rate_service
from exchange_rates.domain.exceptions.currency import (
    CacheError,
    ExchangeRateError,
    InvalidCurrencyError,
    InvalidDateError,
    ProviderError,
)

__all__ = [
    "CacheError",
    "ConversionService",
    "CurrencyValidator",
    "ExchangeRateError",
    "ExchangeRateService",
    "InvalidCurrencyError",
    "InvalidDateError",
    "ProviderError",
    "create_conversion_service",
    "create_exchange_rate_service",
]
