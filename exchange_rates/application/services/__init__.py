from .conversion_service import ConversionService
from .rate_service import ExchangeRateService
from .validation import CurrencyValidator

__all__ = ['ConversionService', 'CurrencyValidator', 'ExchangeRateService']
