from .base import ExchangeRateTransport
from .exchangeratesapi import ExchangeRatesAPIClient

__all__ = ['ExchangeRateTransport', 'ExchangeRatesAPIClient']
