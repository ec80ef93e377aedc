class ExchangeRateError(Exception):
    pass


class InvalidCurrencyError(ExchangeRateError):
    pass


class InvalidDateError(ExchangeRateError):
    pass


class ProviderError(ExchangeRateError):
    pass


class CacheError(ExchangeRateError):
    pass
