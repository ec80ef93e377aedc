import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime

from exchange_rates.domain.exceptions.currency import (
	InvalidCurrencyError,
	InvalidDateError,
	ProviderError,
)
from exchange_rates.domain.models.currency import SUPPORTED_CURRENCIES, as_day

logger = logging.getLogger(__name__)


def _is_in_future(value: date) -> bool:
	if isinstance(value, datetime):
		return value > datetime.now(value.tzinfo)
	return value > date.today()


class CurrencyValidator:
	"""Validates currency codes and dates before any cache or network access.

	The known currency set is resolved once, on first use. When a
	``currency_source`` is given it is asked for the list (normally the
	provider's currency-list lookup); otherwise, or when that lookup fails,
	the static ``SUPPORTED_CURRENCIES`` list is used.
	"""

	def __init__(self, currency_source: Callable[[], Iterable[str]] | None = None):
		self.currency_source = currency_source
		self._known_currencies: frozenset[str] | None = None

	@property
	def known_currencies(self) -> frozenset[str]:
		if self._known_currencies is None:
			self._known_currencies = self._load_currencies()
		return self._known_currencies

	def _load_currencies(self) -> frozenset[str]:
		if self.currency_source is None:
			return frozenset(SUPPORTED_CURRENCIES)

		try:
			currencies = frozenset(self.currency_source())
		except ProviderError as e:
			logger.warning(f'Falling back to static currency list: {e}')
			return frozenset(SUPPORTED_CURRENCIES)

		logger.info(f'Loaded {len(currencies)} supported currencies')
		return currencies

	def validate_currency_code(self, code: str) -> None:
		if len(code) != 3 or code not in self.known_currencies:
			raise InvalidCurrencyError(f'{code} is not a valid currency code.')

	def validate_date(self, value: date) -> None:
		if _is_in_future(value):
			raise InvalidDateError('The date must be in the past.')

	def validate_date_range(self, start: date, end: date) -> None:
		self.validate_date(start)
		self.validate_date(end)

		if as_day(start) > as_day(end):
			raise InvalidDateError("The 'from' date must be before the 'to' date.")
