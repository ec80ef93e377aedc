from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, datetime, timedelta

DATE_FORMAT = '%Y-%m-%d'

# Currencies published by the European Central Bank reference feed.
SUPPORTED_CURRENCIES: tuple[str, ...] = (
	'AUD', 'BGN', 'BRL', 'CAD', 'CHF', 'CNY', 'CZK', 'DKK', 'EUR', 'GBP', 'HKD',
	'HRK', 'HUF', 'IDR', 'ILS', 'INR', 'ISK', 'JPY', 'KRW', 'MXN', 'MYR', 'NOK',
	'NZD', 'PHP', 'PLN', 'RON', 'RUB', 'SEK', 'SGD', 'THB', 'TRY', 'USD', 'ZAR',
)


def as_day(value: date) -> date:
	"""Truncate a date or datetime to its calendar day."""
	if isinstance(value, datetime):
		return value.date()
	return value


def format_date(value: date) -> str:
	return value.strftime(DATE_FORMAT)


def weekdays_between(start: date, end: date) -> Iterator[date]:
	"""Yield every Monday to Friday in [start, end], inclusive."""
	day = as_day(start)
	last = as_day(end)
	while day <= last:
		if day.weekday() < 5:
			yield day
		day += timedelta(days=1)


@dataclass(frozen=True)
class RateQuery:
	from_currency: str
	to_currency: str
	date: date | None = None
	end_date: date | None = None

	@property
	def is_same_currency(self) -> bool:
		return self.from_currency == self.to_currency
