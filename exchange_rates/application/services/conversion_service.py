from datetime import date
from decimal import Decimal

from exchange_rates.application.services.rate_service import ExchangeRateService


def _to_decimal(amount: int | float | Decimal) -> Decimal:
	return amount if isinstance(amount, Decimal) else Decimal(str(amount))


class ConversionService:
	def __init__(self, rate_service: ExchangeRateService):
		self.rate_service = rate_service

	def convert(
		self, amount: int | float | Decimal, from_currency: str, to_currency: str, date: date | None = None
	) -> Decimal:
		rate = self.rate_service.exchange_rate(from_currency, to_currency, date)
		return Decimal(rate) * _to_decimal(amount)

	def convert_between_date_range(
		self,
		amount: int | float | Decimal,
		from_currency: str,
		to_currency: str,
		date: date,
		end_date: date,
	) -> dict[str, Decimal]:
		rates = self.rate_service.exchange_rate_between_date_range(from_currency, to_currency, date, end_date)
		value = _to_decimal(amount)

		conversions = {day: Decimal(rate) * value for day, rate in rates.items()}
		return dict(sorted(conversions.items()))
