import logging
from decimal import Decimal
from typing import Any

import httpx

from exchange_rates.domain.exceptions.currency import ProviderError
from exchange_rates.infrastructure.providers.base import ExchangeRateTransport

logger = logging.getLogger(__name__)


class ExchangeRatesAPIClient(ExchangeRateTransport):
	DEFAULT_BASE_URL = 'https://api.exchangeratesapi.io'

	def __init__(
		self,
		api_key: str,
		base_url: str = DEFAULT_BASE_URL,
		client: httpx.Client | None = None,
		timeout: float = 10,
	):
		self.api_key = api_key
		self.base_url = base_url.rstrip('/')
		self._client = client or httpx.Client(timeout=timeout)

	def request(self, path: str, query: dict[str, str] | None = None) -> dict[str, Any]:
		params = {'access_key': self.api_key, **(query or {})}
		url = f'{self.base_url}/{path.lstrip("/")}'
		logger.info(f'GET {url} {query or {}}')

		try:
			response = self._client.get(url, params=params)
			response.raise_for_status()
			# Decimal keeps the provider's precision intact.
			data = response.json(parse_float=Decimal)
		except httpx.HTTPStatusError as e:
			raise ProviderError(
				f'ExchangeRatesAPI HTTP error {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.RequestError as e:
			raise ProviderError(f'ExchangeRatesAPI request failed: {e.__class__.__name__}') from e
		except ValueError as e:
			raise ProviderError(f'ExchangeRatesAPI response parsing error: {str(e)}') from e

		if not isinstance(data, dict):
			raise ProviderError('ExchangeRatesAPI response parsing error: expected a JSON object')

		if data.get('success') is False or 'error' in data:
			error = data.get('error')
			info = error.get('info', 'Unknown error') if isinstance(error, dict) else error
			raise ProviderError(f'ExchangeRatesAPI error: {info or "Unknown error"}')

		return data

	def close(self) -> None:
		self._client.close()

	def __enter__(self) -> 'ExchangeRatesAPIClient':
		return self

	def __exit__(self, *exc_info) -> None:
		self.close()
