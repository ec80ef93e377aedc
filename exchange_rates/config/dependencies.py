import logging
from datetime import timedelta

from redis import Redis

from exchange_rates.application.services import ConversionService, CurrencyValidator, ExchangeRateService
from exchange_rates.config.settings import Settings, get_settings
from exchange_rates.infrastructure.cache.redis_cache import RedisCacheService
from exchange_rates.infrastructure.providers import ExchangeRatesAPIClient, ExchangeRateTransport

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for process-wide singleton dependencies."""

	redis_client: Redis | None = None
	cache: RedisCacheService | None = None
	transport: ExchangeRateTransport | None = None
	validator: CurrencyValidator | None = None
	settings: Settings | None = None


deps = AppDependencies()


def init_dependencies(settings: Settings | None = None) -> None:
	logger.info('Initializing dependencies...')
	settings = settings or get_settings()
	deps.settings = settings

	logging.getLogger('exchange_rates').setLevel(settings.LOG_LEVEL.upper())

	ttl = timedelta(seconds=settings.CACHE_TTL_SECONDS) if settings.CACHE_TTL_SECONDS else None

	deps.redis_client = Redis.from_url(settings.REDIS_URL)
	deps.cache = RedisCacheService(deps.redis_client, prefix=settings.CACHE_PREFIX, ttl=ttl)
	deps.transport = ExchangeRatesAPIClient(
		api_key=settings.EXCHANGE_RATES_API_KEY,
		base_url=settings.EXCHANGE_RATES_API_URL,
		timeout=settings.EXCHANGE_RATES_TIMEOUT,
	)

	# The currency list is loaded through its own service so that a cache bust
	# requested on a caller's service is never consumed by validation.
	currency_lookup = ExchangeRateService(transport=deps.transport, cache=deps.cache)
	deps.validator = CurrencyValidator(currency_source=currency_lookup.currencies)
	logger.info('Dependencies initialized')


def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.transport:
		deps.transport.close()
	if deps.redis_client:
		deps.redis_client.close()

	deps.redis_client = None
	deps.cache = None
	deps.transport = None
	deps.validator = None
	deps.settings = None
	logger.info('Cleanup complete')


def create_exchange_rate_service(settings: Settings | None = None) -> ExchangeRateService:
	"""Return a new service; each one carries its own cache-bust flag.

	Explicit settings that differ from the active ones rewire the shared
	dependencies before the service is built.
	"""
	if deps.transport is None or deps.cache is None or (settings is not None and settings != deps.settings):
		init_dependencies(settings)

	return ExchangeRateService(transport=deps.transport, cache=deps.cache, validator=deps.validator)


def create_conversion_service(settings: Settings | None = None) -> ConversionService:
	return ConversionService(rate_service=create_exchange_rate_service(settings))
