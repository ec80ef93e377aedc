from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	EXCHANGE_RATES_API_URL: str = 'https://api.exchangeratesapi.io'
	EXCHANGE_RATES_API_KEY: str = ''
	EXCHANGE_RATES_TIMEOUT: float = 10

	REDIS_URL: str = 'redis://localhost:6379'

	# Cache
	CACHE_PREFIX: str = 'xr'
	CACHE_TTL_SECONDS: int | None = None

	LOG_LEVEL: str = 'INFO'

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
