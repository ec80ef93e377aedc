from abc import ABC, abstractmethod
from typing import Any


class ExchangeRateTransport(ABC):
    """Performs a GET against the exchange-rate API and returns the decoded body."""

    @abstractmethod
    def request(self, path: str, query: dict[str, str] | None = None) -> dict[str, Any]:
        ...

    def close(self) -> None:
        pass
