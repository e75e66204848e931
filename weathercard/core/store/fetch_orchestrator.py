"""Runs weather fetches and reconciles their outcome into the store."""

import logging
from typing import TYPE_CHECKING
from weathercard.core.errors import WeatherClientError, WeatherTransportError
from weathercard.core.weather_api import WeatherFetcher
from weathercard.models.state import (
    ApplicationError,
    ClientError,
    FetchResult,
    FetchSuccess,
    TransportError,
)

if TYPE_CHECKING:
    from weathercard.core.store.state_store import WeatherStateStore

logger = logging.getLogger(__name__)

TRANSPORT_ERROR_PREFIX = "Network request failed"
CLIENT_ERROR_PREFIX = "Weather client is not set up"


class FetchOrchestrator:
    """
    One fetch per call, one terminal write per applied fetch.

    Every fetch is stamped with a generation when it starts. When
    `discard_stale_results` is set, a result whose generation has been
    superseded is dropped so the most recently selected city wins. Otherwise
    results are applied in completion order (last writer wins).
    """

    def __init__(
        self,
        store: "WeatherStateStore",
        fetcher: WeatherFetcher,
        discard_stale_results: bool = True,
    ):
        self._store = store
        self._fetcher = fetcher
        self.discard_stale_results = discard_stale_results
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self, city: str) -> int:
        """Marks the store as loading and returns the new fetch's generation."""
        self._generation += 1
        logger.info(f"Starting fetch #{self._generation} for '{city}'")
        self._store.mark_loading()
        return self._generation

    async def run(self, city: str, generation: int) -> FetchResult:
        """Calls the fetcher and applies the outcome unless it has gone stale."""
        result = await self._call(city)

        if self.discard_stale_results and generation != self._generation:
            logger.info(
                f"Discarding result of fetch #{generation} for '{city}', "
                f"superseded by #{self._generation}"
            )
            return result

        self._apply(result)
        return result

    async def fetch(self, city: str) -> FetchResult:
        """Runs a complete fetch for `city` and waits for it."""
        return await self.run(city, self.begin(city))

    async def _call(self, city: str) -> FetchResult:
        try:
            envelope = await self._fetcher.get_weather(city)
        except WeatherTransportError as e:
            logger.error(f"Weather fetch for '{city}' failed: {e}")
            return TransportError(detail=str(e) or type(e).__name__)
        except WeatherClientError as e:
            logger.error(f"Weather client cannot fetch '{city}': {e}")
            return ClientError(detail=str(e) or type(e).__name__)
        except Exception as e:
            logger.error(f"Weather fetch for '{city}' raised: {e}", exc_info=True)
            return TransportError(detail=str(e) or type(e).__name__)

        if envelope.ok:
            return FetchSuccess(snapshot=envelope.result.to_snapshot())
        return ApplicationError(
            reason=envelope.reason or f"Weather API error {envelope.error_code}"
        )

    def _apply(self, result: FetchResult) -> None:
        if isinstance(result, FetchSuccess):
            self._store.record_success(result.snapshot)
        elif isinstance(result, ApplicationError):
            self._store.record_failure(result.reason)
        elif isinstance(result, ClientError):
            self._store.record_failure(f"{CLIENT_ERROR_PREFIX}: {result.detail}")
        else:
            self._store.record_failure(f"{TRANSPORT_ERROR_PREFIX}: {result.detail}")
