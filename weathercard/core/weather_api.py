"""Client for fetching weather data from the Juhe simpleWeather API."""

import httpx
from pydantic import ValidationError
from typing import Optional, Protocol
from weathercard.config import settings
from weathercard.core.errors import WeatherClientError, WeatherTransportError
from weathercard.models.weather import WeatherEnvelope
import logging

logger = logging.getLogger(__name__)

QUERY_PATH = "/simpleWeather/query"


class WeatherFetcher(Protocol):
    """Anything the store can ask for a city's weather."""

    async def get_weather(self, city: str) -> WeatherEnvelope: ...


class JuheWeatherClient:
    """Weather client for the Juhe simpleWeather query endpoint"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.juhe_api_key
        self.base_url = (base_url or settings.juhe_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.http_client = http_client

    async def get_weather(self, city: str) -> WeatherEnvelope:
        """
        Query the API once for `city`. A non-zero error_code is returned as-is in
        the envelope; only transport and decoding failures raise.
        """
        if not self.api_key:
            raise WeatherClientError("Juhe API key is not configured")

        logger.info(f"Requesting weather for '{city}'")
        try:
            if self.http_client is not None:
                response = await self._send(self.http_client, city)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._send(client, city)
            response.raise_for_status()
            envelope = WeatherEnvelope.model_validate(response.json())
        except httpx.HTTPError as e:
            logger.error(f"Weather request for '{city}' failed: {e}")
            raise WeatherTransportError(str(e)) from e
        except ValidationError as e:
            logger.error(f"Unexpected weather payload for '{city}': {e}")
            raise WeatherTransportError(
                f"invalid response payload ({e.error_count()} errors)"
            ) from e
        except ValueError as e:
            logger.error(f"Weather response for '{city}' is not JSON: {e}")
            raise WeatherTransportError(f"invalid JSON response: {e}") from e

        if not envelope.ok:
            logger.warning(
                f"Weather API rejected '{city}': {envelope.error_code} {envelope.reason}"
            )
        return envelope

    async def _send(self, client: httpx.AsyncClient, city: str) -> httpx.Response:
        return await client.get(
            f"{self.base_url}{QUERY_PATH}",
            params={"city": city, "key": self.api_key},
            timeout=self.timeout,
        )
