"""Shared fixtures: a controllable fake weather fetcher and store factory."""

import asyncio
from typing import Callable, Dict, List, Union

import pytest

from weathercard.config import Settings
from weathercard.core.store import WeatherStateStore
from weathercard.models.weather import WeatherEnvelope


def make_payload(city: str = "Beijing", days: int = 2, info: str = "晴") -> dict:
    """Raw simpleWeather response body, shaped like the real API's."""
    return {
        "reason": "查询成功!",
        "result": {
            "city": city,
            "realtime": {
                "temperature": "4",
                "humidity": "82",
                "info": info,
                "wid": "00",
                "direct": "西北风",
                "power": "3级",
                "aqi": "45",
            },
            "future": [
                {
                    "date": f"2026-10-{20 + i:02d}",
                    "temperature": f"{i}/{10 + i}℃",
                    "weather": "多云转晴",
                    "wid": {"day": "01", "night": "00"},
                    "direct": "北风",
                }
                for i in range(days)
            ],
        },
        "error_code": 0,
    }


def make_envelope(city: str = "Beijing", days: int = 2, info: str = "晴") -> WeatherEnvelope:
    return WeatherEnvelope.model_validate(make_payload(city, days, info))


def make_error(reason: str, error_code: int = 207301) -> WeatherEnvelope:
    return WeatherEnvelope(reason=reason, result=None, error_code=error_code)


class FakeFetcher:
    """Answers per city; a held city blocks until released."""

    def __init__(self):
        self.calls: List[str] = []
        self.returned: List[str] = []
        self.responses: Dict[str, Union[WeatherEnvelope, Exception]] = {}
        self._gates: Dict[str, asyncio.Event] = {}

    def respond(self, city: str, response: Union[WeatherEnvelope, Exception]):
        self.responses[city] = response

    def hold(self, city: str):
        self._gates[city] = asyncio.Event()

    def release(self, city: str):
        self._gates[city].set()

    async def get_weather(self, city: str) -> WeatherEnvelope:
        self.calls.append(city)
        gate = self._gates.get(city)
        if gate is not None:
            await gate.wait()
        response = self.responses.get(city) or make_envelope(city)
        self.returned.append(city)
        if isinstance(response, Exception):
            raise response
        return response


async def wait_until(predicate: Callable[[], bool], timeout: float = 1.0):
    """Yields to the event loop until `predicate()` holds."""

    async def poll():
        while not predicate():
            await asyncio.sleep(0)

    await asyncio.wait_for(poll(), timeout)


@pytest.fixture
def config() -> Settings:
    return Settings(_env_file=None, juhe_api_key="test-key", initial_city="Beijing")


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def make_store(fetcher, config):
    """Builds a store on the running loop; call it from inside an async test."""

    def factory(**kwargs) -> WeatherStateStore:
        return WeatherStateStore(fetcher, config, **kwargs)

    return factory
