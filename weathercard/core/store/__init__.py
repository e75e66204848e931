"""State store for the weather screen and the fetch logic that feeds it."""

from .favorites import PopularCityListManager
from .fetch_orchestrator import FetchOrchestrator
from .state_store import WeatherStateStore

__all__ = ["PopularCityListManager", "FetchOrchestrator", "WeatherStateStore"]
