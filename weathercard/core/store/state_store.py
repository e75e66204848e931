"""Observable store for the weather screen: city, weather, status and favorites."""

import asyncio
import logging
from typing import Callable, Dict, FrozenSet, Iterable, Optional, Set, Tuple
from weathercard.config import Settings, settings as default_settings
from weathercard.core.store.favorites import PopularCityListManager
from weathercard.core.store.fetch_orchestrator import FetchOrchestrator
from weathercard.core.weather_api import WeatherFetcher
from weathercard.models.state import AppState, FetchStatus, clean_city
from weathercard.models.weather import WeatherSnapshot

logger = logging.getLogger(__name__)

Listener = Callable[[AppState], None]
Unsubscribe = Callable[[], None]


class WeatherStateStore:
    """
    Single owner of AppState.

    Every mutation is synchronous and publishes a new AppState to the
    subscribers before returning. City changes start a fetch as a background
    task on the store's event loop; the caller never awaits it. The store must
    be created and used from that loop's thread.
    """

    def __init__(
        self,
        fetcher: WeatherFetcher,
        config: Optional[Settings] = None,
        *,
        initial_city: Optional[str] = None,
        discard_stale_results: Optional[bool] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        config = config or default_settings
        city = clean_city(initial_city) or clean_city(config.initial_city)
        if city is None:
            raise ValueError("An initial city is required")
        if discard_stale_results is None:
            discard_stale_results = config.discard_stale_results

        self._loop = loop or asyncio.get_running_loop()
        self._listeners: Dict[int, Tuple[Listener, Optional[FrozenSet[str]]]] = {}
        self._next_token = 0
        self._tasks: Set[asyncio.Task] = set()
        self._favorites = PopularCityListManager(config.default_favorites)
        self._orchestrator = FetchOrchestrator(
            self, fetcher, discard_stale_results=discard_stale_results
        )
        self._state = AppState(
            current_city=city, favorite_cities=self._favorites.cities
        )

        self._launch(city)

    # --- Reading ---

    def current_state(self) -> AppState:
        return self._state

    @property
    def orchestrator(self) -> FetchOrchestrator:
        return self._orchestrator

    @property
    def pending_fetches(self) -> int:
        return len(self._tasks)

    def subscribe(
        self, listener: Listener, fields: Optional[Iterable[str]] = None
    ) -> Unsubscribe:
        """
        Registers `listener` to receive every new AppState. With `fields`, it is
        only called when one of those fields changed. Returns a callable that
        removes the listener.
        """
        token = self._next_token
        self._next_token += 1
        watched = frozenset(fields) if fields is not None else None
        if watched is not None:
            unknown = watched - set(AppState.model_fields)
            if unknown:
                raise ValueError(f"Unknown AppState fields: {sorted(unknown)}")
        self._listeners[token] = (listener, watched)

        def unsubscribe() -> None:
            self._listeners.pop(token, None)

        return unsubscribe

    async def wait_for_pending(self) -> None:
        """Waits until every fetch started so far (and any started meanwhile) is done."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # --- User actions ---

    def select_city(self, name: Optional[str]) -> None:
        city = clean_city(name)
        if city is None:
            logger.debug("Ignoring blank city selection")
            return
        if city == self._state.current_city:
            logger.debug(f"'{city}' is already selected")
            return

        logger.info(f"Selecting city '{city}'")
        self._set(current_city=city)
        self._launch(city)

    def add_favorite(self, name: Optional[str]) -> None:
        if self._favorites.add(name):
            self._set(favorite_cities=self._favorites.cities)

    def remove_last_favorite(self) -> None:
        if self._favorites.remove_last() is not None:
            self._set(favorite_cities=self._favorites.cities)

    def dismiss_error(self) -> None:
        if self._state.status != FetchStatus.FAILED:
            return
        self._set(status=FetchStatus.IDLE, error_message=None)

    # --- Fetch outcomes, written by the orchestrator ---

    def mark_loading(self) -> None:
        self._set(status=FetchStatus.LOADING, error_message=None)

    def record_success(self, snapshot: WeatherSnapshot) -> None:
        logger.info(
            f"Weather for '{snapshot.city}' updated ({len(snapshot.forecast)} forecast days)"
        )
        self._set(snapshot=snapshot, status=FetchStatus.SUCCESS, error_message=None)

    def record_failure(self, message: str) -> None:
        logger.warning(f"Weather fetch failed: {message}")
        self._set(status=FetchStatus.FAILED, error_message=message)

    # --- Internals ---

    def _launch(self, city: str) -> None:
        generation = self._orchestrator.begin(city)
        task = self._loop.create_task(self._orchestrator.run(city, generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _set(self, **changes) -> None:
        previous = self._state
        self._state = previous.evolve(**changes)
        changed = {
            name for name in changes if getattr(previous, name) != getattr(self._state, name)
        }
        if changed:
            self._notify(changed)

    def _notify(self, changed: Set[str]) -> None:
        state = self._state
        for listener, watched in list(self._listeners.values()):
            if watched is not None and not (watched & changed):
                continue
            try:
                listener(state)
            except Exception as e:
                logger.error(f"State listener {listener!r} failed: {e}", exc_info=True)
