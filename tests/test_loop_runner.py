"""Tests for the background event loop used by the UI."""

import asyncio
import threading

import pytest

from conftest import FakeFetcher
from weathercard.config import Settings
from weathercard.core.loop_runner import LoopRunner
from weathercard.core.store import WeatherStateStore
from weathercard.models.state import FetchStatus


@pytest.fixture
def runner():
    runner = LoopRunner()
    runner.start()
    yield runner
    runner.stop()


def test_start_and_stop():
    runner = LoopRunner()
    assert not runner.is_running

    runner.start()
    runner.start()
    assert runner.is_running

    runner.stop()
    runner.stop()
    assert not runner.is_running


def test_loop_requires_start():
    with pytest.raises(RuntimeError):
        LoopRunner().loop


def test_submit_runs_coroutine(runner):
    async def answer():
        await asyncio.sleep(0)
        return 42

    assert runner.submit(answer()).result(timeout=5) == 42


def test_call_runs_on_loop_thread(runner):
    def current_loop():
        return asyncio.get_running_loop()

    assert runner.call(current_loop) is runner.loop


def test_store_driven_from_another_thread(runner):
    """The UI thread creates and drives a store that lives on the runner's loop."""
    config = Settings(_env_file=None, initial_city="Beijing")
    store = runner.call(WeatherStateStore, FakeFetcher(), config)

    runner.submit(store.wait_for_pending()).result(timeout=5)
    assert store.current_state().status == FetchStatus.SUCCESS

    runner.call(store.select_city, "Paris")
    runner.call(store.add_favorite, "Paris")
    runner.submit(store.wait_for_pending()).result(timeout=5)

    state = store.current_state()
    assert state.snapshot.city == "Paris"
    assert state.favorite_cities == ("Paris",)


def test_subscription_registered_through_runner(runner):
    """Listeners are registered on the loop thread and notified from it."""
    config = Settings(_env_file=None, initial_city="Beijing")
    store = runner.call(WeatherStateStore, FakeFetcher(), config)
    changed = threading.Event()
    threads = []

    def listener(state):
        threads.append(threading.current_thread())
        changed.set()

    runner.call(store.subscribe, listener)
    runner.submit(store.wait_for_pending()).result(timeout=5)
    changed.clear()
    threads.clear()

    runner.call(store.select_city, "Paris")

    assert changed.wait(timeout=5)
    runner.submit(store.wait_for_pending()).result(timeout=5)
    assert store.current_state().snapshot.city == "Paris"
    assert threads
    assert all(thread is not threading.current_thread() for thread in threads)
    assert {thread.name for thread in threads} == {runner.name}
