"""Background asyncio loop for callers that live on another thread (the UI)."""

import asyncio
import concurrent.futures
import logging
import threading
from typing import Any, Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LoopRunner:
    """Runs one event loop in a daemon thread and hands work to it."""

    def __init__(self, name: str = "weathercard-loop"):
        self.name = name
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def start(self):
        """Start the loop thread; does nothing if it is already running."""
        with self._lock:
            if self._thread is not None:
                return

            logger.info("Starting background event loop")
            loop = asyncio.new_event_loop()
            ready = threading.Event()

            def run():
                asyncio.set_event_loop(loop)
                loop.call_soon(ready.set)
                loop.run_forever()
                loop.close()

            self._loop = loop
            self._thread = threading.Thread(target=run, name=self.name, daemon=True)
            self._thread.start()
            ready.wait()

    def stop(self, timeout: float = 5.0):
        """Stop the loop and join its thread."""
        with self._lock:
            if self._thread is None:
                return

            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join(timeout)
            self._thread = None
            self._loop = None
            logger.info("Background event loop stopped")

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            raise RuntimeError("LoopRunner is not started")
        return self._loop

    def submit(self, coro: Awaitable[T]) -> "concurrent.futures.Future[T]":
        """Schedule a coroutine on the loop without waiting for it."""
        return asyncio.run_coroutine_threadsafe(coro, self.loop)

    def call(
        self, fn: Callable[..., T], *args: Any, timeout: Optional[float] = 10.0, **kwargs: Any
    ) -> T:
        """Run a plain callable on the loop thread and return its result."""

        async def invoke() -> T:
            return fn(*args, **kwargs)

        return self.submit(invoke()).result(timeout)
