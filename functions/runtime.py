"""
Process Runtime Module

One asyncio event loop per function instance, run in a daemon thread:
- AsyncRuntime.run: Submit a coroutine from a (sync) request handler and wait
- AsyncRuntime.resource: Lazily build a loop-bound object once, on the loop

Request handlers are synchronous, but the async Firestore client and the
cache fill's in-flight registry must outlive single requests and stay on
one loop, so every request is scheduled onto this shared loop.

Note: This module has no Cloud Function entry points.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Any, Awaitable, Callable


class AsyncRuntime:
    def __init__(self):
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()
        self._resources: dict[str, Any] = {}

    def _ensure_loop(self) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self._loop is None:
                loop = asyncio.new_event_loop()
                thread = threading.Thread(target=loop.run_forever, name="async-runtime", daemon=True)
                thread.start()
                self._loop, self._thread = loop, thread
            return self._loop

    def run(self, coro: Awaitable, timeout: float | None = None) -> Any:
        """Run a coroutine on the shared loop and block until it finishes."""
        future = asyncio.run_coroutine_threadsafe(coro, self._ensure_loop())
        return future.result(timeout)

    async def resource(self, name: str, factory: Callable[[], Any]) -> Any:
        """
        Get (or build) a named object; call from coroutines run on the loop.

        Builds happen on the loop thread, so there's no race between requests.
        """
        if name not in self._resources:
            self._resources[name] = factory()
        return self._resources[name]

    def close(self) -> None:
        with self._lock:
            if self._loop is None:
                return
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join(timeout=5)
            self._loop.close()
            self._loop, self._thread = None, None
            self._resources.clear()
