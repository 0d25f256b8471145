"""Asyncio Scheduler — one-shot deferred callbacks on the running event loop.

Invariants:
    - call_later must be invoked from inside the event loop thread (FastAPI handlers are)
    - Returned asyncio.TimerHandle satisfies core.protocols.CancellableTimer

Design Decisions:
    - loop.call_later over asyncio.sleep tasks: the callback is synchronous and
      cancellation is a plain handle.cancel(), no task bookkeeping
"""

import asyncio
from collections.abc import Callable


class AsyncioScheduler:
    def call_later(
        self, delay: float, callback: Callable[[], None],
    ) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)
