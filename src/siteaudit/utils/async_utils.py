"""Event loop helper for running an audit from synchronous code."""

import asyncio
import gc
from collections.abc import Coroutine
from typing import Any, TypeVar

T = TypeVar("T")


def safe_async_run(coro: Coroutine[Any, Any, T]) -> T:
    """Run ``coro`` to completion on a fresh event loop.

    Ctrl-C cancels the running audit, so the browser and any tool subprocess
    are released by their context managers before ``KeyboardInterrupt``
    reaches the caller.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        coro.close()
        raise RuntimeError("safe_async_run() cannot be called from a running event loop")

    with asyncio.Runner() as runner:
        try:
            return runner.run(coro)
        finally:
            # Collect subprocess transports while the loop is still open
            gc.collect()
