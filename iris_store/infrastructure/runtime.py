"""
Async runtime bootstrap for iris-store.

Database operations are coroutines; synchronous callers (the CLI, scripts)
drive them through `block_on`, which spins up a fresh event loop backed by a
multi-worker thread pool for any blocking work scheduled with
`loop.run_in_executor(None, ...)`.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from typing import Any, Coroutine, Iterator, Optional, TypeVar

T = TypeVar("T")


@contextmanager
def create_runtime(workers: Optional[int] = None) -> Iterator[asyncio.Runner]:
    """
    Create an event loop runner with a multi-worker default executor.

    Parameters
    ----------
    workers : int, optional
        Size of the default thread pool. ``None`` keeps the executor default.
    """
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="iris-store")
    try:
        with asyncio.Runner() as runner:
            runner.get_loop().set_default_executor(executor)
            yield runner
    finally:
        executor.shutdown(wait=True)


def block_on(coro: Coroutine[Any, Any, T], workers: Optional[int] = None) -> T:
    """
    Run a coroutine to completion on a new runtime and return its result.

    Raises
    ------
    RuntimeError
        If called from a thread that is already running an event loop;
        await the coroutine directly there instead.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        coro.close()
        raise RuntimeError(
            "block_on() cannot be called from an async context; await the coroutine instead"
        )

    with create_runtime(workers) as runner:
        return runner.run(coro)


__all__ = ["block_on", "create_runtime"]
