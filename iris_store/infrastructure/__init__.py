"""
Infrastructure package for iris-store.

Centralizes database connectivity (pool factory) and the async runtime used
to drive coroutines from synchronous entry points. Keep this layer focused on
I/O and resource management.
"""

from iris_store.infrastructure.db_factory import (
    connect_kwargs,
    create_pool,
    open_pool,
    parse_url,
)
from iris_store.infrastructure.runtime import block_on, create_runtime

__all__ = [
    "block_on",
    "connect_kwargs",
    "create_pool",
    "create_runtime",
    "open_pool",
    "parse_url",
]
