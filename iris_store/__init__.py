"""
iris-store - asynchronous MySQL storage for iris flower measurements.

The package provides a small data-access layer over aiomysql:

- A connection pool factory driven by a MySQL URL
- Idempotent creation of the `iris_measurements` table
- Single-row inserts and lookups by species label
- A typer CLI (`iris-store`) wiring the above together
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from iris_store.config import Settings, get_settings
from iris_store.domain.models import IrisMeasurement, QueryResult
from iris_store.infrastructure.db_factory import create_pool, open_pool
from iris_store.infrastructure.runtime import block_on, create_runtime
from iris_store.repository import (
    DriverError,
    RowDecodeError,
    create_table,
    find_by_class,
    insert,
)
from iris_store.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "IrisMeasurement",
    "QueryResult",
    # Connectivity
    "create_pool",
    "open_pool",
    "block_on",
    "create_runtime",
    # Operations
    "create_table",
    "insert",
    "find_by_class",
    # Errors
    "DriverError",
    "RowDecodeError",
    # Logging
    "configure_logging",
    "get_logger",
]
