"""
Domain package for iris-store.

Exports the record and result models shared by the repository, the CLI and
the loader script. Keep this package focused on data definitions.
"""

from iris_store.domain.models import IrisMeasurement, QueryResult

__all__ = [
    "IrisMeasurement",
    "QueryResult",
]
