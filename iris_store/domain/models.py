"""
Domain models for iris-store.

Defines the iris measurement record aligned with
`iris_store/migrations/iris_measurements_create.sql`, and the metadata
returned by non-query statements.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class IrisMeasurement(BaseModel):
    """
    Representation of a single row in the `iris_measurements` table.

    `id` is None until the row has been inserted; use `with_id` to obtain
    the persisted value.
    """

    id: Optional[int] = Field(None, ge=0, description="Primary key (AUTO_INCREMENT).")
    sepal_length: float = Field(..., description="Sepal length in cm.")
    sepal_width: float = Field(..., description="Sepal width in cm.")
    petal_length: float = Field(..., description="Petal length in cm.")
    petal_width: float = Field(..., description="Petal width in cm.")
    class_: str = Field(..., alias="class", description="Species label, e.g. Iris-setosa.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def with_id(self, identifier: int) -> "IrisMeasurement":
        """Return a copy carrying the database-assigned identifier."""
        return self.model_copy(update={"id": identifier})


class QueryResult(BaseModel):
    """
    Outcome of a statement that returns no rows.
    """

    rows_affected: int = Field(0, ge=0, description="Rows changed by the statement.")
    last_insert_id: int = Field(0, ge=0, description="AUTO_INCREMENT value assigned, 0 if none.")

    model_config = {"frozen": True}


__all__ = ["IrisMeasurement", "QueryResult"]
