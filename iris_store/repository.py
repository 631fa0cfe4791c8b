"""
Table lifecycle, insert and query-by-label for `iris_measurements`.

Every operation is a single parameterized statement issued on a connection
borrowed from the shared aiomysql pool. Nothing is retried or wrapped: driver
errors (`DriverError`) reach the caller as raised.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, List, Optional, Sequence

import aiomysql
import pymysql
from pydantic import ValidationError

from iris_store.domain.models import IrisMeasurement, QueryResult
from iris_store.utils.logging import get_logger

log = get_logger(__name__)

TABLE_NAME = "iris_measurements"

CREATE_TABLE_SQL_PATH = Path(__file__).parent / "migrations" / f"{TABLE_NAME}_create.sql"

INSERT_SQL = (
    f"INSERT INTO {TABLE_NAME} "
    "(sepal_length, sepal_width, petal_length, petal_width, class) "
    "VALUES (%s, %s, %s, %s, %s)"
)

SELECT_BY_CLASS_SQL = f"SELECT * FROM {TABLE_NAME} WHERE class = %s"

DriverError = pymysql.err.MySQLError


class RowDecodeError(pymysql.err.DataError):
    """A fetched row could not be decoded into an IrisMeasurement."""


@lru_cache(maxsize=1)
def load_create_table_sql() -> str:
    """Read the packaged CREATE TABLE statement."""
    return CREATE_TABLE_SQL_PATH.read_text(encoding="utf-8").strip()


async def _execute(
    pool: aiomysql.Pool, sql: str, params: Optional[Sequence[Any]] = None
) -> QueryResult:
    async with pool.acquire() as conn:
        async with conn.cursor() as cur:
            await cur.execute(sql, params)
            return QueryResult(
                rows_affected=max(cur.rowcount or 0, 0),
                last_insert_id=cur.lastrowid or 0,
            )


async def create_table(pool: aiomysql.Pool) -> QueryResult:
    """
    Create the `iris_measurements` table if it does not exist yet.

    Safe to call repeatedly: an existing table and its rows are left alone.
    """
    result = await _execute(pool, load_create_table_sql())
    log.debug("create table executed", extra={"table": TABLE_NAME})
    return result


async def insert(pool: aiomysql.Pool, measurement: IrisMeasurement) -> QueryResult:
    """
    Insert one measurement and return the execution result.

    The record is not modified; `result.last_insert_id` is the identifier the
    server assigned, see `IrisMeasurement.with_id`.
    """
    params = (
        measurement.sepal_length,
        measurement.sepal_width,
        measurement.petal_length,
        measurement.petal_width,
        measurement.class_,
    )
    result = await _execute(pool, INSERT_SQL, params)
    log.debug(
        "inserted measurement",
        extra={"table": TABLE_NAME, "last_insert_id": result.last_insert_id},
    )
    return result


async def find_by_class(pool: aiomysql.Pool, label: str) -> List[IrisMeasurement]:
    """
    Return every measurement whose `class` equals `label`.

    Rows come back in whatever order the server produces; no match yields an
    empty list.

    Raises
    ------
    RowDecodeError
        If a row does not match the IrisMeasurement schema.
    """
    async with pool.acquire() as conn:
        async with conn.cursor(aiomysql.DictCursor) as cur:
            await cur.execute(SELECT_BY_CLASS_SQL, (label,))
            rows = await cur.fetchall()

    try:
        measurements = [IrisMeasurement.model_validate(row) for row in rows]
    except ValidationError as exc:
        raise RowDecodeError(f"cannot decode {TABLE_NAME} row: {exc}") from exc

    log.debug("fetched measurements", extra={"label": label, "rows": len(measurements)})
    return measurements


__all__ = [
    "CREATE_TABLE_SQL_PATH",
    "DriverError",
    "INSERT_SQL",
    "RowDecodeError",
    "SELECT_BY_CLASS_SQL",
    "TABLE_NAME",
    "create_table",
    "find_by_class",
    "insert",
    "load_create_table_sql",
]
