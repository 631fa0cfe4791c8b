"""
Iris CSV loading script for iris-store.

Reads the classic UCI iris layout
(`sepal_length,sepal_width,petal_length,petal_width,class`, header optional),
creates the table if needed and inserts the rows one statement at a time.
"""

from __future__ import annotations

import csv
import time
from pathlib import Path
from typing import Optional

import typer

from iris_store.config import get_settings
from iris_store.domain.models import IrisMeasurement
from iris_store.infrastructure.db_factory import open_pool
from iris_store.infrastructure.runtime import block_on
from iris_store.repository import create_table, insert
from iris_store.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Load iris measurements from CSV into MySQL.")
log = get_logger(__name__)

FIELDS = ["sepal_length", "sepal_width", "petal_length", "petal_width", "class"]


def _read_measurements(csv_path: Path) -> list[IrisMeasurement]:
    measurements: list[IrisMeasurement] = []
    with csv_path.open("r", newline="", encoding="utf-8") as f:
        for line_no, row in enumerate(csv.reader(f), start=1):
            if not row or not "".join(row).strip():
                continue
            if line_no == 1 and row[0].strip() == FIELDS[0]:
                continue
            if len(row) != len(FIELDS):
                raise ValueError(
                    f"{csv_path}:{line_no}: expected {len(FIELDS)} columns, got {len(row)}"
                )
            measurements.append(
                IrisMeasurement.model_validate(dict(zip(FIELDS, (v.strip() for v in row))))
            )
    return measurements


async def _load(url: str, measurements: list[IrisMeasurement], progress_every: int) -> int:
    inserted = 0
    async with open_pool(url) as pool:
        await create_table(pool)
        for measurement in measurements:
            result = await insert(pool, measurement)
            inserted += result.rows_affected
            if progress_every and inserted % progress_every == 0:
                log.info("load progress", extra={"rows": inserted})
    return inserted


@app.command()
def main(
    csv_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Iris CSV file."),
    test: bool = typer.Option(False, "--test", help="Load into TEST_DATABASE_URL."),
    url: Optional[str] = typer.Option(None, "--url", help="Override the database URL."),
    progress_every: int = typer.Option(50, "--progress-every", help="Log every N rows (0 disables)."),
) -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)

    measurements = _read_measurements(csv_path)
    start = time.perf_counter()
    inserted = block_on(
        _load(url or settings.url_for(test=test), measurements, progress_every),
        workers=settings.runtime_workers,
    )
    duration = time.perf_counter() - start
    log.info("load finished", extra={"rows": inserted, "duration_seconds": round(duration, 3)})
    typer.echo(f"Inserted {inserted} rows in {duration:.2f}s")


if __name__ == "__main__":
    app()
