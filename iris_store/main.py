from __future__ import annotations

import sys
from typing import Any, Awaitable, Callable, TypeVar

import aiomysql
import typer

from iris_store.config import Settings, get_settings
from iris_store.domain.models import IrisMeasurement
from iris_store.infrastructure.db_factory import open_pool, parse_url
from iris_store.infrastructure.runtime import block_on
from iris_store.repository import DriverError, create_table, find_by_class, insert
from iris_store.utils.logging import configure_logging, get_logger

app = typer.Typer(help="iris-store: MySQL storage for iris flower measurements.")
log = get_logger(__name__)

T = TypeVar("T")

TEST_OPTION = typer.Option(False, "--test", help="Use TEST_DATABASE_URL instead of DATABASE_URL.")


def _masked(url: Any) -> str:
    dsn = parse_url(str(url))
    credentials = f"{dsn.username}:***@" if dsn.username else ""
    return f"{dsn.scheme}://{credentials}{dsn.host}:{dsn.port}{dsn.path or ''}"


def _with_pool(settings: Settings, test: bool, action: Callable[[aiomysql.Pool], Awaitable[T]]) -> T:
    """
    Open a pool on the selected database, run `action` on it and close the pool.

    Driver and URL errors are logged and end the command with exit code 1.
    """
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)

    async def _run() -> T:
        async with open_pool(settings.url_for(test=test)) as pool:
            return await action(pool)

    try:
        return block_on(_run(), workers=settings.runtime_workers)
    except (DriverError, ValueError) as exc:
        log.error("database command failed: %s", exc, extra={"error_type": type(exc).__name__})
        raise typer.Exit(code=1) from exc


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"env={settings.app_env} | production={_masked(settings.database_url)} | "
        f"test={_masked(settings.test_database_url)} | log_level={settings.log_level}"
    )


@app.command("create-table")
def create_table_command(test: bool = TEST_OPTION) -> None:
    """
    Create the iris_measurements table (no-op when it already exists).
    """
    result = _with_pool(get_settings(), test, create_table)
    typer.echo(repr(result))


@app.command()
def add(
    sepal_length: float = typer.Argument(..., help="Sepal length in cm."),
    sepal_width: float = typer.Argument(..., help="Sepal width in cm."),
    petal_length: float = typer.Argument(..., help="Petal length in cm."),
    petal_width: float = typer.Argument(..., help="Petal width in cm."),
    label: str = typer.Argument(..., help="Species label, e.g. Iris-virginica."),
    test: bool = TEST_OPTION,
) -> None:
    """
    Insert a single measurement.
    """
    measurement = IrisMeasurement(
        sepal_length=sepal_length,
        sepal_width=sepal_width,
        petal_length=petal_length,
        petal_width=petal_width,
        class_=label,
    )
    result = _with_pool(get_settings(), test, lambda pool: insert(pool, measurement))
    typer.echo(repr(result))


@app.command()
def find(
    label: str = typer.Argument(..., help="Species label to match exactly."),
    test: bool = TEST_OPTION,
) -> None:
    """
    Print every measurement with the given label, one JSON object per line.
    """
    rows = _with_pool(get_settings(), test, lambda pool: find_by_class(pool, label))
    for row in rows:
        typer.echo(row.model_dump_json(by_alias=True))


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
