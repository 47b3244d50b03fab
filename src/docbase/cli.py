"""Command-line interface for docbase.

Small operational commands for checking a connection string and peeking
into a collection.
"""

import asyncio
from typing import Any, NoReturn

import click
from bson import json_util
from bson.errors import BSONError
from pymongo.errors import PyMongoError

from docbase import __version__
from docbase.core.config import Settings, get_settings
from docbase.core.logging import configure_logging, get_logger
from docbase.infrastructure.persistence.connection import connect


@click.group()
@click.version_option(version=__version__, prog_name="docbase")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides DOCBASE_LOG_LEVEL)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """docbase - typed collection accessors for MongoDB."""
    settings = get_settings()
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level})

    configure_logging(settings)
    ctx.obj = settings


@cli.command()
@click.option("--uri", type=str, default=None, help="Connection string (overrides DOCBASE_MONGO_URI)")
@click.pass_obj
def ping(settings: Settings, uri: str | None) -> None:
    """Connect to MongoDB and report the default database."""

    async def run() -> str:
        connection = await connect(uri, settings=settings)
        try:
            return connection.database.name
        finally:
            connection.close()

    try:
        name = asyncio.run(run())
    except PyMongoError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"OK: connected to database '{name}'")


@cli.command()
@click.argument("collection")
@click.argument("query", required=False, default="{}")
@click.option("--uri", type=str, default=None, help="Connection string (overrides DOCBASE_MONGO_URI)")
@click.option("--limit", type=click.IntRange(min=0), default=0, help="Maximum documents to print (0 = all)")
@click.pass_obj
def find(settings: Settings, collection: str, query: str, uri: str | None, limit: int) -> None:
    """Print documents of COLLECTION matching QUERY.

    QUERY is MongoDB Extended JSON, e.g. '{"name": "Yoda"}'. Each match is
    printed as one line of Extended JSON.
    """
    logger = get_logger(__name__)

    try:
        parsed = json_util.loads(query)
    except (ValueError, BSONError) as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="QUERY") from e
    if not isinstance(parsed, dict):
        raise click.BadParameter("must be a JSON object", param_hint="QUERY")

    async def run() -> list[dict[str, Any]]:
        async with await connect(uri, settings=settings) as connection:
            accessor = connection.collection_factory()(collection)
            return await accessor.read_many(parsed, limit=limit)

    try:
        documents = asyncio.run(run())
    except PyMongoError as e:
        raise click.ClickException(str(e)) from e

    logger.debug("Documents found", collection=collection, count=len(documents))
    for document in documents:
        click.echo(json_util.dumps(document))


def main() -> NoReturn:
    """Entry point for the ``docbase`` command and ``python -m docbase``."""
    cli()
