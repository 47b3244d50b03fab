"""MongoDB connection management.

``connect()`` opens a Motor client, selects the default database named in
the connection string and pings the server so that an unreachable server
fails at connect time rather than on the first query.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from docbase.core.config import Settings, get_settings
from docbase.core.hooks.hook_registry import HookRegistry
from docbase.core.logging import get_logger
from docbase.infrastructure.persistence.collection_accessor import (
    CollectionAccessor,
    create_collection_factory,
)

logger = get_logger(__name__)


@dataclass
class Connection:
    """A live client and its default database.

    The database handle holds no per-operation state and is safe to share
    between any number of collection accessors.

    Example:
        async with await connect("mongodb://localhost:27017/app") as connection:
            create_collection = connection.collection_factory()
            users = create_collection("users")
    """

    client: AsyncIOMotorClient
    database: AsyncIOMotorDatabase

    def close(self) -> None:
        """Release the client's sockets and background tasks.

        The driver's close is idempotent. Operations issued after close
        fail with the driver's own error.
        """
        self.client.close()
        logger.info("MongoDB connection closed", database=self.database.name)

    def collection_factory(
        self, registry: Optional[HookRegistry] = None
    ) -> Callable[..., CollectionAccessor]:
        """Shortcut for ``create_collection_factory(self.database, registry=...)``."""
        return create_collection_factory(self.database, registry=registry)

    async def __aenter__(self) -> "Connection":
        return self

    async def __aexit__(self, *args: Any) -> None:
        self.close()


async def connect(
    uri: Optional[str] = None,
    *,
    settings: Optional[Settings] = None,
    **client_options: Any,
) -> Connection:
    """Connect to MongoDB and select the default database from ``uri``.

    Args:
        uri: Connection string naming a default database, e.g.
             ``mongodb://localhost:27017/app``. Falls back to
             ``settings.mongo_uri``.
        settings: Settings supplying fallbacks. When omitted, loaded from
                  the environment only if ``uri`` is None; an explicit
                  ``uri`` uses the built-in defaults and never reads the
                  environment.
        **client_options: Passed to ``AsyncIOMotorClient``. Explicit values
                          override ``serverSelectionTimeoutMS`` and
                          ``appname`` from settings.

    Returns:
        Connection: The client and its default database.

    Raises:
        pymongo.errors.ConfigurationError: If the URI is malformed (including
            an empty string) or names no default database.
        pymongo.errors.ConnectionFailure: If the server cannot be reached.
    """
    if settings is None:
        # model_construct skips env loading and validation
        settings = get_settings() if uri is None else Settings.model_construct()
    if uri is None:
        uri = settings.mongo_uri

    client_options.setdefault("serverSelectionTimeoutMS", settings.mongo_server_selection_timeout_ms)
    client_options.setdefault("appname", settings.mongo_app_name)

    client = AsyncIOMotorClient(uri, **client_options)
    try:
        database = client.get_default_database()
        await client.admin.command("ping")
    except Exception:
        client.close()
        raise

    logger.info("MongoDB connection established", database=database.name)
    return Connection(client=client, database=database)
