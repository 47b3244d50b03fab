"""docbase - typed collection accessors for MongoDB.

Define a named collection with default field values and post-mutation
hooks, then create, read, update and delete documents through it.

Example:
    connection = await connect("mongodb://localhost:27017/app")
    create_collection = create_collection_factory(connection.database)
    users = create_collection("users", defaults={"isAdmin": False})
    yoda = await users.create_one({"name": "Yoda"})
    connection.close()
"""

__version__ = "0.1.0"

from docbase.core.exceptions import (
    CollectionConfigError,
    CreationError,
    DocbaseError,
    HookError,
)
from docbase.core.hooks import HookDecorator, HookEvent, HookRegistry
from docbase.domain.entities import CollectionConfig, CollectionHooks, HookContext
from docbase.infrastructure.persistence import (
    CollectionAccessor,
    Connection,
    connect,
    create_collection_factory,
)

__all__ = [
    "__version__",
    "connect",
    "Connection",
    "create_collection_factory",
    "CollectionAccessor",
    "CollectionConfig",
    "CollectionHooks",
    "HookRegistry",
    "HookDecorator",
    "HookEvent",
    "HookContext",
    "DocbaseError",
    "CollectionConfigError",
    "CreationError",
    "HookError",
]
