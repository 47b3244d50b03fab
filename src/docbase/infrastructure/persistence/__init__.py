"""MongoDB persistence: connections and collection accessors."""

from docbase.infrastructure.persistence.collection_accessor import (
    CollectionAccessor,
    create_collection_factory,
)
from docbase.infrastructure.persistence.connection import Connection, connect

__all__ = [
    "CollectionAccessor",
    "Connection",
    "connect",
    "create_collection_factory",
]
