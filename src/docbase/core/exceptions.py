"""Exceptions raised by docbase itself.

Driver failures (connection, query execution, use after close) are
pymongo exceptions and reach the caller unchanged; they are not wrapped
or re-exported here.
"""

from typing import Any


class DocbaseError(Exception):
    """Base class for docbase errors."""


class CollectionConfigError(DocbaseError, ValueError):
    """Raised when a collection accessor is constructed with invalid arguments."""


class CreationError(DocbaseError):
    """Raised when a single-document insert reports no inserted document."""

    def __init__(self, collection: str, message: str | None = None) -> None:
        self.collection = collection
        super().__init__(message or f"Failed to create new document in '{collection}'")


class HookError(DocbaseError):
    """Raised when a collection hook fails after its mutation was written.

    The write is NOT rolled back. ``document`` holds the committed document
    and ``__cause__`` the exception raised by the hook.

    Example:
        try:
            await users.update_one({"name": "Yoda"}, {"isAdmin": True})
        except HookError as e:
            logger.warning("Update stored, notification failed", doc_id=e.document["_id"])
    """

    def __init__(self, collection: str, operation: str, document: dict[str, Any]) -> None:
        self.collection = collection
        self.operation = operation
        self.document = document
        super().__init__(f"post-{operation} hook failed for collection '{collection}'")
