"""Collection accessor: CRUD over one MongoDB collection.

An accessor binds a collection name and its configuration (defaults and
post-mutation hooks) to a database handle. It keeps no state of its own
and never touches the database on construction, so accessors are cheap to
create per use.

Queries, updates and driver options are passed to Motor unchanged. Driver
errors propagate unchanged.
"""

import inspect
from collections.abc import Callable, Mapping
from typing import Any, Generic, Optional, TypeVar, get_type_hints

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ReturnDocument

from docbase.core.exceptions import CollectionConfigError, CreationError, HookError
from docbase.core.hooks.hook_events import OPERATION_EVENTS
from docbase.core.hooks.hook_registry import HookRegistry
from docbase.core.logging import get_logger
from docbase.domain.entities.collection_config import CollectionConfig, CollectionHooks
from docbase.domain.entities.hook_context import HookContext, Operation

logger = get_logger(__name__)

DocumentT = TypeVar("DocumentT", bound=Mapping[str, Any])


class CollectionAccessor(Generic[DocumentT]):
    """Typed CRUD operations over a single collection.

    Single-document mutations (``create_one``, ``update_one``,
    ``delete_one``) return the affected document and, when a document was
    affected, await the configured hook before returning. Bulk operations
    (``create_many``, ``update_many``, ``delete_many``) return only ids or
    counts and never fire hooks: a bulk call may touch any number of
    documents and per-document hook calls would make it scale with them.

    Not-found is ``None`` for every single-document read or mutation.

    Example:
        users = create_collection(
            "users",
            defaults={"isAdmin": False},
            hooks=CollectionHooks(post_create=publish_user_created),
        )
        yoda = await users.create_one({"name": "Yoda"})
        # {"_id": ObjectId(...), "name": "Yoda", "isAdmin": False}
    """

    def __init__(
        self,
        database: AsyncIOMotorDatabase,
        name: str,
        config: Optional[CollectionConfig] = None,
        registry: Optional[HookRegistry] = None,
    ) -> None:
        """Bind a collection name and configuration to a database.

        Args:
            database: Motor database handle.
            name: Collection name.
            config: Defaults and hooks. Empty when omitted.
            registry: Optional registry that receives mutation events.
        """
        self._database = database
        self._name = name
        self._config = config or CollectionConfig()
        self._registry = registry
        self._logger = logger.bind(collection=name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def defaults(self) -> Mapping[str, Any]:
        return self._config.defaults

    @property
    def hooks(self) -> CollectionHooks:
        return self._config.hooks

    @property
    def collection(self) -> AsyncIOMotorCollection:
        """The underlying Motor collection, for driver features not wrapped here."""
        return self._database[self._name]

    async def create_one(self, document: Mapping[str, Any], **options: Any) -> dict[str, Any]:
        """Insert one document after overlaying it on the defaults.

        Args:
            document: Fields to store. Fields given here win over defaults.
            **options: Passed to ``insert_one`` (e.g. ``session``).

        Returns:
            The stored document, including its ``_id``.

        Raises:
            CreationError: If the driver reports no inserted id.
            HookError: If the post-create hook fails. The insert is kept.
        """
        data = self._config.apply_defaults(document)

        # insert_one stamps the generated _id onto `data`, never onto `document`
        result = await self.collection.insert_one(data, **options)
        if result.inserted_id is None:
            raise CreationError(self._name)

        created = {**data, "_id": result.inserted_id}
        self._logger.debug("Document created", document_id=str(result.inserted_id))

        await self._after_mutation("create", created)
        return created

    async def create_many(
        self, documents: list[Mapping[str, Any]], **options: Any
    ) -> list[Any]:
        """Insert many documents, each overlaid on the defaults.

        Hooks are intentionally not fired for bulk inserts.

        Returns:
            The inserted ids in the order the driver reports them, which for
            PyMongo is the order of ``documents``.
        """
        data = [self._config.apply_defaults(document) for document in documents]
        result = await self.collection.insert_many(data, **options)
        inserted_ids = list(result.inserted_ids)

        self._logger.debug("Documents created", count=len(inserted_ids))
        return inserted_ids

    async def read_one(
        self, query: Mapping[str, Any], **options: Any
    ) -> Optional[dict[str, Any]]:
        """Return the first document matching ``query``, or None."""
        return await self.collection.find_one(query, **options)

    async def read_many(self, query: Mapping[str, Any], **options: Any) -> list[dict[str, Any]]:
        """Return every document matching ``query``; empty list when none do.

        Args:
            query: MongoDB filter.
            **options: Passed to ``find`` (e.g. ``projection``, ``sort``, ``limit``).
        """
        cursor = self.collection.find(query, **options)
        return await cursor.to_list(length=None)

    async def update_one(
        self, query: Mapping[str, Any], update: Mapping[str, Any], **options: Any
    ) -> Optional[dict[str, Any]]:
        """Set the fields in ``update`` on the first document matching ``query``.

        ``update`` is a partial overlay applied with ``$set``; fields it does
        not mention are left untouched.

        Returns:
            The document as it is after the update, or None if nothing matched.

        Raises:
            HookError: If the post-update hook fails. The update is kept.
        """
        options.setdefault("return_document", ReturnDocument.AFTER)
        updated = await self.collection.find_one_and_update(
            query, {"$set": dict(update)}, **options
        )
        if updated is None:
            return None

        self._logger.debug("Document updated", document_id=str(updated.get("_id")))
        await self._after_mutation("update", updated)
        return updated

    async def delete_one(
        self, query: Mapping[str, Any], **options: Any
    ) -> Optional[dict[str, Any]]:
        """Delete the first document matching ``query``.

        Returns:
            The document as it was before deletion, or None if nothing matched.

        Raises:
            HookError: If the post-delete hook fails. The delete is kept.
        """
        deleted = await self.collection.find_one_and_delete(query, **options)
        if deleted is None:
            return None

        self._logger.debug("Document deleted", document_id=str(deleted.get("_id")))
        await self._after_mutation("delete", deleted)
        return deleted

    async def update_many(
        self, query: Mapping[str, Any], update: Mapping[str, Any], **options: Any
    ) -> int:
        """``$set`` the fields in ``update`` on every matching document.

        Hooks are intentionally not fired for bulk updates.

        Returns:
            The number of documents matched, which can exceed the number
            actually modified.
        """
        result = await self.collection.update_many(query, {"$set": dict(update)}, **options)
        self._logger.debug(
            "Documents updated",
            matched_count=result.matched_count,
            modified_count=result.modified_count,
        )
        return result.matched_count

    async def delete_many(self, query: Mapping[str, Any], **options: Any) -> int:
        """Delete every matching document.

        Hooks are intentionally not fired for bulk deletes.

        Returns:
            The number of documents deleted.
        """
        result = await self.collection.delete_many(query, **options)
        self._logger.debug("Documents deleted", deleted_count=result.deleted_count)
        return result.deleted_count

    async def _after_mutation(self, operation: Operation, document: dict[str, Any]) -> None:
        """Publish a committed single-document mutation, then run its hook.

        Registry hooks run first and cannot fail the call. The collection
        hook runs last; its failure is raised as HookError.
        """
        if self._registry is not None:
            await self._registry.trigger(
                OPERATION_EVENTS[operation],
                document,
                HookContext(collection=self._name, operation=operation),
                filters={"collection": self._name},
            )

        hook = self._config.hooks.for_operation(operation)
        if hook is None:
            return

        try:
            outcome = hook(document)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as e:
            self._logger.error(
                "Post-mutation hook failed",
                operation=operation,
                document_id=str(document.get("_id")),
                error=str(e),
            )
            raise HookError(self._name, operation, document) from e


def _validate_defaults(name: str, defaults: Mapping[str, Any], document_type: type) -> None:
    """Check that every default names a field declared on ``document_type``."""
    fields = set(get_type_hints(document_type))
    if not fields:
        return

    unknown = sorted(set(defaults) - fields)
    if unknown:
        raise CollectionConfigError(
            f"Defaults for collection '{name}' name undeclared fields: {', '.join(unknown)}"
        )


def create_collection_factory(
    database: AsyncIOMotorDatabase,
    *,
    registry: Optional[HookRegistry] = None,
) -> Callable[..., CollectionAccessor]:
    """Return a ``create_collection`` function bound to ``database``.

    Args:
        database: Motor database handle, shared by every accessor.
        registry: Optional hook registry that every accessor publishes
                  single-document mutation events to.

    Example:
        create_collection = create_collection_factory(connection.database)
        users: CollectionAccessor[User] = create_collection(
            "users", defaults={"isAdmin": False}, document_type=User
        )
    """

    def create_collection(
        name: str,
        config: Optional[CollectionConfig] = None,
        *,
        defaults: Optional[Mapping[str, Any]] = None,
        hooks: Optional[CollectionHooks] = None,
        document_type: Optional[type[DocumentT]] = None,
    ) -> CollectionAccessor[DocumentT]:
        """Create an accessor for the collection ``name``.

        Pass either a ``config`` or the ``defaults``/``hooks`` keywords, not
        both. When ``document_type`` is given (a TypedDict, dataclass or any
        annotated class), every key in the defaults must be one of its fields.

        Raises:
            CollectionConfigError: On an empty name, conflicting arguments or
                                   defaults naming undeclared fields.
        """
        if not isinstance(name, str) or not name:
            raise CollectionConfigError("Collection name must be a non-empty string")

        if config is None:
            config = CollectionConfig(defaults=defaults or {}, hooks=hooks or CollectionHooks())
        elif defaults is not None or hooks is not None:
            raise CollectionConfigError("Pass either config or defaults/hooks, not both")

        if document_type is not None:
            _validate_defaults(name, config.defaults, document_type)

        return CollectionAccessor(database, name, config, registry=registry)

    return create_collection
