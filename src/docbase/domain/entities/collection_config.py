"""Collection configuration entities.

A collection is configured once, at construction, with optional default
field values and optional post-mutation hooks. Both are frozen afterwards.
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional

# A hook receives the affected document. Coroutine functions are awaited;
# plain callables are called as-is.
DocumentHook = Callable[[dict[str, Any]], Optional[Awaitable[None]]]


@dataclass(frozen=True)
class CollectionHooks:
    """Post-mutation hooks for a single collection.

    Hooks only fire for single-document mutations (``create_one``,
    ``update_one``, ``delete_one``), and only when a document was affected.

    Attributes:
        post_create: Called with the newly created document.
        post_update: Called with the document as it is after the update.
        post_delete: Called with the document as it was before deletion.
    """

    post_create: Optional[DocumentHook] = None
    post_update: Optional[DocumentHook] = None
    post_delete: Optional[DocumentHook] = None

    def for_operation(self, operation: str) -> Optional[DocumentHook]:
        """Return the hook configured for an operation, if any."""
        return {
            "create": self.post_create,
            "update": self.post_update,
            "delete": self.post_delete,
        }.get(operation)


@dataclass(frozen=True)
class CollectionConfig:
    """Immutable configuration of a collection accessor.

    ``defaults`` is snapshotted into a read-only mapping, so changes to the
    dict the caller passed in do not leak into later inserts.
    """

    defaults: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    hooks: CollectionHooks = field(default_factory=CollectionHooks)

    def __post_init__(self) -> None:
        # frozen dataclass: bypass __setattr__ to normalize fields
        object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults or {})))
        if self.hooks is None:
            object.__setattr__(self, "hooks", CollectionHooks())

    def apply_defaults(self, document: Mapping[str, Any]) -> dict[str, Any]:
        """Shallow-overlay a document on top of the defaults.

        Keys present in ``document`` win, including keys the defaults do not
        mention. Nested values are replaced wholesale, never merged.

        Args:
            document: Caller-supplied document without ``_id``.

        Returns:
            A new dict; neither the defaults nor ``document`` are modified.
        """
        return {**self.defaults, **document}
