"""Decorator API for registering document mutation hooks.

Enables the ``@hooks.on_document_after_create("users")`` syntax on top of
a HookRegistry.
"""

from typing import Any, Callable, Optional, TypeVar

from docbase.core.hooks.hook_events import HookEvent
from docbase.core.hooks.hook_registry import HookRegistry

F = TypeVar("F", bound=Callable[..., Any])


class HookDecorator:
    """Provides decorator syntax for hook registration.

    Example:
        hooks = HookDecorator(registry)

        @hooks.on_document_after_create("users")
        async def welcome(event, document, context):
            await mailer.send_welcome(document["email"])
    """

    def __init__(self, registry: HookRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> HookRegistry:
        """Get the underlying hook registry."""
        return self._registry

    def on_document_after_create(
        self,
        collection: Optional[str] = None,
        priority: int = 0,
        stop_on_error: bool = False,
    ) -> Callable[[F], F]:
        """Register a hook called after a document is created.

        Args:
            collection: Only fire for this collection. None for all collections.
            priority: Execution priority (higher = earlier).
            stop_on_error: Skip the remaining hooks if this one fails.

        Returns:
            Decorator function.
        """
        return self._create_decorator(
            event=HookEvent.ON_DOCUMENT_AFTER_CREATE,
            collection=collection,
            priority=priority,
            stop_on_error=stop_on_error,
        )

    def on_document_after_update(
        self,
        collection: Optional[str] = None,
        priority: int = 0,
        stop_on_error: bool = False,
    ) -> Callable[[F], F]:
        """Register a hook called with the post-update image of a document."""
        return self._create_decorator(
            event=HookEvent.ON_DOCUMENT_AFTER_UPDATE,
            collection=collection,
            priority=priority,
            stop_on_error=stop_on_error,
        )

    def on_document_after_delete(
        self,
        collection: Optional[str] = None,
        priority: int = 0,
        stop_on_error: bool = False,
    ) -> Callable[[F], F]:
        """Register a hook called with the pre-deletion image of a document."""
        return self._create_decorator(
            event=HookEvent.ON_DOCUMENT_AFTER_DELETE,
            collection=collection,
            priority=priority,
            stop_on_error=stop_on_error,
        )

    def register(
        self,
        event: str,
        callback: Callable,
        filters: Optional[dict[str, Any]] = None,
        priority: int = 0,
        stop_on_error: bool = False,
    ) -> str:
        """Register a hook programmatically (non-decorator form).

        Returns:
            Unique hook_id for later removal.
        """
        return self._registry.register(
            event=event,
            callback=callback,
            filters=filters,
            priority=priority,
            stop_on_error=stop_on_error,
        )

    def _create_decorator(
        self,
        event: str,
        collection: Optional[str],
        priority: int,
        stop_on_error: bool,
    ) -> Callable[[F], F]:
        def decorator(func: F) -> F:
            filters = {}
            if collection:
                filters["collection"] = collection

            self._registry.register(
                event=event,
                callback=func,
                filters=filters,
                priority=priority,
                stop_on_error=stop_on_error,
            )
            return func

        return decorator
