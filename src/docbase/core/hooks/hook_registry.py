"""Hook registry - shared subscription point for document mutation events.

Collection accessors created with a registry publish every successful
single-document mutation to it. Unlike per-collection hooks, registry hooks
never fail the mutation: errors are logged and collected in the HookResult.
"""

import inspect
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from docbase.core.logging import get_logger
from docbase.domain.entities.hook_context import HookContext, HookResult

logger = get_logger(__name__)


@dataclass
class RegisteredHook:
    """Internal representation of a registered hook.

    Attributes:
        id: Unique identifier for this hook registration.
        event: The event this hook is registered for.
        callback: The function to call with (event, document, context).
        filters: Tag-based filters (e.g., {"collection": "users"}).
        priority: Execution priority (higher = earlier).
        stop_on_error: Whether an error skips the remaining hooks.
        registration_order: Order in which this hook was registered.
    """

    id: str
    event: str
    callback: Callable
    filters: dict[str, Any] = field(default_factory=dict)
    priority: int = 0
    stop_on_error: bool = False
    registration_order: int = 0


class HookRegistry:
    """Hook registration and execution engine.

    Example:
        registry = HookRegistry()

        hook_id = registry.register(
            event=HookEvent.ON_DOCUMENT_AFTER_CREATE,
            callback=send_welcome_email,
            filters={"collection": "users"},
        )

        create_collection = create_collection_factory(database, registry=registry)
        users = create_collection("users")
        await users.create_one({"name": "Yoda"})  # send_welcome_email runs

        registry.unregister(hook_id)
    """

    def __init__(self) -> None:
        self._hooks: dict[str, list[RegisteredHook]] = {}
        self._registration_counter: int = 0
        self._hook_map: dict[str, RegisteredHook] = {}

    def register(
        self,
        event: str,
        callback: Callable,
        filters: Optional[dict[str, Any]] = None,
        priority: int = 0,
        stop_on_error: bool = False,
    ) -> str:
        """Register a hook for an event.

        Args:
            event: Hook event name (e.g., "on_document_after_create").
            callback: Function accepting (event, document, context). May be
                      a coroutine function.
            filters: Optional tag-based filters. Hook only fires if all
                     filter conditions match (e.g., {"collection": "users"}).
            priority: Execution priority. Higher priority hooks run first.
            stop_on_error: If True, an error in this hook skips the hooks
                           after it. The mutation itself is unaffected.

        Returns:
            Unique hook_id string for later removal.
        """
        hook_id = f"hook_{uuid.uuid4().hex[:12]}"

        # FIFO ordering within same priority
        self._registration_counter += 1

        hook = RegisteredHook(
            id=hook_id,
            event=event,
            callback=callback,
            filters=filters or {},
            priority=priority,
            stop_on_error=stop_on_error,
            registration_order=self._registration_counter,
        )

        self._hooks.setdefault(event, []).append(hook)
        self._hook_map[hook_id] = hook

        logger.debug(
            "Hook registered",
            hook_id=hook_id,
            hook_event=event,
            priority=priority,
            filters=filters,
        )

        return hook_id

    def unregister(self, hook_id: str) -> bool:
        """Remove a registered hook.

        Args:
            hook_id: The unique ID returned from register().

        Returns:
            True if hook was removed, False if not found.
        """
        hook = self._hook_map.pop(hook_id, None)
        if not hook:
            logger.warning("Hook not found for unregister", hook_id=hook_id)
            return False

        remaining = [h for h in self._hooks.get(hook.event, []) if h.id != hook_id]
        if remaining:
            self._hooks[hook.event] = remaining
        else:
            self._hooks.pop(hook.event, None)

        logger.debug("Hook unregistered", hook_id=hook_id, hook_event=hook.event)

        return True

    async def trigger(
        self,
        event: str,
        document: dict[str, Any],
        context: HookContext,
        filters: Optional[dict[str, Any]] = None,
    ) -> HookResult:
        """Execute all registered hooks for an event.

        Hooks are executed in priority order (higher priority first).
        Hooks with the same priority execute in registration order.

        Args:
            event: Hook event name.
            document: The affected document.
            context: HookContext describing the mutation.
            filters: Trigger-time filters. Only hooks matching these
                     filters will be executed.

        Returns:
            HookResult with success status and any error messages.
        """
        result = HookResult()

        matching_hooks = self._filter_hooks(self._hooks.get(event, []), filters)
        if not matching_hooks:
            return result

        sorted_hooks = sorted(
            matching_hooks,
            key=lambda h: (-h.priority, h.registration_order),
        )

        logger.debug(
            "Triggering hooks",
            hook_event=event,
            hook_count=len(sorted_hooks),
            event_id=context.event_id,
        )

        for hook in sorted_hooks:
            try:
                outcome = hook.callback(event, document, context)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as e:
                logger.error(
                    "Hook execution failed",
                    hook_id=hook.id,
                    hook_event=event,
                    event_id=context.event_id,
                    error=str(e),
                    stop_on_error=hook.stop_on_error,
                )
                result.success = False
                result.errors.append(f"Hook {hook.id} failed: {e}")

                if hook.stop_on_error:
                    return result

        return result

    def _filter_hooks(
        self,
        hooks: list[RegisteredHook],
        filters: Optional[dict[str, Any]],
    ) -> list[RegisteredHook]:
        """Filter hooks based on trigger filters.

        A hook matches if it has no filters, or if every one of its filter
        keys is present in the trigger filters with an equal value.
        """
        if not filters:
            return list(hooks)

        return [
            hook
            for hook in hooks
            if all(
                key in filters and filters[key] == value
                for key, value in hook.filters.items()
            )
        ]

    def get_hooks_for_event(self, event: str) -> list[RegisteredHook]:
        """Get all hooks registered for an event."""
        return self._hooks.get(event, []).copy()

    def get_all_hooks(self) -> dict[str, list[RegisteredHook]]:
        """Get all registered hooks organized by event."""
        return {event: hooks.copy() for event, hooks in self._hooks.items()}

    def get_hook_by_id(self, hook_id: str) -> Optional[RegisteredHook]:
        """Get a hook by its ID."""
        return self._hook_map.get(hook_id)

    def clear(self) -> int:
        """Remove all registered hooks.

        Returns:
            Number of hooks removed.
        """
        count = len(self._hook_map)
        self._hooks.clear()
        self._hook_map.clear()
        logger.debug("Hooks cleared", count=count)
        return count
