"""Hook registry for document mutation events.

Example usage:
    from docbase.core.hooks import HookDecorator, HookRegistry

    registry = HookRegistry()
    hooks = HookDecorator(registry)

    @hooks.on_document_after_update("users")
    async def sync_profile(event, document, context):
        await search_index.upsert(document)

    create_collection = create_collection_factory(database, registry=registry)
"""

from docbase.core.hooks.hook_decorator import HookDecorator
from docbase.core.hooks.hook_events import OPERATION_EVENTS, HookEvent, get_all_events
from docbase.core.hooks.hook_registry import HookRegistry, RegisteredHook

__all__ = [
    "HookRegistry",
    "RegisteredHook",
    "HookDecorator",
    "HookEvent",
    "OPERATION_EVENTS",
    "get_all_events",
]
