"""Hook event definitions.

Events published to a HookRegistry by collection accessors. Only
single-document mutations publish events; bulk operations never do.
"""

from docbase.domain.entities.hook_context import Operation


class HookEvent:
    """Hook event names.

    Attributes in format: ON_DOCUMENT_AFTER_<OPERATION>
    """

    ON_DOCUMENT_AFTER_CREATE = "on_document_after_create"
    ON_DOCUMENT_AFTER_UPDATE = "on_document_after_update"
    ON_DOCUMENT_AFTER_DELETE = "on_document_after_delete"


OPERATION_EVENTS: dict[Operation, str] = {
    "create": HookEvent.ON_DOCUMENT_AFTER_CREATE,
    "update": HookEvent.ON_DOCUMENT_AFTER_UPDATE,
    "delete": HookEvent.ON_DOCUMENT_AFTER_DELETE,
}


def get_all_events() -> list[str]:
    """Get all available hook event names."""
    return [
        value
        for name, value in vars(HookEvent).items()
        if not name.startswith("_") and isinstance(value, str)
    ]
