"""Hook context and result types for the hook registry.

Contains the data structures passed to and returned from registry hooks:
- HookContext: Context passed to every registry hook callback
- HookResult: Result of a hook trigger operation
"""

import uuid
from dataclasses import dataclass, field
from typing import Literal

Operation = Literal["create", "update", "delete"]


@dataclass
class HookContext:
    """Context passed to registry hook callbacks.

    Attributes:
        collection: Name of the collection the mutation ran against.
        operation: Kind of mutation ("create", "update" or "delete").
        event_id: Identifier for this event, for logging and tracing.

    Example:
        async def audit(event: str, document: dict, context: HookContext) -> None:
            logger.info("Mutation", collection=context.collection, event_id=context.event_id)
    """

    collection: str
    operation: Operation
    event_id: str = ""

    def __post_init__(self) -> None:
        if not self.event_id:
            self.event_id = f"evt_{uuid.uuid4().hex[:12]}"


@dataclass
class HookResult:
    """Result of a hook trigger operation.

    Attributes:
        success: Whether every triggered hook completed without error.
        errors: Messages from hooks that failed.
    """

    success: bool = True
    errors: list[str] = field(default_factory=list)
