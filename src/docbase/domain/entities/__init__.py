"""Domain entities for docbase.

Entities are plain dataclasses with no dependency on the database driver.
"""

from docbase.domain.entities.collection_config import (
    CollectionConfig,
    CollectionHooks,
    DocumentHook,
)
from docbase.domain.entities.hook_context import HookContext, HookResult, Operation

__all__ = [
    "CollectionConfig",
    "CollectionHooks",
    "DocumentHook",
    "HookContext",
    "HookResult",
    "Operation",
]
