from .assignment import IdentifierAssignmentService
from .registry import TokenEntry, TokenRegistry
from .resolver import TokenLookup, resolve_unique

__all__ = [
    "IdentifierAssignmentService",
    "TokenEntry",
    "TokenLookup",
    "TokenRegistry",
    "resolve_unique",
]
