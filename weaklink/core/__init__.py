"""
Core package providing the Parent/Child ownership model.

Architecture:
- Parent strongly owns exactly one Child
- Child observes its Parent through a weak BackReference
- Documents are parsed field by field, validated, then built and linked

Cross-cutting:
- Error handling through the WeakLinkError hierarchy
- Debug logging of link and rejection events
"""

# Import order matters to avoid circular dependencies
from .errors import (
    DanglingReferenceError,
    DeserializationError,
    DocumentTooLargeError,
    DuplicateFieldError,
    IntegrityMismatchError,
    InvalidValueError,
    MalformedDocumentError,
    MissingFieldError,
    UnknownFieldError,
    WeakLinkError,
)
from .types import DeserializationState, FieldSequence, U64_MAX
from .reference import BackReference
from .child import Child, ChildDTO
from .parent import Parent, ParentVisitor

__all__ = [
    # Entities
    "Parent",
    "Child",
    "ChildDTO",
    "BackReference",
    "ParentVisitor",
    # Types
    "DeserializationState",
    "FieldSequence",
    "U64_MAX",
    # Errors
    "WeakLinkError",
    "DanglingReferenceError",
    "DeserializationError",
    "DuplicateFieldError",
    "UnknownFieldError",
    "MissingFieldError",
    "IntegrityMismatchError",
    "InvalidValueError",
    "MalformedDocumentError",
    "DocumentTooLargeError",
]
