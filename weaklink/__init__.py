"""weaklink: a Parent/Child pair with an owning edge and a weak back-edge

This package models a one-to-one ownership relationship in which a Parent
strongly owns its Child and the Child holds a non-owning reference back to
the Parent, and round-trips the pair through an acyclic JSON document.

Responsibilities:
    - Ownership discipline (no cycle of strong references)
    - Serialization that emits the back-edge as a scalar id
    - Reconstruction that validates ids before building and linking

Cross-cutting Concerns:
    Error Handling:
        - Structured error hierarchy rooted at WeakLinkError
        - Errors propagate to the caller, nothing partial is returned

    Logging:
        - Standard library logging through module-level loggers
        - Debug level only; the library installs no handlers
"""

from weaklink.core import (
    BackReference,
    Child,
    ChildDTO,
    DanglingReferenceError,
    DeserializationError,
    DeserializationState,
    DocumentTooLargeError,
    DuplicateFieldError,
    FieldSequence,
    IntegrityMismatchError,
    InvalidValueError,
    MalformedDocumentError,
    MissingFieldError,
    Parent,
    UnknownFieldError,
    WeakLinkError,
)
from weaklink.persistence import Serializer, SerializerConfig, dumps, loads

__version__ = "0.1.0"

__all__ = [
    "BackReference",
    "Child",
    "ChildDTO",
    "Parent",
    "DeserializationState",
    "FieldSequence",
    "Serializer",
    "SerializerConfig",
    "dumps",
    "loads",
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
