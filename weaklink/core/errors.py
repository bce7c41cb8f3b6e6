"""
Error hierarchy for the Parent/Child ownership model.

Every failure raised by this package derives from WeakLinkError and carries a
``details`` dictionary, so callers dispatch on the exception type and read
structured context from ``details`` instead of parsing messages.
"""

from typing import Any, Dict, Optional, Sequence


class WeakLinkError(Exception):
    """
    Base exception class for errors within the weaklink library.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.details: Dict[str, Any] = details or {}


class DanglingReferenceError(WeakLinkError):
    """
    Raised when a back-reference does not resolve to a live Parent, either
    because it was never bound or because its owner has been released.
    """

    def __init__(self, message: str, child_id: Optional[int] = None) -> None:
        super().__init__(message, {"child_id": child_id})
        self.child_id = child_id


class DeserializationError(WeakLinkError):
    """
    Raised when a document cannot be turned into a linked Parent/Child pair.
    """


class DuplicateFieldError(DeserializationError):
    """
    Raised when a field appears more than once in a document.
    """

    def __init__(self, field: str) -> None:
        super().__init__(f"duplicate field `{field}`", {"field": field})
        self.field = field


class UnknownFieldError(DeserializationError):
    """
    Raised when a document carries a field outside the recognized set.
    """

    def __init__(self, field: str, expected: Sequence[str] = ()) -> None:
        expected = tuple(expected)
        if expected:
            message = f"unknown field `{field}`, expected one of {', '.join(expected)}"
        else:
            message = f"unknown field `{field}`"
        super().__init__(message, {"field": field, "expected": expected})
        self.field = field
        self.expected = expected


class MissingFieldError(DeserializationError):
    """
    Raised when a required field is absent at the end of a document.
    """

    def __init__(self, field: str) -> None:
        super().__init__(f"missing field `{field}`", {"field": field})
        self.field = field


class IntegrityMismatchError(DeserializationError):
    """
    Raised when the child's declared parent id disagrees with the id of the
    enclosing parent.
    """

    def __init__(self, parent_id: int, child_parent_id: int) -> None:
        super().__init__(
            f"Parent id {parent_id} and child parent_id {child_parent_id} mismatch",
            {"parent_id": parent_id, "child_parent_id": child_parent_id},
        )
        self.parent_id = parent_id
        self.child_parent_id = child_parent_id


class InvalidValueError(DeserializationError):
    """
    Raised when a field holds a value of the wrong type or out of range.
    """

    def __init__(self, field: str, value: Any, expected: str) -> None:
        super().__init__(
            f"invalid value {value!r} for field `{field}`, expected {expected}",
            {"field": field, "value": value, "expected": expected},
        )
        self.field = field
        self.value = value
        self.expected = expected


class MalformedDocumentError(DeserializationError):
    """
    Raised when input text is not a well-formed document.
    """


class DocumentTooLargeError(DeserializationError):
    """
    Raised when input text exceeds the configured size limit.
    """

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"document of {size} characters exceeds limit of {limit}",
            {"size": size, "limit": limit},
        )
        self.size = size
        self.limit = limit
