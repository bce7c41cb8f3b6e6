"""
Field collection and value rules for document parsing.

Both the Parent visitor and the ChildDTO parser walk an unordered set of
named fields. FieldCollector applies the shared rules: each field at most
once, every required field present, and unknown fields either rejected or
skipped.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, Mapping, Optional, Sequence, Tuple

from weaklink.core.errors import (
    DuplicateFieldError,
    IntegrityMismatchError,
    InvalidValueError,
    MissingFieldError,
    UnknownFieldError,
)
from weaklink.core.types import U64_MAX, FieldSequence

if TYPE_CHECKING:
    from weaklink.core.child import ChildDTO

logger = logging.getLogger(__name__)


def iter_fields(document: Any, field: str) -> Iterator[Tuple[str, Any]]:
    """Yield the key/value pairs of a document object.

    Args:
        document: A mapping or a FieldSequence
        field: Name of the field holding the document, for error reporting

    Raises:
        InvalidValueError: If the document is not an object
    """
    if isinstance(document, FieldSequence):
        return iter(list(document))
    if isinstance(document, Mapping):
        return iter(list(document.items()))
    raise InvalidValueError(field, document, "an object")


def check_u64(field: str, value: Any) -> int:
    """Return value if it is an unsigned 64-bit integer.

    Raises:
        InvalidValueError: For non-integers (bool included) and out of range values
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidValueError(field, value, "u64")
    if value < 0 or value > U64_MAX:
        raise InvalidValueError(field, value, "u64")
    return value


def check_integrity(parent_id: int, dto: "ChildDTO") -> None:
    """Reject a child whose declared parent is not the enclosing parent.

    Raises:
        IntegrityMismatchError: If dto.parent_id differs from parent_id
    """
    if dto.parent_id != parent_id:
        logger.debug("Integrity mismatch: parent %d, child declares %d", parent_id, dto.parent_id)
        raise IntegrityMismatchError(parent_id, dto.parent_id)


class FieldCollector:
    """Collects the fields of one document object.

    Class Invariants:
    1. A field is accepted at most once
    2. Only fields named in expected_fields are stored
    3. With ignore_unknown, other fields are skipped and their values never parsed
    """

    def __init__(self, struct_name: str, expected_fields: Sequence[str], ignore_unknown: bool = False) -> None:
        if not expected_fields:
            raise ValueError("Expected fields must not be empty")
        self._struct_name = struct_name
        self._expected = tuple(expected_fields)
        self._ignore_unknown = ignore_unknown
        self._values: Dict[str, Any] = {}

    @property
    def struct_name(self) -> str:
        """Get the name of the structure being collected."""
        return self._struct_name

    @property
    def expected_fields(self) -> Tuple[str, ...]:
        """Get the recognized field names."""
        return self._expected

    def accept(self, key: Any, value: Any, parser: Optional[Callable[[Any], Any]] = None) -> None:
        """Record one field, parsing its value once the key is known to be valid.

        Args:
            key: Field name as read from the document
            value: Raw field value
            parser: Optional conversion applied to value before it is stored

        Raises:
            UnknownFieldError: If key is not a recognized field and unknown
                               fields are not ignored
            DuplicateFieldError: If key was already recorded
        """
        if key not in self._expected:
            if self._ignore_unknown:
                logger.debug("Skipped unknown %s field %r", self._struct_name, key)
                return
            raise UnknownFieldError(str(key), self._expected)
        if key in self._values:
            raise DuplicateFieldError(key)
        self._values[key] = parser(value) if parser is not None else value

    def require(self, field: str) -> Any:
        """Return a recorded field.

        Raises:
            MissingFieldError: If the field was never recorded
        """
        if field not in self._values:
            raise MissingFieldError(field)
        return self._values[field]


def require_u64(name: str, value: Any) -> int:
    """Constructor-side u64 check.

    Raises:
        ValueError: If value is not an unsigned 64-bit integer
    """
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= U64_MAX:
        raise ValueError(f"{name} must be an unsigned 64-bit integer")
    return value
