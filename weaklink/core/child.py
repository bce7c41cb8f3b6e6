"""
Child entity and its transfer shape.

The Child is the leaf of the pair. It owns nothing and reaches its Parent
only through a BackReference, so serializing it emits the parent's id as a
scalar and never descends into the parent's document.

ChildDTO is the flat shape read from input documents. It carries the parent
as a plain integer, which lets the deserializer read child data before any
owner exists to point at.
"""

from dataclasses import dataclass
from weaklink.core.reference import BackReference
from weaklink.core.types import Document, DocumentInput
from weaklink.core.validation import FieldCollector, check_u64, iter_fields, require_u64

CHILD_DTO_FIELDS = ("id", "parent_id")


@dataclass(frozen=True)
class ChildDTO:
    """Flat, acyclic child record read from a document.

    Attributes:
        id: The child's own id
        parent_id: The id of the parent the child declares
    """

    id: int
    parent_id: int

    def __post_init__(self) -> None:
        require_u64("Child ID", self.id)
        require_u64("Parent ID", self.parent_id)

    @classmethod
    def from_document(cls, document: DocumentInput, field: str = "child") -> "ChildDTO":
        """Parse a child sub-document of the form {"id": u64, "parent_id": u64}.

        Other keys are skipped without looking at their values, so a nested
        ``parent`` object is never parsed.

        Args:
            document: Mapping or FieldSequence holding the child fields
            field: Name under which the sub-document appeared

        Raises:
            InvalidValueError: If the document is not an object or a value is not u64
            DuplicateFieldError: If a field repeats
            MissingFieldError: If id or parent_id is absent
        """
        collector = FieldCollector("ChildDTO", CHILD_DTO_FIELDS, ignore_unknown=True)
        for key, value in iter_fields(document, field):
            collector.accept(key, value, lambda v, k=key: check_u64(k, v))
        return cls(id=collector.require("id"), parent_id=collector.require("parent_id"))


class Child:
    """Leaf entity holding a non-owning reference to its Parent.

    Class Invariants:
    1. The id never changes after construction
    2. The back-reference never owns the Parent
    3. Outside the construction window, parent.resolve() is the owning Parent
    """

    def __init__(self, child_id: int) -> None:
        """Initialize a Child with a fresh unbound back-reference.

        Args:
            child_id: Unsigned 64-bit id of the child

        Raises:
            ValueError: If child_id is not an unsigned 64-bit integer
        """
        self._id = require_u64("Child ID", child_id)
        self._parent = BackReference(self)

    @classmethod
    def from_dto(cls, dto: ChildDTO) -> "Child":
        """Build an unbound Child from its transfer shape."""
        return cls(dto.id)

    @property
    def id(self) -> int:
        """Get the child ID."""
        return self._id

    @property
    def parent(self) -> BackReference:
        """Get the back-reference to the owning Parent."""
        return self._parent

    def serialize(self) -> Document:
        """Serialize the child with its parent resolved to an id.

        Returns:
            {"id": <child id>, "parent": <parent id>}

        Raises:
            DanglingReferenceError: If the back-reference does not resolve
        """
        parent = self._parent.resolve()
        return {"id": self._id, "parent": parent.id}

    def __repr__(self) -> str:
        return f"Child(id={self._id}, parent={self._parent!r})"
