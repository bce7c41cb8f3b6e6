"""
Parent entity and its deserialization visitor.

Architecture:
- Parent holds the only strong reference to its Child
- The Child points back through a weak BackReference
- Serialization is root-down and produces a strictly tree-shaped document
- Deserialization collects fields, validates, then builds and links

Construction order is fixed: Child with an unbound back-reference, then the
Parent owning it, then link() binding the back-reference. link() is the only
place the cycle is closed.

Responsibilities:
1. Ownership
   - Exclusive ownership of one Child
   - Rejection of children already bound to an owner
2. Serialization
   - {"id": ..., "child": {"id": ..., "parent": ...}}
3. Reconstruction
   - Field collection over {id, child}
   - Integrity check of child parent_id against id
   - Build-then-link of the pair
"""

import logging
from typing import Any, Optional, Tuple

from weaklink.core.child import Child, ChildDTO
from weaklink.core.errors import WeakLinkError
from weaklink.core.types import DeserializationState, Document, DocumentInput
from weaklink.core.validation import FieldCollector, check_integrity, check_u64, iter_fields, require_u64

logger = logging.getLogger(__name__)

PARENT_FIELDS = ("id", "child")


class Parent:
    """Root entity exclusively owning one Child.

    Class Invariants:
    1. The id never changes after construction
    2. No other Parent owns the same Child
    3. After link(), child.parent.resolve() is self
    """

    def __init__(self, parent_id: int, child: Child) -> None:
        """Take ownership of a Child without linking it.

        Args:
            parent_id: Unsigned 64-bit id of the parent
            child: An unbound Child

        Raises:
            ValueError: If parent_id is invalid, child is not a Child,
                        or child is already owned by another Parent
        """
        self._id = require_u64("Parent ID", parent_id)
        if not isinstance(child, Child):
            raise ValueError("Child must be a Child instance")
        child.parent.claim(self)
        self._child = child

    @classmethod
    def create(cls, parent_id: int, child_id: int) -> "Parent":
        """Build a linked Parent/Child pair.

        Args:
            parent_id: Id of the new Parent
            child_id: Id of the new Child

        Returns:
            A Parent whose child's back-reference resolves to it
        """
        return cls(parent_id, Child(child_id)).link()

    @property
    def id(self) -> int:
        """Get the parent ID."""
        return self._id

    @property
    def child(self) -> Child:
        """Get the owned Child."""
        return self._child

    def link(self) -> "Parent":
        """Bind the owned child's back-reference to this Parent.

        Returns:
            self, for chaining after construction

        Raises:
            ValueError: If the child is bound to a different owner
        """
        self._child.parent.bind(self)
        logger.debug("Linked child %d to parent %d", self._child.id, self._id)
        return self

    def serialize(self) -> Document:
        """Serialize the pair as a nested document.

        Returns:
            {"id": <parent id>, "child": <child document>}

        Raises:
            DanglingReferenceError: Propagated from the child
        """
        return {"id": self._id, "child": self._child.serialize()}

    @classmethod
    def deserialize(cls, document: DocumentInput) -> "Parent":
        """Reconstruct a linked pair from a document.

        Args:
            document: Mapping or FieldSequence of the form
                      {"id": u64, "child": {"id": u64, "parent_id": u64}}

        Returns:
            A Parent whose child's back-reference resolves to it

        Raises:
            DeserializationError: Any subclass, on the first failure found
        """
        return ParentVisitor().visit(document)

    def __repr__(self) -> str:
        return f"Parent(id={self._id}, child={self._child.id})"


class ParentVisitor:
    """Single-use visitor turning one document into a linked Parent.

    Drives DeserializationState through
    START -> COLLECTING_FIELDS -> VALIDATING -> LINKED, or FAILED on any
    error. Nothing is constructed before validation passes, so a failed
    visit leaves no Parent or Child behind.
    """

    def __init__(self) -> None:
        self._state = DeserializationState.START
        self._result: Optional[Parent] = None

    @property
    def state(self) -> DeserializationState:
        """Get the current state."""
        return self._state

    @property
    def result(self) -> Optional[Parent]:
        """Get the reconstructed Parent once LINKED."""
        return self._result

    def visit(self, document: DocumentInput) -> Parent:
        """Run the visitor over a document.

        Raises:
            RuntimeError: If the visitor has already been used
            DeserializationError: On any document failure
        """
        if self._state is not DeserializationState.START:
            raise RuntimeError(f"Visitor already used, state is {self._state.name}")
        try:
            self._state = DeserializationState.COLLECTING_FIELDS
            parent_id, dto = self._collect(document)
            self._state = DeserializationState.VALIDATING
            check_integrity(parent_id, dto)
            self._result = self._build(parent_id, dto)
        except WeakLinkError as e:
            self._state = DeserializationState.FAILED
            logger.debug("Rejected Parent document: %s", e)
            raise
        self._state = DeserializationState.LINKED
        return self._result

    def _collect(self, document: Any) -> Tuple[int, ChildDTO]:
        collector = FieldCollector("Parent", PARENT_FIELDS)
        for key, value in iter_fields(document, "Parent"):
            if key == "child":
                collector.accept(key, value, ChildDTO.from_document)
            else:
                collector.accept(key, value, lambda v, k=key: check_u64(k, v))
        return collector.require("id"), collector.require("child")

    @staticmethod
    def _build(parent_id: int, dto: ChildDTO) -> Parent:
        child = Child.from_dto(dto)
        parent = Parent(parent_id, child)
        return parent.link()
