"""Unit tests for the Parent class and its deserialization visitor.

Tests ownership, serialization and the build-then-link reconstruction.
"""

import unittest

from weaklink.core.child import Child
from weaklink.core.errors import (
    DuplicateFieldError,
    IntegrityMismatchError,
    InvalidValueError,
    MissingFieldError,
    UnknownFieldError,
)
from weaklink.core.parent import Parent, ParentVisitor
from weaklink.core.types import DeserializationState, FieldSequence

CHILD = {"id": 200, "parent_id": 1}


class TestParent(unittest.TestCase):
    """Test cases for Parent construction and serialization."""

    def test_construction_does_not_link(self):
        """Test that taking ownership leaves the back-reference unbound."""
        child = Child(200)
        parent = Parent(1, child)
        self.assertIs(parent.child, child)
        self.assertFalse(child.parent.is_bound)

    def test_link(self):
        """Test that link() closes the cycle by identity."""
        child = Child(200)
        parent = Parent(1, child)
        self.assertIs(parent.link(), parent)
        self.assertIs(child.parent.resolve(), parent)

    def test_create(self):
        """Test the three-step construction helper."""
        parent = Parent.create(1, 200)
        self.assertEqual(parent.id, 1)
        self.assertEqual(parent.child.id, 200)
        self.assertIs(parent.child.parent.resolve(), parent)

    def test_exclusive_ownership(self):
        """Test that a child bound to an owner cannot be adopted again."""
        parent = Parent.create(1, 200)
        with self.assertRaises(ValueError):
            Parent(2, parent.child)
        self.assertIs(parent.child.parent.resolve(), parent)

    def test_exclusive_ownership_before_link(self):
        """Test that an owned but not yet linked child cannot be adopted again."""
        child = Child(200)
        first = Parent(1, child)
        with self.assertRaises(ValueError):
            Parent(2, child)
        first.link()
        self.assertIs(child.parent.resolve(), first)
        self.assertEqual(first.serialize(), {"id": 1, "child": {"id": 200, "parent": 1}})

    def test_link_is_idempotent(self):
        """Test that linking twice keeps the same owner."""
        parent = Parent.create(1, 200)
        parent.link()
        self.assertIs(parent.child.parent.resolve(), parent)

    def test_parent_validation(self):
        """Test that invalid ids and children are rejected."""
        with self.assertRaises(ValueError):
            Parent(-1, Child(200))
        with self.assertRaises(ValueError):
            Parent(1, None)
        with self.assertRaises(ValueError):
            Parent(1, {"id": 200})

    def test_ids_are_read_only(self):
        """Test that the id and child cannot be reassigned."""
        parent = Parent.create(1, 200)
        with self.assertRaises(AttributeError):
            parent.id = 2
        with self.assertRaises(AttributeError):
            parent.child = Child(300)

    def test_serialize(self):
        """Test the nested document with the scalar back-edge."""
        parent = Parent.create(1, 200)
        document = parent.serialize()
        self.assertEqual(document, {"id": 1, "child": {"id": 200, "parent": 1}})
        self.assertEqual(list(document), ["id", "child"])

    def test_repr(self):
        """Test the textual form names both ids."""
        self.assertEqual(repr(Parent.create(1, 200)), "Parent(id=1, child=200)")


class TestParentDeserialize(unittest.TestCase):
    """Test cases for Parent.deserialize."""

    def test_deserialize(self):
        """Test reconstruction of the canonical pair."""
        parent = Parent.deserialize({"id": 1, "child": {"id": 200, "parent_id": 1}})
        self.assertEqual(parent.id, 1)
        self.assertEqual(parent.child.id, 200)
        self.assertIs(parent.child.parent.resolve(), parent)

    def test_field_order_is_free(self):
        """Test that child may precede id."""
        parent = Parent.deserialize(FieldSequence([("child", CHILD), ("id", 1)]))
        self.assertEqual(parent.serialize(), {"id": 1, "child": {"id": 200, "parent": 1}})

    def test_duplicate_id(self):
        """Test that a repeated id is rejected."""
        document = FieldSequence([("id", 1), ("id", 1), ("child", CHILD)])
        with self.assertRaises(DuplicateFieldError) as ctx:
            Parent.deserialize(document)
        self.assertEqual(ctx.exception.field, "id")

    def test_duplicate_child(self):
        """Test that a repeated child is rejected."""
        document = FieldSequence([("id", 1), ("child", CHILD), ("child", CHILD)])
        with self.assertRaises(DuplicateFieldError) as ctx:
            Parent.deserialize(document)
        self.assertEqual(ctx.exception.field, "child")

    def test_unknown_field(self):
        """Test that fields outside {id, child} are rejected."""
        with self.assertRaises(UnknownFieldError) as ctx:
            Parent.deserialize({"id": 1, "child": CHILD, "extra": True})
        self.assertEqual(ctx.exception.field, "extra")
        self.assertEqual(ctx.exception.expected, ("id", "child"))

    def test_missing_fields(self):
        """Test that the missing field is named."""
        with self.assertRaises(MissingFieldError) as ctx:
            Parent.deserialize({"child": CHILD})
        self.assertEqual(ctx.exception.field, "id")
        with self.assertRaises(MissingFieldError) as ctx:
            Parent.deserialize({"id": 1})
        self.assertEqual(ctx.exception.field, "child")

    def test_integrity_mismatch(self):
        """Test that a child declaring another parent is rejected."""
        with self.assertRaises(IntegrityMismatchError) as ctx:
            Parent.deserialize({"id": 1, "child": {"id": 200, "parent_id": 2}})
        self.assertEqual(ctx.exception.parent_id, 1)
        self.assertEqual(ctx.exception.child_parent_id, 2)

    def test_output_shape_rejected_as_input(self):
        """Test that the emitted child shape lacks the parent_id input needs."""
        with self.assertRaises(MissingFieldError) as ctx:
            Parent.deserialize({"id": 1, "child": {"id": 200, "parent": 1}})
        self.assertEqual(ctx.exception.field, "parent_id")

    def test_extra_child_fields_ignored(self):
        """Test that unrecognized child keys do not block reconstruction."""
        parent = Parent.deserialize({"id": 1, "child": {"id": 200, "parent_id": 1, "name": "x"}})
        self.assertEqual(parent.child.id, 200)
        self.assertIs(parent.child.parent.resolve(), parent)

    def test_invalid_values(self):
        """Test that ids must be u64 integers and child must be an object."""
        with self.assertRaises(InvalidValueError):
            Parent.deserialize({"id": "1", "child": CHILD})
        with self.assertRaises(InvalidValueError):
            Parent.deserialize({"id": 1, "child": 200})
        with self.assertRaises(InvalidValueError):
            Parent.deserialize([("id", 1), ("child", CHILD)])


class TestParentVisitor(unittest.TestCase):
    """Test cases for the deserialization state machine."""

    def test_initial_state(self):
        """Test that a new visitor starts in START with no result."""
        visitor = ParentVisitor()
        self.assertEqual(visitor.state, DeserializationState.START)
        self.assertIsNone(visitor.result)

    def test_linked(self):
        """Test that success ends in LINKED with the result exposed."""
        visitor = ParentVisitor()
        parent = visitor.visit({"id": 1, "child": CHILD})
        self.assertEqual(visitor.state, DeserializationState.LINKED)
        self.assertIs(visitor.result, parent)

    def test_failed_leaves_no_result(self):
        """Test that every failure kind ends in FAILED with nothing built."""
        documents = [
            FieldSequence([("id", 1), ("id", 1), ("child", CHILD)]),
            {"id": 1, "child": CHILD, "extra": True},
            {"id": 1},
            {"id": 1, "child": {"id": 200, "parent_id": 2}},
        ]
        for document in documents:
            visitor = ParentVisitor()
            with self.assertRaises(Exception):
                visitor.visit(document)
            self.assertEqual(visitor.state, DeserializationState.FAILED)
            self.assertIsNone(visitor.result)

    def test_single_use(self):
        """Test that a visitor cannot be reused."""
        visitor = ParentVisitor()
        visitor.visit({"id": 1, "child": CHILD})
        with self.assertRaises(RuntimeError):
            visitor.visit({"id": 1, "child": CHILD})


if __name__ == "__main__":
    unittest.main()
