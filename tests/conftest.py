# tests/conftest.py

import pytest


@pytest.fixture
def linked_pair():
    """Parent id=1 owning Child id=200, back-reference wired."""
    from weaklink.core.parent import Parent

    return Parent.create(1, 200)


@pytest.fixture
def canonical_document():
    """Input document matching the linked_pair fixture."""
    return {"id": 1, "child": {"id": 200, "parent_id": 1}}


@pytest.fixture
def canonical_text():
    """Compact text form emitted for the linked_pair fixture."""
    return '{"id":1,"child":{"id":200,"parent":1}}'


@pytest.fixture
def error_classes():
    """Provides a tuple of document error classes for quick reference."""
    from weaklink.core.errors import (
        DeserializationError,
        DuplicateFieldError,
        IntegrityMismatchError,
        MissingFieldError,
        UnknownFieldError,
    )

    return (DeserializationError, DuplicateFieldError, UnknownFieldError, MissingFieldError, IntegrityMismatchError)
