"""
Type definitions and enums for the Parent/Child model.

Design:
- No runtime dependencies on other modules
- Shared by the entities, the validation rules and the serializer
"""

from enum import Enum, auto
from typing import Any, Dict, List, Mapping, Tuple, Union

U64_MAX = 2**64 - 1


class DeserializationState(Enum):
    """Lifecycle of a single Parent reconstruction.

    START -> COLLECTING_FIELDS -> VALIDATING -> LINKED, with FAILED reachable
    from every non-terminal state.
    """

    START = auto()  # Visitor created, no input consumed
    COLLECTING_FIELDS = auto()  # Reading `id` and `child`
    VALIDATING = auto()  # All fields present, checking integrity
    LINKED = auto()  # Pair constructed and back-reference bound
    FAILED = auto()  # Terminal, nothing constructed


class FieldSequence(List[Tuple[str, Any]]):
    """Ordered key/value pairs of a document object.

    Unlike a dict, repeated keys survive, so duplicate fields can be
    reported instead of silently overwritten.
    """

    def __repr__(self) -> str:
        return f"FieldSequence({list.__repr__(self)})"


# Serialized form as produced by serialize()
Document = Dict[str, Any]

# Accepted input for deserialize()
DocumentInput = Union[Mapping[str, Any], FieldSequence]
