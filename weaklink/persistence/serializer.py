"""
JSON text codec for Parent/Child documents.

Architecture:
- Emits the tree produced by Parent.serialize()
- Parses text into ordered field pairs so repeated keys are not lost
- Delegates reconstruction to Parent.deserialize()

Output key order is fixed ("id" first). Input key order is free.
"""

import json
import logging
from dataclasses import dataclass
from typing import Optional, Union

from weaklink.core.errors import DocumentTooLargeError, MalformedDocumentError
from weaklink.core.parent import Parent
from weaklink.core.types import FieldSequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SerializerConfig:
    """Serializer settings.

    Attributes:
        indent: Indentation for pretty output; compact output when None
        max_document_size: Longest accepted input text, unlimited when None
    """

    indent: Optional[int] = None
    max_document_size: Optional[int] = None

    def __post_init__(self) -> None:
        if self.indent is not None and self.indent < 0:
            raise ValueError("Indent must be non-negative")
        if self.max_document_size is not None and self.max_document_size <= 0:
            raise ValueError("Max document size must be positive")


class Serializer:
    """Converts linked Parent/Child pairs to and from JSON text."""

    def __init__(self, config: Optional[SerializerConfig] = None) -> None:
        self._config = config or SerializerConfig()

    @property
    def config(self) -> SerializerConfig:
        """Get the serializer configuration."""
        return self._config

    def dumps(self, parent: Parent) -> str:
        """Serialize a Parent and its Child to JSON text.

        Raises:
            DanglingReferenceError: If the child's back-reference does not resolve
        """
        document = parent.serialize()
        if self._config.indent is None:
            return json.dumps(document, separators=(",", ":"))
        return json.dumps(document, indent=self._config.indent)

    def loads(self, text: Union[str, bytes]) -> Parent:
        """Reconstruct a linked Parent/Child pair from JSON text.

        Raises:
            DocumentTooLargeError: If text exceeds max_document_size
            MalformedDocumentError: If text is not valid JSON, nests too deeply
                                    or holds a number the parser refuses
            DeserializationError: Any other document failure
        """
        limit = self._config.max_document_size
        if limit is not None and len(text) > limit:
            logger.debug("Rejected document of %d characters, limit %d", len(text), limit)
            raise DocumentTooLargeError(len(text), limit)
        try:
            document = json.loads(text, object_pairs_hook=FieldSequence)
        except (ValueError, RecursionError) as e:
            logger.debug("Rejected malformed document: %s", e)
            raise MalformedDocumentError(f"Malformed document: {e}") from e
        return Parent.deserialize(document)


_default_serializer = Serializer()


def dumps(parent: Parent) -> str:
    """Serialize with the default compact Serializer."""
    return _default_serializer.dumps(parent)


def loads(text: Union[str, bytes]) -> Parent:
    """Deserialize with the default Serializer."""
    return _default_serializer.loads(text)
