"""
Persistence package for the text form of Parent/Child pairs.

Architecture:
- Serializer turns linked pairs into JSON text and back
- SerializerConfig controls output layout and input limits
"""

from .serializer import Serializer, SerializerConfig, dumps, loads

__all__ = ["Serializer", "SerializerConfig", "dumps", "loads"]
