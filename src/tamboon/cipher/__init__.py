"""
Cipher Layer - Byte Stream Transforms

Streaming transforms that sit between a byte source and a sink.
- No file or network handling of their own
- Compose with any object exposing read(n)
"""

from .rot128 import (
    DEFAULT_OFFSET,
    RotatingStreamDecoder,
    inverse_offset,
    normalize_offset,
    rotate,
)

__all__ = [
    "DEFAULT_OFFSET",
    "RotatingStreamDecoder",
    "inverse_offset",
    "normalize_offset",
    "rotate",
]
