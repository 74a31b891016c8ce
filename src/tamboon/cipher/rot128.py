"""
Rot128 Stream Decoder

Streaming byte rotation: every byte read through the decoder is replaced by
(byte + offset) % 256. With the default offset of 128 the transform is its
own inverse, so the same decoder both encrypts and decrypts.

This is an obfuscation scheme, not encryption.
"""

import io
from typing import Optional

DEFAULT_OFFSET = 128


def normalize_offset(offset: int) -> int:
    """Wrap any integer offset into the byte range [0, 255]"""
    if isinstance(offset, bool) or not isinstance(offset, int):
        raise TypeError(f"Rotation offset must be an int, got {type(offset).__name__}")
    return offset % 256


def inverse_offset(offset: int) -> int:
    """Offset that undoes a rotation by `offset`"""
    return (256 - normalize_offset(offset)) % 256


def _translation_table(offset: int) -> bytes:
    return bytes((value + offset) % 256 for value in range(256))


def rotate(data: bytes, offset: int = DEFAULT_OFFSET) -> bytes:
    """Rotate a whole buffer in one go"""
    return bytes(data).translate(_translation_table(normalize_offset(offset)))


class RotatingStreamDecoder(io.RawIOBase):
    """Readable byte stream that rotates bytes pulled from a wrapped source.

    The decoder never reads ahead and keeps no state between reads, so the
    output does not depend on how the caller sizes its reads. Closing the
    decoder leaves the wrapped source open.
    """

    def __init__(self, source, offset: int = DEFAULT_OFFSET):
        """
        Args:
            source: Object exposing read(n) -> bytes (file, socket file, BytesIO)
            offset: Rotation applied to each byte, wrapped modulo 256

        Raises:
            ValueError: If source is missing or not readable
            TypeError: If offset is not an int
        """
        super().__init__()
        if source is None or not callable(getattr(source, "read", None)):
            raise ValueError("Rotation source must be a readable byte stream")

        self._source = source
        self.offset = normalize_offset(offset)
        self._table = _translation_table(self.offset)

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> Optional[int]:
        """Read up to len(buffer) bytes from the source, rotated in place.

        Returns:
            Number of bytes produced, 0 at end of stream, None if a
            non-blocking source has nothing available
        """
        self._checkClosed()
        view = memoryview(buffer).cast("B")
        chunk = self._source.read(len(view))
        if chunk is None:
            return None

        count = len(chunk)
        view[:count] = chunk.translate(self._table)
        return count
