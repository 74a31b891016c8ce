"""
File Decryption - Extract Layer

Decodes a Rot128 file to disk by streaming it through RotatingStreamDecoder.
Both file handles are scoped, so they are closed (and the output flushed)
on every exit path.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Union

from tamboon.cipher.rot128 import DEFAULT_OFFSET, RotatingStreamDecoder

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


def decrypt_file(
    encrypted_path: Union[str, Path],
    decrypted_path: Union[str, Path],
    offset: int = DEFAULT_OFFSET,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """
    Decode an encrypted file into a new file

    Args:
        encrypted_path: Path to the Rot128 file
        decrypted_path: Path to write the decoded bytes to
        offset: Rotation offset (128 for Rot128)
        chunk_size: Read size used for the streaming copy

    Returns:
        int: Number of bytes written

    Raises:
        FileNotFoundError: If the encrypted file does not exist
        ValueError: If the output path is the encrypted file itself
        OSError: On read or write failures
    """
    encrypted_path = Path(encrypted_path)
    decrypted_path = Path(decrypted_path)

    if not encrypted_path.exists():
        raise FileNotFoundError(f"Encrypted file not found: {encrypted_path}")

    # Opening the output for writing would truncate the input before it is read
    if decrypted_path.resolve() == encrypted_path.resolve() or (
        decrypted_path.exists() and os.path.samefile(encrypted_path, decrypted_path)
    ):
        raise ValueError(
            f"Output path must differ from the encrypted file: {decrypted_path}"
        )

    # Ensure output directory exists
    decrypted_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(encrypted_path, "rb") as encrypted_file, open(
            decrypted_path, "wb"
        ) as decrypted_file:
            decoder = RotatingStreamDecoder(encrypted_file, offset)
            shutil.copyfileobj(decoder, decrypted_file, chunk_size)
            written = decrypted_file.tell()

    except OSError as e:
        logger.error(f"❌ Failed to decrypt {encrypted_path}: {e}")
        raise

    logger.info(f"✅ Decrypted {encrypted_path} → {decrypted_path} ({written} bytes)")
    return written
