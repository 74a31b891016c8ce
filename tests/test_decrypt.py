"""
File Decryption Tests

Tests decrypt_file against real files in a temporary directory.
"""

import pytest

from tamboon.cipher.rot128 import rotate
from tamboon.extract.decrypt import decrypt_file

PLAINTEXT = (
    b"Name,AmountSubunits,CCNumber,CVV,ExpMonth,ExpYear\n"
    b"Mr. Grossman R Oldbuck,2879410,5375543637862918,488,11,2021\n"
    b"Mrs. Nellie Z Underhill,3091164,4929700236386185,172,1,2021\n"
)


def test_decrypt_file_writes_plaintext(tmp_path):
    encrypted = tmp_path / "fng.csv.rot128"
    encrypted.write_bytes(rotate(PLAINTEXT))
    decrypted = tmp_path / "out" / "fng.csv"

    written = decrypt_file(encrypted, decrypted)

    assert written == len(PLAINTEXT)
    assert decrypted.read_bytes() == PLAINTEXT


def test_decrypt_file_small_chunks(tmp_path):
    encrypted = tmp_path / "in.rot128"
    encrypted.write_bytes(rotate(PLAINTEXT))
    decrypted = tmp_path / "out.csv"

    decrypt_file(encrypted, decrypted, chunk_size=7)

    assert decrypted.read_bytes() == PLAINTEXT


def test_decrypt_file_custom_offset(tmp_path):
    encrypted = tmp_path / "in.rot3"
    encrypted.write_bytes(rotate(PLAINTEXT, 3))
    decrypted = tmp_path / "out.csv"

    decrypt_file(encrypted, decrypted, offset=253)

    assert decrypted.read_bytes() == PLAINTEXT


def test_decrypt_empty_file(tmp_path):
    encrypted = tmp_path / "empty.rot128"
    encrypted.write_bytes(b"")
    decrypted = tmp_path / "empty.csv"

    assert decrypt_file(encrypted, decrypted) == 0
    assert decrypted.exists()
    assert decrypted.read_bytes() == b""


def test_missing_input_does_not_create_output(tmp_path):
    decrypted = tmp_path / "never.csv"

    with pytest.raises(FileNotFoundError):
        decrypt_file(tmp_path / "missing.rot128", decrypted)

    assert not decrypted.exists()


def test_same_input_and_output_path_rejected(tmp_path):
    encrypted = tmp_path / "fng.csv.rot128"
    encrypted.write_bytes(rotate(PLAINTEXT))

    with pytest.raises(ValueError):
        decrypt_file(encrypted, encrypted)

    assert encrypted.read_bytes() == rotate(PLAINTEXT), "Input must be left intact"


def test_output_aliasing_input_rejected(tmp_path):
    encrypted = tmp_path / "fng.csv.rot128"
    encrypted.write_bytes(rotate(PLAINTEXT))
    alias = tmp_path / "sub" / ".." / "fng.csv.rot128"
    (tmp_path / "sub").mkdir()

    with pytest.raises(ValueError):
        decrypt_file(encrypted, alias)

    assert encrypted.read_bytes() == rotate(PLAINTEXT)
