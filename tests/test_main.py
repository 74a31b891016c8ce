"""
CLI Tests
"""

import logging

import pytest

from tamboon import main as cli
from tamboon.cipher.rot128 import rotate

CSV_TEXT = (
    "Name,AmountSubunits,CCNumber,CVV,ExpMonth,ExpYear\n"
    "Alice,10000,4242424242424242,123,12,2030\n"
    "Bob,20050,4111111111111111,456,1,2031\n"
)


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TAMBOON_ROTATION_OFFSET", raising=False)
    monkeypatch.delenv("TAMBOON_ENCRYPTED_FILE", raising=False)
    monkeypatch.delenv("TAMBOON_CURRENCY", raising=False)
    monkeypatch.setattr(cli, "setup_logging", lambda level=logging.INFO: None)

    directory = tmp_path / "data"
    directory.mkdir()
    (directory / "fng.1000.csv.rot128").write_bytes(rotate(CSV_TEXT.encode("utf-8")))
    return directory


def test_decrypt_command(data_dir, capsys):
    exit_code = cli.main(["decrypt", "plain.csv", "--data-dir", str(data_dir)])

    assert exit_code == 0
    assert (data_dir / "plain.csv").read_text(encoding="utf-8") == CSV_TEXT
    assert "Decryption complete" in capsys.readouterr().out


def test_run_command_dry_run_prints_summary(data_dir, capsys):
    exit_code = cli.main(["run", "plain.csv", "--data-dir", str(data_dir), "--dry-run"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "total received: THB  300.50" in out
    assert "top donors:\nBob\nAlice" in out


def test_missing_input_exits_with_error(data_dir):
    exit_code = cli.main(
        ["decrypt", "plain.csv", "--data-dir", str(data_dir), "--input", "missing.rot128"]
    )

    assert exit_code == 1
    assert not (data_dir / "plain.csv").exists()


def test_unknown_command_rejected():
    with pytest.raises(SystemExit):
        cli.main(["encrypt", "plain.csv"])


def test_output_named_like_input_exits_with_error(data_dir):
    encrypted = data_dir / "fng.1000.csv.rot128"
    original = encrypted.read_bytes()

    exit_code = cli.main(["decrypt", "fng.1000.csv.rot128", "--data-dir", str(data_dir)])

    assert exit_code == 1
    assert encrypted.read_bytes() == original, "Encrypted input must not be truncated"
