"""
Donation CSV Reader Tests
"""

import logging

import pytest

from tamboon.extract.csv_reader import read_donations, read_donations_frame
from tamboon.transformation.schemas import DONATIONS_SCHEMA

HEADER = "Name,AmountSubunits,CCNumber,CVV,ExpMonth,ExpYear\n"


def write_csv(tmp_path, body: str, header: str = HEADER):
    path = tmp_path / "donations.csv"
    path.write_text(header + body, encoding="utf-8")
    return path


def test_reads_rows_with_schema(tmp_path):
    path = write_csv(
        tmp_path,
        "Mr. Grossman R Oldbuck,2879410,5375543637862918,488,11,2021\n"
        "Mrs. Nellie Z Underhill,3091164,4929700236386185,172,1,2021\n",
    )

    df = read_donations_frame(path)

    assert df.schema == DONATIONS_SCHEMA
    assert df.height == 2
    assert df.row(0) == (
        "Mr. Grossman R Oldbuck",
        2879410,
        "5375543637862918",
        "488",
        11,
        2021,
    )


def test_header_row_is_skipped_whatever_it_says(tmp_path):
    path = write_csv(tmp_path, "Alice,100,4242424242424242,123,1,2030\n", header="a,b,c,d,e,f\n")

    donations = read_donations(path)

    assert [d.name for d in donations] == ["Alice"]


def test_unparsable_numbers_become_zero(tmp_path):
    path = write_csv(tmp_path, "Bob,abc,4242424242424242,007,xx,\n")

    (donation,) = read_donations(path)

    assert donation.amount_subunits == 0
    assert donation.expiration_month == 0
    assert donation.expiration_year == 0
    assert donation.cvv == "007", "CVV must keep leading zeros"


def test_quoted_names_with_commas(tmp_path):
    path = write_csv(tmp_path, '"Smith, John",500,4242424242424242,123,12,2030\n')

    (donation,) = read_donations(path)

    assert donation.name == "Smith, John"
    assert donation.amount_subunits == 500


def test_header_only_file(tmp_path):
    path = write_csv(tmp_path, "")

    df = read_donations_frame(path)

    assert df.height == 0
    assert df.schema == DONATIONS_SCHEMA


def test_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_bytes(b"")

    assert read_donations(path) == []


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_donations_frame(tmp_path / "nope.csv")


def test_short_rows_warn_about_missing_card_fields(tmp_path, caplog):
    path = write_csv(tmp_path, "Alice,100\n")

    with caplog.at_level(logging.WARNING, logger="tamboon.extract.csv_reader"):
        (donation,) = read_donations(path)

    assert donation.card_number == ""
    assert any("card_number" in message for message in caplog.messages)


def test_complete_rows_do_not_warn(tmp_path, caplog):
    path = write_csv(tmp_path, "Alice,100,4242424242424242,123,1,2030\n")

    with caplog.at_level(logging.WARNING, logger="tamboon.extract.csv_reader"):
        read_donations(path)

    assert caplog.messages == []
