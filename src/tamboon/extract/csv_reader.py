"""
Donation CSV Reader - Extract Layer

Reads the decoded donations CSV into a Polars DataFrame and pydantic
records. The first row is a header and is always skipped; columns are
matched by position. Numeric fields that do not parse are read as 0.
"""

import logging
from pathlib import Path
from typing import List, Union

import polars as pl

from tamboon.transformation.schemas import DONATIONS_SCHEMA, Donation

logger = logging.getLogger(__name__)

INTEGER_COLUMNS = ["amount_subunits", "expiration_month", "expiration_year"]
STRING_COLUMNS = ["name", "card_number", "cvv"]
CARD_COLUMNS = ["card_number", "cvv", "expiration_month", "expiration_year"]


def read_donations_frame(path: Union[str, Path]) -> pl.DataFrame:
    """
    Read the decoded donations CSV

    Args:
        path: Path to the decoded CSV file

    Returns:
        pl.DataFrame: Donations with DONATIONS_SCHEMA
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Donations file not found: {path}")

    if path.stat().st_size == 0:
        logger.warning(f"Donations file is empty: {path}")
        return pl.DataFrame(schema=DONATIONS_SCHEMA)

    logger.info(f"Reading donations from {path}")

    try:
        # Everything as strings first; numeric casts are lenient below
        raw_df = pl.read_csv(
            path,
            has_header=True,
            new_columns=list(DONATIONS_SCHEMA.names()),
            infer_schema_length=0,
        )
    except pl.exceptions.PolarsError as e:
        logger.error(f"❌ Failed to parse donations CSV {path}: {e}")
        raise

    # Short rows come back with nulls in the trailing columns
    for column in CARD_COLUMNS:
        null_count = raw_df.select(pl.col(column).is_null().sum()).item()
        if null_count > 0:
            logger.warning(
                f"Column '{column}' is empty in {null_count} rows of {path}; "
                "those donations will be rejected by the gateway"
            )

    df = raw_df.select(
        [pl.col(column).fill_null("") for column in STRING_COLUMNS]
        + [
            pl.col(column).str.strip_chars().cast(pl.Int64, strict=False).fill_null(0)
            for column in INTEGER_COLUMNS
        ]
    ).select(DONATIONS_SCHEMA.names())

    logger.info(f"Read {df.height} donations from {path}")
    return df


def read_donations(path: Union[str, Path]) -> List[Donation]:
    """Read the decoded donations CSV as Donation records"""
    df = read_donations_frame(path)
    return [Donation(**row) for row in df.iter_rows(named=True)]
