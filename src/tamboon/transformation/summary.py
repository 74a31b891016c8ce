"""
Donation Summary - Transform Layer

Pure functions that aggregate charge results into the run summary and
render it as the plain-text report printed at the end of a run.
"""

import logging
from dataclasses import dataclass, field
from typing import List

import polars as pl

from .schemas import CHARGE_RESULTS_SCHEMA, ChargeResult

logger = logging.getLogger(__name__)

TOP_DONORS = 3


@dataclass
class DonationSummary:
    """Totals in minor currency units"""

    total_received: int = 0
    successfully_donated: int = 0
    faulty_donation: int = 0
    donor_count: int = 0
    top_donors: List[str] = field(default_factory=list)

    @property
    def average_per_person(self) -> float:
        """Average successful donation in minor units (0 when nobody donated)"""
        if self.donor_count == 0:
            return 0.0
        return self.successfully_donated / self.donor_count


def results_to_frame(results: List[ChargeResult]) -> pl.DataFrame:
    """Flatten charge results into a CHARGE_RESULTS_SCHEMA frame"""
    return pl.DataFrame(
        {
            "name": [r.donation.name for r in results],
            "amount_subunits": [r.donation.amount_subunits for r in results],
            "success": [r.success for r in results],
        },
        schema=CHARGE_RESULTS_SCHEMA,
    )


def summarize(results: List[ChargeResult], top_n: int = TOP_DONORS) -> DonationSummary:
    """
    Aggregate charge results

    Args:
        results: One ChargeResult per donation, in file order
        top_n: Number of top donors to keep

    Returns:
        DonationSummary: Totals, donor count and top donors by amount
    """
    df = results_to_frame(results)
    succeeded = df.filter(pl.col("success"))
    failed = df.filter(~pl.col("success"))

    # Stable sort keeps file order between equal amounts
    top_donors = (
        succeeded.sort("amount_subunits", descending=True, maintain_order=True)
        .head(top_n)
        .get_column("name")
        .to_list()
    )

    summary = DonationSummary(
        total_received=int(df.get_column("amount_subunits").sum()),
        successfully_donated=int(succeeded.get_column("amount_subunits").sum()),
        faulty_donation=int(failed.get_column("amount_subunits").sum()),
        donor_count=succeeded.height,
        top_donors=top_donors,
    )

    logger.info(
        f"Summarized {df.height} donations: {succeeded.height} succeeded, {failed.height} failed"
    )
    return summary


def format_amount(subunits: float) -> str:
    return f"{subunits / 100:.2f}"


def format_summary(summary: DonationSummary, currency: str = "thb") -> str:
    """Render the summary report"""
    unit = currency.upper()
    lines = [
        f"total received: {unit}  {format_amount(summary.total_received)}",
        f"successfully donated: {unit}  {format_amount(summary.successfully_donated)}",
        f"faulty donation: {unit}   {format_amount(summary.faulty_donation)}",
    ]

    if summary.donor_count > 0:
        lines.append(
            f"average per person: {unit}      {format_amount(summary.average_per_person)}"
        )
        lines.append("top donors:")
        lines.extend(summary.top_donors)

    return "\n".join(lines)
