"""
Pipeline Orchestrator - Donation Run

One run of the donation workflow:
1. Decrypt the Rot128 donations file to disk
2. Read the decoded CSV into donation records
3. Tokenise and charge each donation (failures are counted, not fatal)
4. Summarize the results

Dry-run mode skips the gateway entirely and records every donation as
successful.
"""

import logging
from pathlib import Path
from typing import List, Optional

import requests

from tamboon.coreutils.config import Settings
from tamboon.extract.csv_reader import read_donations
from tamboon.extract.decrypt import decrypt_file
from tamboon.load.omise_client import OmiseClient, OmiseError
from tamboon.transformation.schemas import ChargeResult, Donation
from tamboon.transformation.summary import DonationSummary, summarize

logger = logging.getLogger(__name__)


class DonationPipeline:
    """Orchestrates decryption, charging and summary for one donations file"""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[OmiseClient] = None,
        dry_run: bool = False,
    ):
        """
        Initialize the donation pipeline

        Args:
            settings: Runtime settings (read from the environment if not provided)
            client: Gateway client (built from settings if not provided)
            dry_run: If true, never contact the payment gateway
        """
        self.settings = settings or Settings.from_env()
        self.dry_run = dry_run

        # Initialize gateway client only if not in dry run mode
        if self.dry_run:
            self.client = None
            logger.info("🔍 DRY RUN MODE: Omise client not initialized")
        else:
            self.client = client or OmiseClient(
                public_key=self.settings.omise_public_key,
                secret_key=self.settings.omise_secret_key,
                request_delay=self.settings.request_delay,
            )

    def decrypt(self) -> Path:
        """Decode the encrypted donations file and return the decoded path"""
        decrypted_path = self.settings.decrypted_path
        decrypt_file(
            self.settings.encrypted_path,
            decrypted_path,
            offset=self.settings.rotation_offset,
        )
        return decrypted_path

    def load_donations(self, path: Optional[Path] = None) -> List[Donation]:
        return read_donations(path or self.settings.decrypted_path)

    def charge(self, donation: Donation) -> ChargeResult:
        """Charge one donation; gateway and transport errors become a failed result"""
        if self.dry_run:
            logger.debug(f"🔍 DRY RUN: Skipping charge for {donation.name}")
            return ChargeResult(donation=donation, success=True)

        try:
            charge = self.client.charge_donation(donation, self.settings.currency)
        except (OmiseError, requests.RequestException) as e:
            logger.error(f"❌ Failed to create charge for {donation.name}: {e}")
            return ChargeResult(donation=donation, success=False, error=str(e))

        return ChargeResult(donation=donation, success=True, charge_id=charge.get("id"))

    def charge_all(self, donations: List[Donation]) -> List[ChargeResult]:
        logger.info(f"Performing {len(donations)} donations")
        results = []
        for i, donation in enumerate(donations, 1):
            logger.debug(f"Charging donation {i}/{len(donations)}: {donation}")
            results.append(self.charge(donation))
        return results

    def run(self) -> DonationSummary:
        """
        Run the complete workflow

        Returns:
            DonationSummary: Totals for the run
        """
        logger.info("🚀 Starting donation pipeline")
        logger.info("=" * 50)

        try:
            # Step 1: Decrypt
            logger.info("🔄 Step 1: Decrypting donations file...")
            decrypted_path = self.decrypt()

            # Step 2: Read donations
            logger.info("🔄 Step 2: Reading donations...")
            donations = self.load_donations(decrypted_path)

            # Step 3: Charge
            logger.info("🔄 Step 3: Charging donations...")
            results = self.charge_all(donations)

            # Step 4: Summarize
            logger.info("🔄 Step 4: Summarizing...")
            summary = summarize(results)

        except Exception as e:
            logger.error(f"❌ Donation pipeline failed: {e}")
            raise

        logger.info("✅ Donation pipeline completed")
        return summary


def run_full_pipeline(
    settings: Optional[Settings] = None, dry_run: bool = False
) -> DonationSummary:
    """
    Run the donation pipeline end to end

    Args:
        settings: Runtime settings (environment if not provided)
        dry_run: If True, don't call the payment gateway

    Returns:
        DonationSummary: Totals for the run
    """
    return DonationPipeline(settings=settings, dry_run=dry_run).run()
