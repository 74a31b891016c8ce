"""
Main Entry Point

Decrypt a Rot128 donations file, or run the full donation pipeline and
print the summary.
"""

import argparse
import logging
import sys
from typing import List, Optional

from tamboon.coreutils.config import Settings
from tamboon.coreutils.logging import setup_logging
from tamboon.extract.decrypt import decrypt_file
from tamboon.orchestration.pipeline import DonationPipeline
from tamboon.transformation.summary import format_summary

logger = logging.getLogger("tamboon")


def run_decrypt(settings: Settings) -> int:
    """Decode the encrypted file only; returns bytes written"""
    logger.info(f"🔐 Decrypting {settings.encrypted_path} (offset={settings.rotation_offset})")
    return decrypt_file(
        settings.encrypted_path,
        settings.decrypted_path,
        offset=settings.rotation_offset,
    )


def run_pipeline(settings: Settings, dry_run: bool = False) -> str:
    """Run the donation pipeline and return the rendered summary"""
    logger.info(f"🚀 Running donation pipeline (dry_run={dry_run})")

    if dry_run:
        logger.info("🔍 DRY RUN MODE - No charges will be created")

    summary = DonationPipeline(settings=settings, dry_run=dry_run).run()
    return format_summary(summary, settings.currency)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tamboon donation pipeline")
    parser.add_argument("command", choices=["decrypt", "run"], help="Command to run")
    parser.add_argument(
        "output",
        help="Name of the decoded CSV, written inside the data directory",
    )
    parser.add_argument("--data-dir", help="Directory holding input and output files")
    parser.add_argument("--input", dest="encrypted_file", help="Encrypted file name")
    parser.add_argument("--offset", type=int, help="Rotation offset (default 128)")
    parser.add_argument("--currency", help="Charge currency (default thb)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run in dry-run mode (no charges)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        settings = Settings.from_env(
            data_dir=args.data_dir,
            encrypted_file=args.encrypted_file,
            decrypted_file=args.output,
            rotation_offset=args.offset,
            currency=args.currency,
        )

        if args.command == "decrypt":
            written = run_decrypt(settings)
            print(f"✅ Decryption complete: {settings.decrypted_path} ({written} bytes)")

        elif args.command == "run":
            print(run_pipeline(settings, args.dry_run))

    except Exception as e:
        logger.error(f"❌ {args.command} failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
