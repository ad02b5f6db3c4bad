"""Utility script to create or update the DefaultAttachments table."""

from __future__ import annotations

import argparse
import logging

from app.config import get_settings
from app.infrastructure.default_attachments_table import run_provisioning


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for table provisioning."""

    parser = argparse.ArgumentParser(
        description="Create the DefaultAttachments table and add any missing columns.",
    )
    parser.add_argument(
        "--tenants",
        action="store_true",
        help="Provision every database listed in the master Tenants table instead of the master database.",
    )
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Do not insert the default rows into empty tables.",
    )
    return parser.parse_args()


def main() -> None:
    """Provision the configured databases and report the outcome of each one."""

    args = parse_args()
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    results = run_provisioning(
        for_master=not args.tenants,
        enable_seeding=False if args.no_seed else None,
    )
    if not results:
        raise SystemExit("No database was provisioned. Check DATABASE_URL and the Tenants table.")

    failures = 0
    for result in results:
        if result.succeeded:
            print(
                f"OK     {result.database}\n"
                f"  Table created: {'yes' if result.table_created else 'no'}\n"
                f"  Columns added: {', '.join(result.added_columns) or '-'}\n"
                f"  Rows seeded: {result.seeded_rows}"
            )
        else:
            failures += 1
            print(f"FAILED {result.database}\n  Error: {result.error}")

    if failures:
        raise SystemExit(f"{failures} database(s) could not be provisioned.")


if __name__ == "__main__":
    main()
