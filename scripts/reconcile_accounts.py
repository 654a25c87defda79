#!/usr/bin/env python3
"""
Report Firebase accounts and database records that no longer match.

Sign-up creates the Firebase account before the database row, and center
rejection deletes the account on a best-effort basis, so the two can drift.

Usage:
    python scripts/reconcile_accounts.py            # report only
    python scripts/reconcile_accounts.py --apply    # also delete orphaned accounts
"""

import argparse
import asyncio
import sys

import dotenv

dotenv.load_dotenv()

from app.config import settings  # noqa: E402
from app.database import AsyncSessionLocal, engine  # noqa: E402
from app.core.firebase import FirebaseIdentityProvider  # noqa: E402
from app.services.reconciliation_service import ReconciliationService  # noqa: E402


async def main(apply: bool) -> int:
    identity_provider = FirebaseIdentityProvider.from_settings(settings)
    identity_provider.initialize()

    try:
        async with AsyncSessionLocal() as db:
            service = ReconciliationService(db, identity_provider)
            report = await service.build_report()

            print(f"Environment: {settings.environment}")
            print(f"Orphaned Firebase accounts: {len(report.orphaned_accounts)}")
            for account in report.orphaned_accounts:
                print(f"  - {account.uid} <{account.email}>")
            if report.recent_accounts:
                print(
                    f"Skipped {len(report.recent_accounts)} unlinked account(s) created in the "
                    "last few minutes; a sign-up may still be in progress"
                )
            print(f"Users without a Firebase account: {len(report.missing_user_uids)}")
            for uid in sorted(report.missing_user_uids):
                print(f"  - {uid}")
            print(f"Centers without a Firebase account: {len(report.missing_center_uids)}")
            for uid in sorted(report.missing_center_uids):
                print(f"  - {uid}")

            if apply and report.orphaned_accounts:
                deleted = await service.delete_orphaned_accounts(report)
                print(f"Deleted {deleted} orphaned account(s)")
    finally:
        await engine.dispose()

    return 0 if report.is_consistent or apply else 2


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--apply", action="store_true", help="Delete orphaned Firebase accounts")
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.apply)))
