"""Compare identity provider accounts with local users and centers."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.firebase import FirebaseIdentityProvider, IdentityAccount
from app.services.center_service import CenterService
from app.services.user_service import UserService

logger = get_logger(__name__)

# A sign-up may still be between account creation and the local write
ORPHAN_GRACE_PERIOD = timedelta(minutes=10)


@dataclass
class ReconciliationReport:
    """Differences between the provider and the database."""

    # Provider accounts with neither a user nor a center row
    orphaned_accounts: list[IdentityAccount] = field(default_factory=list)
    # Unlinked accounts too new to call orphaned; never deleted
    recent_accounts: list[IdentityAccount] = field(default_factory=list)
    # Local firebase_uid / uid values the provider no longer knows
    missing_user_uids: set[str] = field(default_factory=set)
    missing_center_uids: set[str] = field(default_factory=set)

    @property
    def is_consistent(self) -> bool:
        return not (self.orphaned_accounts or self.missing_user_uids or self.missing_center_uids)


def compare_accounts(
    accounts: Iterable[IdentityAccount],
    user_uids: set[str],
    center_uids: set[str],
    now: datetime | None = None,
    grace_period: timedelta = ORPHAN_GRACE_PERIOD,
) -> ReconciliationReport:
    """
    Build a report from provider accounts and the locally linked ids.

    Unlinked accounts created less than ``grace_period`` before ``now`` are
    reported as recent instead of orphaned. Accounts without a creation time
    are treated as old.
    """
    report = ReconciliationReport()
    provider_uids: set[str] = set()
    cutoff = (now or datetime.now(timezone.utc)) - grace_period

    for account in accounts:
        provider_uids.add(account.uid)
        if account.uid in user_uids or account.uid in center_uids:
            continue
        if account.created_at is not None and account.created_at > cutoff:
            report.recent_accounts.append(account)
        else:
            report.orphaned_accounts.append(account)

    report.missing_user_uids = user_uids - provider_uids
    report.missing_center_uids = center_uids - provider_uids
    return report


class ReconciliationService:
    """Finds, and optionally removes, accounts left behind by failed sign-ups."""

    def __init__(self, db: AsyncSession, identity_provider: FirebaseIdentityProvider):
        self.db = db
        self.identity_provider = identity_provider

    async def build_report(self) -> ReconciliationReport:
        user_uids = await UserService().list_firebase_uids(self.db)
        center_uids = await CenterService().list_uids(self.db)
        report = compare_accounts(self.identity_provider.iter_accounts(), user_uids, center_uids)

        logger.info(
            "reconciliation_report",
            orphaned_accounts=len(report.orphaned_accounts),
            recent_accounts=len(report.recent_accounts),
            missing_user_uids=len(report.missing_user_uids),
            missing_center_uids=len(report.missing_center_uids),
        )
        return report

    async def delete_orphaned_accounts(self, report: ReconciliationReport) -> int:
        """Delete orphaned provider accounts. Returns how many were removed."""
        deleted = 0
        for account in report.orphaned_accounts:
            try:
                await self.identity_provider.delete_account(account.uid)
                deleted += 1
            except Exception as e:
                logger.warning("orphan_delete_failed", uid=account.uid, error=str(e))
        return deleted
