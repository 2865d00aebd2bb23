# =============================================================================
# Mail Sync Backend
# =============================================================================
# The seam between FlareMail and whatever actually talks to the mail
# provider. A backend is asked to "check" one account's folder: fetch new
# messages from the server and write them into the store as MailRecords.
#
# FlareMail treats a check as best-effort. A backend reports failure by
# raising (preferably TransientSyncError) or by returning a CheckResult with
# success=False; mailbox sessions log it and carry on with whatever is
# already cached. Returning nothing counts as success.
# =============================================================================

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from flaremail.core import FolderTag, TransientSyncError

if TYPE_CHECKING:
    from flaremail.storage.repository import Repository


logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """
    Result of checking one account's mailbox.

    Attributes:
        account_id: The account that was checked.
        success: Whether the check completed.
        fetched: Messages downloaded from the server.
        saved: Messages that were new and written to the store.
        message: Human-readable status or error text.
    """
    account_id: int
    success: bool = True
    fetched: int = 0
    saved: int = 0
    message: str = ""


@dataclass
class BatchCheckResult:
    """Aggregate of checking many accounts, one CheckResult per account."""
    success_count: int = 0
    failed_count: int = 0
    results: list[CheckResult] = field(default_factory=list)


class MailSyncBackend(ABC):
    """
    Interface every remote sync backend implements.

    Usage:
        >>> result = await backend.check_mailbox(account_id=1, folder=FolderTag.JUNK)
    """

    @abstractmethod
    async def check_mailbox(self, account_id: int, folder: FolderTag) -> CheckResult | None:
        """
        Fetch new mail for one account's folder into the store.

        Returns:
            A CheckResult (success=False reports a failure), or None.

        Raises:
            TransientSyncError: If the remote check failed.
        """


class OfflineSyncBackend(MailSyncBackend):
    """
    Backend used when no remote backend is configured.

    Every check succeeds without fetching anything, so sessions simply show
    the cached records.
    """

    async def check_mailbox(self, account_id: int, folder: FolderTag) -> CheckResult:
        logger.debug(f"Offline: skipping remote check of account {account_id} {folder.value}")
        return CheckResult(
            account_id=account_id,
            message="No remote backend configured",
        )


def check_failure(result: object) -> Exception | None:
    """
    The failure a completed check reported, if any.

    Backends may return a CheckResult or nothing at all. Only a CheckResult
    with success=False counts as a failure.
    """
    if isinstance(result, CheckResult) and not result.success:
        return TransientSyncError(result.message or "Mailbox check failed")
    return None


async def batch_check(
    backend: MailSyncBackend,
    account_ids: Iterable[int],
    folder: FolderTag,
    store: "Repository | None" = None,
) -> BatchCheckResult:
    """
    Check many accounts one after another.

    A failing account (raised, or reported with success=False) is recorded
    as an unsuccessful CheckResult; the remaining accounts are still checked.

    Args:
        backend: Remote sync backend.
        account_ids: Accounts to check, in order.
        folder: Folder to check on every account.
        store: When given, successful checks stamp the account's
               last check time.
    """
    batch = BatchCheckResult()

    for account_id in account_ids:
        try:
            result = await backend.check_mailbox(account_id, folder)
        except Exception as e:
            failure = e
            result = None
        else:
            failure = check_failure(result)

        if failure is not None:
            logger.warning(f"Mailbox check failed for account {account_id}: {failure}")
            batch.failed_count += 1
            batch.results.append(CheckResult(
                account_id=account_id,
                success=False,
                message=f"Check failed: {failure}",
            ))
            continue

        if not isinstance(result, CheckResult):
            result = CheckResult(account_id=account_id)
        if store is not None:
            try:
                await store.touch_last_check(account_id)
            except Exception as e:
                logger.warning(f"Could not record check time of account {account_id}: {e}")

        batch.success_count += 1
        batch.results.append(result)

    logger.info(
        f"Batch check of {folder.value}: {batch.success_count} succeeded, "
        f"{batch.failed_count} failed"
    )
    return batch
