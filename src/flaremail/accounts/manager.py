# =============================================================================
# Account Manager
# =============================================================================
# Mutations of the account store, each followed by a full reload of the
# directory snapshot (no incremental patching).
#
# Bulk delete is a client-side loop over single deletes. One failure is
# recorded and the loop moves on; it never aborts the remaining deletions.
# =============================================================================

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from flaremail.accounts.directory import AccountDirectory
from flaremail.core import AccountRecord, NotFoundError

if TYPE_CHECKING:
    from flaremail.storage.repository import Repository


logger = logging.getLogger(__name__)


@dataclass
class BulkDeleteResult:
    """
    Result of deleting the selected accounts.

    Attributes:
        deleted: Ids that were removed, in the order they were attempted.
        failed: Id -> error message for deletions that failed.
    """
    deleted: list[int] = field(default_factory=list)
    failed: dict[int, str] = field(default_factory=dict)

    @property
    def success_count(self) -> int:
        return len(self.deleted)

    @property
    def failed_count(self) -> int:
        return len(self.failed)


class AccountManager:
    """
    Owns the account directory and keeps it in step with the store.

    Usage:
        >>> manager = AccountManager(repo, AccountDirectory())
        >>> await manager.refresh()
        >>> await manager.delete(42)
        >>> result = await manager.delete_selected()
    """

    def __init__(self, repo: "Repository", directory: AccountDirectory) -> None:
        self.repo = repo
        self.directory = directory

    async def refresh(self) -> list[AccountRecord]:
        """Reload every account from the store into the directory."""
        accounts = await self.repo.list_accounts()
        self.directory.load(accounts)
        logger.debug(f"Directory refreshed: {len(accounts)} accounts")
        return accounts

    async def add(self, account: AccountRecord) -> AccountRecord:
        """
        Add (or overwrite by address) a single account.

        Raises:
            ValueError: If the account is missing a field or has no '@'.
        """
        if not account.is_valid:
            raise ValueError(f"Invalid account: {account.address!r}")

        saved = await self.repo.add_or_update_account(account)
        logger.info(f"Saved account: {saved.address}")
        await self.refresh()
        return saved

    async def delete(self, account_id: int) -> None:
        """
        Delete one account.

        Raises:
            NotFoundError: If the store doesn't know the id.
        """
        try:
            await self.repo.delete_account(account_id)
        except NotFoundError:
            logger.warning(f"Delete skipped, account {account_id} not found")
            raise

        logger.info(f"Deleted account {account_id}")
        self.directory.selection.discard(account_id)
        await self.refresh()

    async def delete_selected(self) -> BulkDeleteResult:
        """
        Delete every selected account, one at a time.

        The selection is cleared and the directory reloaded afterwards,
        whatever the individual outcomes.
        """
        result = BulkDeleteResult()
        ids = list(self.directory.selection)

        for account_id in ids:
            try:
                await self.repo.delete_account(account_id)
            except NotFoundError as e:
                logger.warning(f"Bulk delete: {e}")
                result.failed[account_id] = str(e)
                continue
            except Exception as e:
                logger.error(f"Bulk delete of account {account_id} failed: {e}", exc_info=True)
                result.failed[account_id] = str(e)
                continue
            result.deleted.append(account_id)

        logger.info(
            f"Bulk delete: {result.success_count} deleted, {result.failed_count} failed"
        )
        self.directory.selection.clear()
        await self.refresh()
        return result
