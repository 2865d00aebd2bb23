# =============================================================================
# Import Service
# =============================================================================
# Runs a batch import end to end:
#
#   1. Parse the text (pure, see parser.py)
#   2. Upsert each valid account into the store
#   3. Reload the account directory
#   4. Show the result as a notification
#
# A store failure on one line is reported like a parse failure for that line
# and the batch continues. Diagnostics stay in input line order.
# =============================================================================

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from flaremail.importer.files import pick_text_file, read_import_file
from flaremail.importer.parser import DEFAULT_SEPARATOR, ImportOutcome, parse_batch

if TYPE_CHECKING:
    from flaremail.accounts.manager import AccountManager
    from flaremail.notify.scheduler import NotificationScheduler


logger = logging.getLogger(__name__)


class ImportService:
    """
    Bulk account import.

    Usage:
        >>> service = ImportService(manager, notifier, separator="----")
        >>> outcome = await service.import_text(pasted_text)
        >>> outcome = await service.import_file("accounts.txt")
        >>> outcome = await service.import_dropped(["a.png", "accounts.txt"])

    Attributes:
        manager: Account manager (gives access to the store and directory).
        notifier: Toast scheduler for the result message, optional.
        separator: Default field separator.
    """

    def __init__(
        self,
        manager: "AccountManager",
        notifier: "NotificationScheduler | None" = None,
        separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        self.manager = manager
        self.notifier = notifier
        self.separator = separator

    async def import_text(self, raw_text: str, separator: str | None = None) -> ImportOutcome:
        """
        Import accounts from pasted or file-read text.

        Args:
            raw_text: One account per line.
            separator: Overrides the default separator for this batch.

        Returns:
            Counts and per-line diagnostics for the whole batch.
        """
        parsed = parse_batch(raw_text, separator or self.separator)

        # (line number, diagnostic) so store failures slot in among parse failures
        failures: list[tuple[int, str]] = [
            (e.line_number, e.diagnostic) for e in parsed.errors
        ]
        success_count = 0

        for line in parsed.lines:
            try:
                await self.manager.repo.add_or_update_account(line.account)
            except Exception as e:
                logger.error(f"Import of {line.account.address} failed: {e}")
                failures.append((line.line_number, f"{line.line_number}: {e}"))
                continue
            logger.debug(f"Imported or updated account: {line.account.address}")
            success_count += 1

        failures.sort(key=lambda item: item[0])
        outcome = ImportOutcome(
            success_count=success_count,
            failed_count=len(failures),
            failures=[diagnostic for _, diagnostic in failures],
        )
        logger.info(
            f"Import finished: {outcome.success_count} succeeded, "
            f"{outcome.failed_count} failed"
        )

        await self.manager.refresh()

        if self.notifier is not None:
            self.notifier.show(outcome.summary())

        return outcome

    async def import_file(self, path: str | Path, separator: str | None = None) -> ImportOutcome:
        """
        Import from a .txt file.

        Raises:
            FileAccessError: If the file is not a .txt file or can't be read.
        """
        raw_text = read_import_file(path)
        return await self.import_text(raw_text, separator)

    async def import_dropped(
        self,
        paths: Iterable[str | Path],
        separator: str | None = None,
    ) -> ImportOutcome:
        """
        Import from the first .txt file of a drag-and-drop path list.

        Raises:
            FileAccessError: If no .txt file was dropped or it can't be read.
        """
        return await self.import_file(pick_text_file(paths), separator)
