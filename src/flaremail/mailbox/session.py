# =============================================================================
# Mailbox Session Controller
# =============================================================================
# Drives one "open mailbox" view:
#
#     CLOSED -> OPENING -> SYNCING -> READY
#                  \___________\______> CLOSED (close() from any state)
#
#   1. open(): record the account + folder, clear records, loading = True.
#      Listeners see this before any I/O starts.
#   2. Ask the backend to check the mailbox. Best-effort: a failure (raised,
#      or a CheckResult with success=False) is logged and optionally
#      reported, but the session carries on. A successful check stamps the
#      account's last check time.
#   3. Load every cached record for the account from the store and keep
#      the ones whose folder classifies as the requested FolderTag.
#      A load failure gives an empty list, never an exception.
#   4. READY, loading = False.
#
# Only one session exists at a time. Opening again implicitly closes the
# current one, and the latest open() always wins: every await is followed by
# an identity check against the active session, and results belonging to a
# session that has since been replaced or closed are dropped.
# =============================================================================

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable

from flaremail.core import AccountRecord, FolderClassifier, FolderTag, MailRecord
from flaremail.mailbox.backend import check_failure

if TYPE_CHECKING:
    from flaremail.core import AttachmentInfo
    from flaremail.mailbox.backend import MailSyncBackend
    from flaremail.storage.repository import Repository


logger = logging.getLogger(__name__)


class SessionPhase(Enum):
    """Where the mailbox view is in its lifecycle."""
    CLOSED = auto()     # No mailbox open
    OPENING = auto()    # Opened, nothing requested yet
    SYNCING = auto()    # Waiting on the remote check / cache load
    READY = auto()      # Records loaded (possibly empty)


@dataclass
class SessionState:
    """
    The state of the open mailbox view.

    Attributes:
        account: The account whose mailbox is open.
        folder: The requested folder.
        phase: Lifecycle phase (never CLOSED while the state is live).
        loading: True until the load step has finished.
        records: Cached records of the requested folder, newest first.
        sync_error: Message of the failed remote check, when reported.
        load_failed: True if the store could not be read (records is empty).
        detail: The single message currently viewed, if any.
    """
    account: AccountRecord
    folder: FolderTag
    phase: SessionPhase = SessionPhase.OPENING
    loading: bool = True
    records: list[MailRecord] = field(default_factory=list)
    sync_error: str | None = None
    load_failed: bool = False
    detail: MailRecord | None = None

    @property
    def account_id(self) -> int:
        return self.account.id

    @property
    def key(self) -> tuple[int, FolderTag]:
        return (self.account.id, self.folder)


# Called whenever the visible session changes; None means closed
SessionListener = Callable[[SessionState | None], None]
# Called when a remote check failed and failures are reported
SyncFailureCallback = Callable[[AccountRecord, FolderTag, Exception], None]


class MailboxSession:
    """
    Controller for the single mailbox view.

    Usage:
        >>> session = MailboxSession(backend, repo)
        >>> session.on_change = render
        >>> state = await session.open(account, FolderTag.INBOX)
        >>> state.records
        >>> session.close()

    Attributes:
        backend: Remote sync backend (check_mailbox).
        store: The mail cache (list_mail_records, touch_last_check,
               list_attachments).
        classifier: Folder classifier used to filter records.
        report_sync_failures: Put the failure on the state and call
                              on_sync_failure, instead of only logging it.
        on_change: Optional listener for state changes.
        on_sync_failure: Optional callback for reported sync failures.
    """

    def __init__(
        self,
        backend: "MailSyncBackend",
        store: "Repository",
        classifier: FolderClassifier | None = None,
        *,
        report_sync_failures: bool = True,
    ) -> None:
        self.backend = backend
        self.store = store
        self.classifier = classifier or FolderClassifier()
        self.report_sync_failures = report_sync_failures
        self.on_change: SessionListener | None = None
        self.on_sync_failure: SyncFailureCallback | None = None

        self._state: SessionState | None = None
        # Bumped by every open() and close(); an in-flight open() only
        # commits while the generation it started with is still current
        self._generation = 0

    @property
    def state(self) -> SessionState | None:
        """The live session, or None when closed."""
        return self._state

    @property
    def phase(self) -> SessionPhase:
        return self._state.phase if self._state else SessionPhase.CLOSED

    @property
    def is_open(self) -> bool:
        return self._state is not None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def open(
        self,
        account: AccountRecord,
        folder: FolderTag | str = FolderTag.INBOX,
    ) -> SessionState | None:
        """
        Open a mailbox: sync (best-effort), then load and classify records.

        Args:
            account: Account to open (must have been saved, i.e. have an id).
            folder: FolderTag or its name ("inbox", "junk").

        Returns:
            The READY state, or None if another open()/close() superseded
            this call before it finished.

        Raises:
            ValueError: If the account has no id or the folder is unknown.
        """
        if account.id is None:
            raise ValueError("Cannot open the mailbox of an unsaved account")
        folder = FolderTag.parse(folder)

        if self._state is not None:
            self.close()

        self._generation += 1
        generation = self._generation
        state = SessionState(account=account, folder=folder)
        self._state = state
        self._emit()
        logger.info(f"Opening {folder.value} of {account.address}")

        # Step 1: remote check (best-effort)
        state.phase = SessionPhase.SYNCING
        self._emit()
        failure: Exception | None = None
        try:
            result = await self.backend.check_mailbox(account.id, folder)
        except Exception as e:
            failure = e
        else:
            failure = check_failure(result)

        if failure is not None:
            logger.warning(f"Mailbox check failed for {account.address}: {failure}")
            if self._is_current(generation, state):
                self._report_sync_failure(state, failure)
        else:
            logger.debug(f"Checked {account.address} {folder.value}")
            await self._record_check(account)

        if not self._is_current(generation, state):
            logger.debug(f"Dropping stale sync result for {account.address}")
            return None

        # Step 2: load cached records, whatever the check did
        try:
            records = await self.store.list_mail_records(account.id)
        except Exception:
            logger.error(f"Failed to load mail for {account.address}", exc_info=True)
            records = None

        if not self._is_current(generation, state):
            logger.debug(f"Dropping stale records for {account.address}")
            return None

        if records is None:
            state.load_failed = True
            state.records = []
        else:
            state.records = [
                r for r in records if self.classifier.classify(r.folder) == folder
            ]
        state.loading = False
        state.phase = SessionPhase.READY
        self._emit()

        logger.info(f"{account.address} {folder.value}: {len(state.records)} messages")
        return state

    def close(self) -> None:
        """Close the mailbox view, discarding its records and detail view."""
        self._generation += 1
        if self._state is None:
            return

        logger.debug(f"Closing mailbox of {self._state.account.address}")
        self._state = None
        self._emit()

    # -------------------------------------------------------------------------
    # Message Detail
    # -------------------------------------------------------------------------

    def view_detail(self, record_id: int) -> MailRecord:
        """
        Show one message of the open mailbox.

        Raises:
            LookupError: If no mailbox is open or the record isn't in it.
        """
        if self._state is None:
            raise LookupError("No mailbox is open")

        for record in self._state.records:
            if record.id == record_id:
                self._state.detail = record
                self._emit()
                return record

        raise LookupError(f"Message {record_id} is not in this mailbox")

    def close_detail(self) -> None:
        if self._state is not None and self._state.detail is not None:
            self._state.detail = None
            self._emit()

    async def detail_attachments(self) -> list["AttachmentInfo"]:
        """
        Attachments of the message in the detail view, newest first.

        Raises:
            LookupError: If no message is being viewed.
        """
        if self._state is None or self._state.detail is None:
            raise LookupError("No message is being viewed")
        return await self.store.list_attachments(self._state.detail.id)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _is_current(self, generation: int, state: SessionState) -> bool:
        """True if the open() that started at this generation still owns the view."""
        return (
            self._generation == generation
            and self._state is state
            and self._state.key == state.key
        )

    async def _record_check(self, account: AccountRecord) -> None:
        """Stamp the account's last check time. Failures are only logged."""
        try:
            account.last_check_time = await self.store.touch_last_check(account.id)
        except Exception:
            logger.warning(f"Could not record check time of {account.address}", exc_info=True)

    def _report_sync_failure(self, state: SessionState, error: Exception) -> None:
        if not self.report_sync_failures:
            return

        state.sync_error = str(error) or error.__class__.__name__
        if self.on_sync_failure is not None:
            try:
                self.on_sync_failure(state.account, state.folder, error)
            except Exception:
                logger.exception("Sync failure callback raised")

    def _emit(self) -> None:
        if self.on_change is not None:
            try:
                self.on_change(self._state)
            except Exception:
                logger.exception("Session listener raised")
