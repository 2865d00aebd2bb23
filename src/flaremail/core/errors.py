# =============================================================================
# Exception Taxonomy
# =============================================================================
# Every error raised by FlareMail derives from FlareMailError so callers can
# catch the whole family at the CLI boundary.
#
# Propagation policy:
#   - ValidationError:        a malformed import line. Aggregated into the
#                             import outcome, never aborts the batch.
#   - NotFoundError:          an account or attachment id is unknown.
#                             Reported to the caller, skipped when
#                             deleting in bulk.
#   - TransientSyncError:     the remote sync failed. Swallowed by the mailbox
#                             session, which carries on with cached records.
#   - EnvironmentAccessError: clipboard/file access is unavailable. Surfaced
#                             to the user; aborts only the one operation.
# =============================================================================


class FlareMailError(Exception):
    """Base class for all FlareMail errors."""
    pass


class ValidationError(FlareMailError):
    """
    Raised when an import line does not describe a valid account.

    Attributes:
        line_number: 1-based line number in the import text.
        raw_line: The trimmed line as it appeared in the input.
    """

    def __init__(self, line_number: int, raw_line: str, reason: str = "") -> None:
        self.line_number = line_number
        self.raw_line = raw_line
        self.reason = reason
        super().__init__(self.diagnostic)

    @property
    def diagnostic(self) -> str:
        """The failure line reported to the user: '<line-number>: <raw line>'."""
        return f"{self.line_number}: {self.raw_line}"


class NotFoundError(FlareMailError):
    """
    Raised when an id is unknown to the store.

    Attributes:
        item_id: The id that was looked up.
        kind: What was looked up ("Account", "Attachment", ...).
    """

    def __init__(self, item_id: int, kind: str = "Account") -> None:
        self.item_id = item_id
        self.kind = kind
        super().__init__(f"{kind} {item_id} not found")


class TransientSyncError(FlareMailError):
    """Raised by a sync backend when a remote mailbox check fails."""
    pass


class EnvironmentAccessError(FlareMailError):
    """Raised when the environment lacks a capability (clipboard, files)."""
    pass


class ClipboardUnavailable(EnvironmentAccessError):
    """Raised when no clipboard is reachable or writing to it failed."""
    pass


class FileAccessError(EnvironmentAccessError):
    """Raised when an import file is missing, unreadable, or not a .txt file."""
    pass
