# =============================================================================
# Mailbox Module
# =============================================================================
# Opening an account's mailbox: the remote sync seam, the session state
# machine, and preview helpers for the cached records.
# =============================================================================

from flaremail.mailbox.backend import (
    BatchCheckResult,
    CheckResult,
    MailSyncBackend,
    OfflineSyncBackend,
    batch_check,
    check_failure,
)
from flaremail.mailbox.session import MailboxSession, SessionPhase, SessionState

__all__ = [
    "BatchCheckResult",
    "CheckResult",
    "MailSyncBackend",
    "OfflineSyncBackend",
    "batch_check",
    "check_failure",
    "MailboxSession",
    "SessionPhase",
    "SessionState",
]
