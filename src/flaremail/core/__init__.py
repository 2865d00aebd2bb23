# =============================================================================
# FlareMail Core Module
# =============================================================================
# Core domain models. These are plain dataclasses and pure functions with no
# external dependencies, so they can be imported anywhere without causing
# circular imports.
#
#   - AccountRecord: one set of mail-access credentials
#   - MailRecord: a cached message fetched by the sync backend
#   - AttachmentInfo / AttachmentContent: files attached to a cached message
#   - FolderTag: the two-value folder taxonomy (INBOX / JUNK)
#   - Errors: the exception taxonomy shared by every layer
# =============================================================================

from flaremail.core.account import AccountRecord
from flaremail.core.errors import (
    ClipboardUnavailable,
    EnvironmentAccessError,
    FileAccessError,
    FlareMailError,
    NotFoundError,
    TransientSyncError,
    ValidationError,
)
from flaremail.core.folder import DEFAULT_JUNK_TERMS, FolderClassifier, FolderTag, classify
from flaremail.core.mail import AttachmentContent, AttachmentInfo, MailRecord

__all__ = [
    "AccountRecord",
    "MailRecord",
    "AttachmentInfo",
    "AttachmentContent",
    "FolderTag",
    "FolderClassifier",
    "DEFAULT_JUNK_TERMS",
    "classify",
    "FlareMailError",
    "ValidationError",
    "NotFoundError",
    "TransientSyncError",
    "EnvironmentAccessError",
    "ClipboardUnavailable",
    "FileAccessError",
]
