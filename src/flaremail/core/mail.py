# =============================================================================
# Mail Record Model
# =============================================================================
# A message cached by the sync backend. FlareMail only reads and classifies
# these records; the store owns them and the backend writes them.
#
# The folder is the backend's raw label ("INBOX", "Junk Email", "垃圾邮件",
# ...). It is normalized to a FolderTag at read time, never stored
# normalized, so changing the classification rule needs no migration.
# =============================================================================

import base64
from dataclasses import dataclass

from flaremail.core.folder import FolderClassifier, FolderTag, classify


@dataclass
class MailRecord:
    """
    A cached message belonging to exactly one account.

    Attributes:
        account_id: Foreign key to the owning AccountRecord.
        subject: Decoded subject line, if any.
        sender: Free text, "Display Name <addr>" or a bare address.
        received_time: ISO-8601 timestamp, or None when the backend had none.
        content: Raw HTML or plain-text body.
        folder: Raw folder label reported by the backend.
        has_attachments: 1 if the message has attachments, else 0.
        id: Database primary key. None until saved.
    """

    account_id: int
    subject: str | None = None
    sender: str | None = None
    received_time: str | None = None
    content: str | None = None
    folder: str | None = None
    has_attachments: int = 0
    id: int | None = None

    @property
    def attachments_present(self) -> bool:
        return bool(self.has_attachments)

    def folder_tag(self, classifier: FolderClassifier | None = None) -> FolderTag:
        """Classify this record's raw folder label."""
        if classifier is None:
            return classify(self.folder)
        return classifier.classify(self.folder)

    def __repr__(self) -> str:
        return (
            f"MailRecord(id={self.id!r}, account_id={self.account_id!r}, "
            f"subject={self.subject!r}, folder={self.folder!r})"
        )


@dataclass
class AttachmentInfo:
    """
    Metadata of one attachment of a cached message (no content).

    Attributes:
        id: Database primary key.
        mail_id: The MailRecord this attachment belongs to.
        filename: Original file name, if the message had one.
        content_type: MIME type, e.g. "application/pdf".
        size: Content length in bytes.
    """
    id: int
    mail_id: int
    filename: str | None = None
    content_type: str | None = None
    size: int | None = None


@dataclass
class AttachmentContent:
    """The bytes of one attachment, as loaded for saving or display."""
    id: int
    filename: str | None
    content_type: str | None
    content: bytes

    @property
    def content_base64(self) -> str:
        """The content as base64 text, for embedding in a data URL."""
        return base64.b64encode(self.content).decode("ascii")

    def display_name(self) -> str:
        return self.filename or f"attachment-{self.id}"
