# =============================================================================
# Folder Classifier
# =============================================================================
# Maps a backend's raw folder label to the two folders FlareMail shows:
#   - INBOX: everything that is not junk (the default)
#   - JUNK:  anything whose label mentions junk or spam
#
# Providers disagree wildly on naming ("Junk", "Junk Email", "[Gmail]/Spam",
# "垃圾邮件"), so matching is by substring on the trimmed, lower-cased label.
# The term list is data, not code: pass your own to FolderClassifier.
# =============================================================================

from collections.abc import Iterable
from enum import Enum


class FolderTag(Enum):
    """The normalized folder taxonomy."""
    INBOX = "INBOX"
    JUNK = "JUNK"

    @classmethod
    def parse(cls, value: "str | FolderTag") -> "FolderTag":
        """
        Parse a user-supplied folder name ("inbox", "JUNK", ...).

        Raises:
            ValueError: If the name is neither inbox nor junk.
        """
        if isinstance(value, FolderTag):
            return value
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown folder: {value!r}") from None


# Substrings that mark a folder as junk. The last one is the Chinese
# word for "junk/trash" used by localized Outlook mailboxes.
DEFAULT_JUNK_TERMS: tuple[str, ...] = ("junk", "spam", "垃圾")


class FolderClassifier:
    """
    Classifies raw folder labels against a configurable list of junk terms.

    Usage:
        >>> FolderClassifier().classify("Junk Email")
        <FolderTag.JUNK: 'JUNK'>
        >>> FolderClassifier(["quarantine"]).classify("Quarantine")
        <FolderTag.JUNK: 'JUNK'>
    """

    def __init__(self, terms: Iterable[str] = DEFAULT_JUNK_TERMS) -> None:
        # Normalize once so classify() stays a plain substring scan
        self.terms = tuple(t.strip().lower() for t in terms if t and t.strip())

    def classify(self, raw_folder: str | None) -> FolderTag:
        """
        Classify a raw folder label. Total: every input maps to a tag.

        Args:
            raw_folder: The backend's label, possibly None or empty.

        Returns:
            FolderTag.JUNK if the label contains a junk term, else INBOX.
        """
        if not raw_folder:
            return FolderTag.INBOX

        normalized = raw_folder.strip().lower()
        if any(term in normalized for term in self.terms):
            return FolderTag.JUNK

        return FolderTag.INBOX


_default_classifier = FolderClassifier()


def classify(raw_folder: str | None) -> FolderTag:
    """Classify a raw folder label with the default junk terms."""
    return _default_classifier.classify(raw_folder)
