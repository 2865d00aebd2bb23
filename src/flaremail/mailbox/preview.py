# =============================================================================
# Mail Preview Helpers
# =============================================================================
# Small text transforms used when listing cached messages:
#   - snippet(): first characters of the body as plain text
#   - sender_initials(): two-letter avatar text from the sender
#   - display_subject(): subject with a placeholder for empty ones
#   - friendly_time(): "14:05", "Yesterday", "Mon", "Mar 3"
#
# HTML bodies go through inscriptis, which copes with the table-heavy markup
# most newsletters use.
# =============================================================================

import re
from datetime import datetime, timezone

from inscriptis import get_text
from inscriptis.css_profiles import CSS_PROFILES
from inscriptis.model.config import ParserConfig


SNIPPET_LENGTH = 120
NO_SUBJECT = "(no subject)"

_WHITESPACE = re.compile(r"\s+")
_LOOKS_LIKE_HTML = re.compile(r"<[a-zA-Z!/][^>]*>")

# Links and images would only add noise to a one-line snippet
_SNIPPET_CONFIG = ParserConfig(
    css=CSS_PROFILES["strict"],
    display_links=False,
    display_images=False,
    display_anchors=False,
)


def snippet(content: str | None, length: int = SNIPPET_LENGTH) -> str:
    """
    Plain-text preview of a message body.

    Args:
        content: Raw HTML or plain-text body.
        length: Maximum number of characters.

    Returns:
        Whitespace-collapsed text, "" for an empty body.
    """
    if not content:
        return ""

    text = content
    if _LOOKS_LIKE_HTML.search(content):
        text = get_text(content, _SNIPPET_CONFIG)

    return _WHITESPACE.sub(" ", text).strip()[:length]


def sender_name(sender: str | None) -> str:
    """The display-name part of "Name <addr>", or the whole sender."""
    if not sender:
        return ""
    name = sender.split("<", 1)[0].strip().strip('"')
    return name or sender.strip()


def sender_initials(sender: str | None) -> str:
    """
    Two-letter avatar text for a sender.

    "Jane Doe <jane@x.com>" -> "JD", "noreply@x.com" -> "NO", None -> "?".
    """
    name = sender_name(sender)
    if not name:
        return "?"

    words = name.split()
    if len(words) >= 2:
        return (words[0][0] + words[1][0]).upper()
    return name[:2].upper()


def display_subject(subject: str | None) -> str:
    return subject.strip() if subject and subject.strip() else NO_SUBJECT


def friendly_time(received_time: str | None, now: datetime | None = None) -> str:
    """
    Short human form of a received timestamp.

    Args:
        received_time: ISO-8601 timestamp.
        now: Reference time (defaults to the current local time).

    Returns:
        "HH:MM" today, "Yesterday", a weekday within the week, otherwise
        "Mon D". "-" for a missing or unparseable timestamp.
    """
    if not received_time:
        return "-"
    try:
        received = datetime.fromisoformat(received_time)
    except ValueError:
        return "-"

    if received.tzinfo is not None:
        received = received.astimezone()
    now = now or datetime.now(timezone.utc).astimezone()
    if (now.tzinfo is None) != (received.tzinfo is None):
        # Compare naive against naive
        received = received.replace(tzinfo=None)
        now = now.replace(tzinfo=None)

    days = (now.date() - received.date()).days
    if days <= 0:
        return received.strftime("%H:%M")
    if days == 1:
        return "Yesterday"
    if days < 7:
        return received.strftime("%a")
    return f"{received.strftime('%b')} {received.day}"
