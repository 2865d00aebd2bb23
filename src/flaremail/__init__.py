# =============================================================================
# FlareMail: Bulk Mail Account Orchestration
# =============================================================================
#
# FlareMail manages a collection of OAuth mail accounts whose credentials are
# imported in bulk and whose mailboxes are fetched by a remote sync backend
# and cached locally for display.
#
# Features:
#   - Bulk import of "address----secret----client_id----refresh_token" lines
#   - Searchable, paginated account directory with multi-page selection
#   - Mailbox sessions: best-effort remote sync, then cached records by folder
#   - Single-slot, self-expiring notifications
#   - SQLite storage via aiosqlite, XDG Base Directory compliant
#
# =============================================================================

__version__ = "0.1.0"
__app_name__ = "flaremail"

from flaremail.app import main

__all__ = ["main", "__version__", "__app_name__"]
