# =============================================================================
# Accounts Module
# =============================================================================
# The in-memory account directory and the operations that mutate the store:
#
#   - pagination: pure page math and the compact page-number strip
#   - selection: the set of checked account ids
#   - directory: search + paging + selection over the account snapshot
#   - manager: refresh/delete against the store, keeping the directory current
# =============================================================================

from flaremail.accounts.directory import AccountDirectory
from flaremail.accounts.manager import AccountManager, BulkDeleteResult
from flaremail.accounts.pagination import (
    ELLIPSIS,
    build_page_window,
    clamp_page,
    paginate,
    total_pages,
)
from flaremail.accounts.selection import SelectionSet

__all__ = [
    "AccountDirectory",
    "AccountManager",
    "BulkDeleteResult",
    "SelectionSet",
    "ELLIPSIS",
    "build_page_window",
    "clamp_page",
    "paginate",
    "total_pages",
]
