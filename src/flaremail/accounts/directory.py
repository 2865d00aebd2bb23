# =============================================================================
# Account Directory
# =============================================================================
# In-memory projection of every known account, with search, paging and
# selection derived from it.
#
# The snapshot is only ever replaced wholesale (load()) after a store
# mutation; it is never patched row by row.
#
# Page rules:
#   - Changing the search query or the page size goes back to page 1.
#   - Changing the data keeps the current page, unless the page no longer
#     exists, in which case it is clamped to the last page automatically.
# =============================================================================

from collections.abc import Iterable, Sequence

from flaremail.accounts.pagination import (
    PageItem,
    build_page_window,
    clamp_page,
    paginate,
    total_pages,
)
from flaremail.accounts.selection import SelectionSet
from flaremail.core import AccountRecord


DEFAULT_PAGE_SIZE_OPTIONS: tuple[int, ...] = (10, 20, 50)


def filter_accounts(accounts: Iterable[AccountRecord], query: str) -> list[AccountRecord]:
    """
    Case-insensitive substring match on the address only.

    An empty query matches everything.
    """
    needle = query.lower()
    if not needle:
        return list(accounts)
    return [a for a in accounts if needle in a.address.lower()]


class AccountDirectory:
    """
    Search, paging and selection over an account snapshot.

    Usage:
        >>> directory = AccountDirectory(page_size=10)
        >>> directory.load(await repo.list_accounts())
        >>> directory.set_query("outlook")
        >>> directory.page_items        # accounts on the current page
        >>> directory.page_window       # e.g. [1, 2, 3, 4, ELLIPSIS, 12]
        >>> directory.select_all_on_page()

    Attributes:
        selection: The ids the user has checked.
    """

    def __init__(
        self,
        accounts: Iterable[AccountRecord] = (),
        *,
        page_size: int = 10,
        page_size_options: Sequence[int] = DEFAULT_PAGE_SIZE_OPTIONS,
        selection: SelectionSet | None = None,
    ) -> None:
        self.page_size_options = tuple(page_size_options)
        if page_size not in self.page_size_options:
            raise ValueError(f"page_size must be one of {self.page_size_options}")

        self._accounts: list[AccountRecord] = list(accounts)
        self._query = ""
        self._page_size = page_size
        self._page = 1
        self.selection = selection if selection is not None else SelectionSet()

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    @property
    def accounts(self) -> list[AccountRecord]:
        """The full snapshot, unfiltered."""
        return list(self._accounts)

    def load(self, accounts: Iterable[AccountRecord]) -> None:
        """
        Replace the snapshot with a fresh one from the store.

        Selections of accounts that no longer exist are dropped, and the
        current page is clamped if the result set shrank.
        """
        self._accounts = list(accounts)
        self.selection.retain(a.id for a in self._accounts if a.id is not None)
        self._reclamp()

    def get(self, account_id: int) -> AccountRecord | None:
        for account in self._accounts:
            if account.id == account_id:
                return account
        return None

    # -------------------------------------------------------------------------
    # Search and Paging
    # -------------------------------------------------------------------------

    @property
    def query(self) -> str:
        return self._query

    def set_query(self, query: str) -> None:
        """Change the search text and go back to page 1."""
        self._query = query
        self._page = 1

    def filter(self, query: str | None = None) -> list[AccountRecord]:
        """Accounts matching query (default: the current search text)."""
        return filter_accounts(self._accounts, self._query if query is None else query)

    @property
    def filtered(self) -> list[AccountRecord]:
        return self.filter()

    @property
    def page_size(self) -> int:
        return self._page_size

    def set_page_size(self, page_size: int) -> None:
        """
        Change the page size and go back to page 1.

        Raises:
            ValueError: If page_size is not one of page_size_options.
        """
        if page_size not in self.page_size_options:
            raise ValueError(f"page_size must be one of {self.page_size_options}")
        self._page_size = page_size
        self._page = 1

    @property
    def total_pages(self) -> int:
        return total_pages(len(self.filtered), self._page_size)

    @property
    def current_page(self) -> int:
        return self._page

    def go_to(self, page: int) -> int:
        """Move to a page (clamped into range). Returns the new page."""
        self._page = clamp_page(page, self.total_pages)
        return self._page

    def next_page(self) -> int:
        return self.go_to(self._page + 1)

    def previous_page(self) -> int:
        return self.go_to(self._page - 1)

    @property
    def page_items(self) -> list[AccountRecord]:
        """Accounts on the current page."""
        items, _ = paginate(self.filtered, self._page, self._page_size)
        return items

    @property
    def page_ids(self) -> list[int]:
        return [a.id for a in self.page_items if a.id is not None]

    @property
    def page_window(self) -> list[PageItem]:
        """Page-number strip for the current position."""
        return build_page_window(self.total_pages, self._page)

    def _reclamp(self) -> None:
        if self._page > self.total_pages:
            self._page = self.total_pages

    # -------------------------------------------------------------------------
    # Selection (page-scoped helpers)
    # -------------------------------------------------------------------------

    def toggle(self, account_id: int) -> bool:
        """Flip one row's checkbox. Returns True if now selected."""
        return self.selection.toggle(account_id)

    def select_all_on_page(self) -> None:
        self.selection.select_all(self.page_ids)

    def deselect_all_on_page(self) -> None:
        self.selection.deselect_all(self.page_ids)

    def set_page_selected(self, checked: bool) -> None:
        """The header checkbox: select or deselect every row on the page."""
        if checked:
            self.select_all_on_page()
        else:
            self.deselect_all_on_page()

    @property
    def all_page_selected(self) -> bool:
        return self.selection.all_selected(self.page_ids)

    def __len__(self) -> int:
        return len(self._accounts)
