# =============================================================================
# Selection Set
# =============================================================================
# The account ids the user has checked. Selections are by id, not by row, so
# they survive page changes and search changes; only clear() or deleting an
# account removes them.
# =============================================================================

from collections.abc import Iterable, Iterator


class SelectionSet:
    """
    A set of selected account ids with page-scoped bulk helpers.

    Usage:
        >>> selection = SelectionSet()
        >>> selection.select_all([1, 2, 3])     # "select all" on a page
        >>> selection.toggle(2)
        >>> sorted(selection)
        [1, 3]
    """

    def __init__(self, ids: Iterable[int] = ()) -> None:
        self._ids: set[int] = set(ids)

    def toggle(self, account_id: int) -> bool:
        """
        Flip one id's membership.

        Returns:
            True if the id is selected afterwards.
        """
        if account_id in self._ids:
            self._ids.discard(account_id)
            return False
        self._ids.add(account_id)
        return True

    def select_all(self, page_ids: Iterable[int]) -> None:
        """Add every id on the page (union)."""
        self._ids.update(page_ids)

    def deselect_all(self, page_ids: Iterable[int]) -> None:
        """Remove exactly the ids on the page; other pages keep theirs."""
        self._ids.difference_update(page_ids)

    def all_selected(self, page_ids: Iterable[int]) -> bool:
        """True if the page is non-empty and every id on it is selected."""
        page_ids = list(page_ids)
        return bool(page_ids) and all(i in self._ids for i in page_ids)

    def discard(self, account_id: int) -> None:
        self._ids.discard(account_id)

    def retain(self, known_ids: Iterable[int]) -> None:
        """Drop ids that no longer exist (e.g. after a reload)."""
        self._ids.intersection_update(known_ids)

    def clear(self) -> None:
        self._ids.clear()

    @property
    def ids(self) -> frozenset[int]:
        return frozenset(self._ids)

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._ids

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"SelectionSet({sorted(self._ids)!r})"
