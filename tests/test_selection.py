"""Tests for SelectionSet."""

from flaremail.accounts import SelectionSet


class TestSelectionSet:
    def test_toggle(self):
        selection = SelectionSet()

        assert selection.toggle(3) is True
        assert 3 in selection
        assert selection.toggle(3) is False
        assert 3 not in selection

    def test_select_all_is_union(self):
        selection = SelectionSet([7])

        selection.select_all([1, 2, 3])

        assert selection.ids == {1, 2, 3, 7}

    def test_deselect_all_only_touches_page(self):
        selection = SelectionSet([1, 2, 3, 7])

        selection.deselect_all([1, 2, 3])

        assert selection.ids == {7}

    def test_all_selected(self):
        selection = SelectionSet([1, 2])

        assert selection.all_selected([1, 2])
        assert not selection.all_selected([1, 2, 3])
        assert not selection.all_selected([])

    def test_retain_drops_unknown(self):
        selection = SelectionSet([1, 2, 9])

        selection.retain([1, 2, 3])

        assert selection.ids == {1, 2}

    def test_iterates_sorted(self):
        selection = SelectionSet([9, 1, 5])

        assert list(selection) == [1, 5, 9]
        assert len(selection) == 3

    def test_clear(self):
        selection = SelectionSet([1, 2])

        selection.clear()

        assert len(selection) == 0
