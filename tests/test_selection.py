"""SelectionState: toggles, range sets, select-all and the selection query."""

from memoria.core.selection import SelectionState
from memoria.core.tokens import NO_INDEX


def make(text="The cat sat on the mat."):
    return SelectionState.from_text(text)


class TestToggle:
    def test_toggle_flips_one_word(self):
        state = make().toggle(1)
        assert state.selected_indices() == [1]
        assert state.toggle(1).selected_indices() == []

    def test_toggle_returns_new_state(self):
        before = make()
        after = before.toggle(2)
        assert before.selected_indices() == []
        assert after.selected_indices() == [2]

    def test_unknown_index_is_noop(self):
        state = make()
        assert state.toggle(NO_INDEX) == state
        assert state.toggle(99) == state


class TestSetSelected:
    def test_sets_only_listed_words(self):
        state = make().toggle(5).set_selected({1, 2}, True)
        assert state.selected_indices() == [1, 2, 5]

    def test_can_clear(self):
        state = make().select_all().set_selected({0, 3}, False)
        assert state.selected_indices() == [1, 2, 4, 5]

    def test_ignores_unknown_indices(self):
        state = make().set_selected({-1, 1, 42}, True)
        assert state.selected_indices() == [1]


class TestSelectAll:
    def test_selects_every_word_only(self):
        state = make().select_all()
        assert state.selected_indices() == [0, 1, 2, 3, 4, 5]
        assert state.selected_count == state.word_count == 6

    def test_unselected_indices(self):
        state = make().toggle(0).toggle(4)
        assert state.unselected_indices() == [1, 2, 3, 5]


class TestQueries:
    def test_selected_indices_follow_text_order_not_click_order(self):
        state = make().toggle(4).toggle(0).toggle(2)
        assert state.selected_indices() == [0, 2, 4]

    def test_indices_between_is_inclusive_and_order_independent(self):
        state = make()
        assert state.indices_between(2, 4) == [2, 3, 4]
        assert state.indices_between(4, 2) == [2, 3, 4]

    def test_is_selectable(self):
        state = make()
        assert state.is_selectable(0)
        assert not state.is_selectable(NO_INDEX)
        assert not state.is_selectable(6)

    def test_word_lookup(self):
        state = make()
        assert state.word(1).text == "cat"
        assert state.word(NO_INDEX) is None

    def test_empty_state(self):
        state = SelectionState()
        assert state.word_count == 0
        assert state.selected_indices() == []
        assert state.select_all() == state
