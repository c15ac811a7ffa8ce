"""SelectionEditor: history push before every mutation, gestures, hand-off."""

import random

import pytest

from memoria.core.editor import SelectionEditor
from memoria.core.tokens import tokenize


@pytest.fixture
def editor():
    e = SelectionEditor()
    e.load_text("The cat sat")
    return e


def drag(editor, start, *path):
    editor.pointer_down(start)
    for index in path:
        editor.pointer_enter(index)
    return editor.pointer_up()


def test_click_then_drag_then_undo_twice(editor):
    """Click 1, drag 0..2, undo, undo."""
    editor.pointer_down(1)
    editor.pointer_up()
    assert editor.selected_indices() == [1]

    drag(editor, 0, 1, 2)
    assert editor.selected_indices() == [0, 1, 2]

    assert editor.undo()
    assert editor.selected_indices() == [1]

    assert editor.undo()
    assert editor.selected_indices() == []
    assert not editor.can_undo()


def test_click_gesture_equals_toggle(editor):
    other = SelectionEditor()
    other.load_text("The cat sat")
    other.click(2)

    editor.pointer_down(2)
    editor.pointer_up()

    assert editor.selected_indices() == other.selected_indices() == [2]
    assert len(editor.history) == len(other.history) == 1


def test_drag_paints_on_and_never_deselects(editor):
    editor.click(0)
    editor.click(2)
    drag(editor, 0, 1, 2)
    assert editor.selected_indices() == [0, 1, 2]


def test_toggle_twice_and_undo_twice(editor):
    editor.click(1)
    editor.click(1)
    assert editor.selected_indices() == []
    assert len(editor.history) == 2

    editor.undo()
    assert editor.selected_indices() == [1]
    editor.undo()
    assert editor.selected_indices() == []


@pytest.mark.parametrize(
    "mutate",
    [
        lambda e: e.click(0),
        lambda e: e.select_range({0, 2}),
        lambda e: e.select_all(),
        lambda e: drag(e, 2, 1, 0),
    ],
)
def test_undo_inverts_each_mutation(editor, mutate):
    editor.click(1)
    before = editor.selected_indices()

    mutate(editor)
    assert editor.undo()

    assert editor.selected_indices() == before


def test_select_all_when_complete_does_not_grow_history(editor):
    assert editor.select_all()
    depth = len(editor.history)

    assert not editor.select_all()
    assert len(editor.history) == depth


def test_undo_on_empty_is_reported_noop(editor):
    assert not editor.can_undo()
    assert not editor.undo()
    assert editor.selected_indices() == []


def test_click_on_stale_index_still_records_history(editor):
    editor.click(42)
    assert editor.selected_indices() == []
    assert editor.can_undo()


def test_loading_clears_history_and_drag(editor):
    editor.click(0)
    editor.pointer_down(1)
    editor.load_text("Fresh text here")
    assert not editor.can_undo()
    assert not editor.dragging
    assert editor.selected_indices() == []


def test_load_tokens_keeps_saved_selection():
    tokens = tuple(
        t.with_selected(True) if t.kind == "word" and t.index in (0, 2) else t
        for t in tokenize("alpha beta gamma")
    )
    editor = SelectionEditor()
    editor.load_tokens(tokens)
    assert editor.selected_indices() == [0, 2]
    assert not editor.can_undo()


def test_release_mid_drag_commits_nothing(editor):
    editor.pointer_down(0)
    editor.pointer_enter(2)
    editor.release()
    assert editor.pointer_up() is None
    assert editor.selected_indices() == []
    assert not editor.can_undo()


def test_selection_query_mid_drag_reflects_committed_state(editor):
    editor.click(2)
    editor.pointer_down(0)
    editor.pointer_enter(1)
    assert editor.temp_indices == {0, 1}
    assert editor.selected_indices() == [2]


def test_handoff_and_can_proceed(editor):
    assert not editor.can_proceed
    editor.click(2)
    tokens, indices = editor.handoff()
    assert editor.can_proceed
    assert tokens == editor.tokens
    assert indices == [2]


def test_history_cap_limits_undo_depth():
    editor = SelectionEditor(max_depth=1)
    editor.load_text("a b c")
    editor.click(0)
    editor.click(1)
    assert editor.undo()
    assert not editor.undo()
    assert editor.selected_indices() == [0]


def test_random_operations_match_last_applied_flags():
    rng = random.Random(7)
    editor = SelectionEditor()
    editor.load_text(" ".join(f"w{i}" for i in range(12)))
    expected: dict[int, bool] = {i: False for i in range(12)}

    for _ in range(200):
        op = rng.choice(["click", "range", "all"])
        if op == "click":
            i = rng.randrange(12)
            editor.click(i)
            expected[i] = not expected[i]
        elif op == "range":
            picked = {rng.randrange(12) for _ in range(3)}
            editor.select_range(picked)
            for i in picked:
                expected[i] = True
        else:
            editor.select_all()
            expected = {i: True for i in expected}

        assert editor.selected_indices() == sorted(i for i, v in expected.items() if v)
