"""Word wrapping and mouse hit testing for the word canvases."""

from memoria.core.tokens import NO_INDEX, tokenize
from memoria.tui.widgets import hit_test, layout


def texts(lines):
    return ["".join(seg.text for seg in line) for line in lines]


def test_fits_on_one_line():
    lines = layout(tokenize("The cat sat."), width=40)
    assert texts(lines) == ["The cat sat."]


def test_wraps_at_width_without_leading_space():
    lines = layout(tokenize("aaa bbb ccc"), width=7)
    assert texts(lines) == ["aaa bbb ", "ccc"]
    assert lines[1][0].x == 0


def test_line_and_paragraph_breaks():
    lines = layout(tokenize("one\ntwo\n\nthree"), width=40)
    assert texts(lines) == ["one", "two", "", "three"]


def test_display_function_changes_widths():
    lines = layout(tokenize("ab cd"), width=40, display=lambda t: t.text.upper())
    assert texts(lines) == ["AB CD"]


def test_hit_test_maps_cells_to_words():
    lines = layout(tokenize("The cat, sat"), width=40)
    # "The cat, sat"
    #  0123456789..
    assert hit_test(lines, 0, 0) == 0
    assert hit_test(lines, 2, 0) == 0
    assert hit_test(lines, 3, 0) == NO_INDEX
    assert hit_test(lines, 4, 0) == 1
    assert hit_test(lines, 7, 0) == NO_INDEX
    assert hit_test(lines, 9, 0) == 2


def test_hit_test_outside_text():
    lines = layout(tokenize("The cat"), width=40)
    assert hit_test(lines, 50, 0) == NO_INDEX
    assert hit_test(lines, 0, 3) == NO_INDEX
    assert hit_test(lines, 0, -1) == NO_INDEX


def test_hit_test_after_wrap():
    lines = layout(tokenize("aaa bbb ccc"), width=7)
    assert hit_test(lines, 1, 1) == 2


def test_wide_characters_take_two_cells():
    lines = layout(tokenize("我愛你"), width=40)
    assert hit_test(lines, 0, 0) == 0
    assert hit_test(lines, 1, 0) == 0
    assert hit_test(lines, 2, 0) == 1


def test_word_wider_than_canvas_is_split():
    lines = layout(tokenize("a abcdefgh b"), width=4)
    assert texts(lines) == ["a ", "abcd", "efgh ", "b"]
    assert hit_test(lines, 3, 1) == 1
    assert hit_test(lines, 0, 2) == 1
    assert hit_test(lines, 0, 3) == 2
    assert len(lines) == 4
