import pytest

from memoria.core.practice import (
    MemorizationSession,
    mask_word,
    practice_title,
)
from memoria.core.tokens import Word, tokenize


class TestMaskWord:
    @pytest.mark.parametrize(
        "level,expected",
        [(3, "*****"), (2, "a****"), (1, "a***e")],
    )
    def test_levels(self, level, expected):
        assert mask_word("apple", level) == expected

    def test_short_words_keep_hints(self):
        assert mask_word("a", 2) == "a"
        assert mask_word("an", 1) == "an"
        assert mask_word("a", 3) == "*"

    def test_cjk_is_always_fully_masked(self):
        assert mask_word("愛", 1) == "*"
        assert mask_word("你好", 2) == "**"

    def test_non_letter_words_are_left_alone(self):
        assert mask_word("don't", 3) == "don't"
        assert mask_word("2024", 3) == "2024"

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            mask_word("apple", 4)


def test_practice_title_truncates_long_text():
    assert practice_title("short") == "short"
    long = "x" * 60
    assert practice_title(long) == "x" * 50 + "..."


def selected_tokens(text, *indices):
    return tuple(
        t.with_selected(True) if isinstance(t, Word) and t.index in indices else t
        for t in tokenize(text)
    )


class TestMemorizationSession:
    def test_selected_words_start_hidden(self):
        tokens = selected_tokens("The quick brown fox", 1, 3)
        session = MemorizationSession.from_tokens(tokens)
        assert session.hidden == {1, 3}
        assert session.render(tokens) == "The ***** brown ***"

    def test_toggle_reveals_and_covers(self):
        tokens = selected_tokens("The quick brown fox", 1)
        session = MemorizationSession.from_tokens(tokens, level=2)

        session.toggle(1)
        assert not session.is_hidden(1)
        assert session.render(tokens) == "The quick brown fox"

        session.toggle(1)
        assert session.render(tokens) == "The q**** brown fox"

    def test_unselected_words_cannot_be_hidden(self):
        session = MemorizationSession(frozenset({1}))
        session.toggle(0)
        assert not session.is_hidden(0)

    def test_reveal_and_cover_all(self):
        session = MemorizationSession(frozenset({0, 2}))
        session.reveal_all()
        assert session.hidden == set()
        session.cover_all()
        assert session.hidden == {0, 2}

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            MemorizationSession(frozenset(), level=0)
