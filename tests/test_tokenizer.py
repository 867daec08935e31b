"""Tests for splitting text into display units."""

import pytest

from speedreader.playback.tokenizer import DisplayUnit, Session, Tokenizer, tokenize


class TestTokenizer:
    """Tests for Tokenizer.split and tokenize()."""

    def test_one_unit_per_word(self):
        session = tokenize("the quick brown fox")

        assert len(session) == 4
        assert [unit.text for unit in session] == ["the", "quick", "brown", "fox"]

    def test_unit_count_matches_whitespace_tokens(self):
        text = "  Call me\tIshmael.\n\nSome years ago -- never mind\r\nhow long  "

        session = tokenize(text)

        assert len(session) == len(text.split())

    def test_punctuation_stays_attached(self):
        session = tokenize('Well, "hello" there! (really?)')

        assert [unit.text for unit in session] == ["Well,", '"hello"', "there!", "(really?)"]

    def test_indices_follow_order(self):
        session = tokenize("one two three")

        assert [unit.index for unit in session] == [0, 1, 2]
        assert session[1] == DisplayUnit(index=1, text="two")

    def test_empty_text_gives_empty_session(self):
        session = tokenize("")

        assert len(session) == 0
        assert session.is_empty

    def test_whitespace_only_gives_empty_session(self):
        assert tokenize(" \n\t ").is_empty

    def test_session_keeps_original_text(self):
        text = "keep   this\nexactly"

        assert tokenize(text).text == text

    def test_session_is_immutable(self):
        session = tokenize("a b")

        with pytest.raises(AttributeError):
            session.text = "other"

    def test_chunk_size_groups_words(self):
        units = Tokenizer(chunk_size=2).split("one two three four five")

        assert [unit.text for unit in units] == ["one two", "three four", "five"]

    def test_rejects_zero_chunk_size(self):
        with pytest.raises(ValueError):
            Tokenizer(chunk_size=0)

    def test_unit_str_is_text(self):
        assert str(DisplayUnit(index=0, text="word")) == "word"

    def test_session_is_restartable(self):
        session = Session(text="a b", units=tuple(Tokenizer().split("a b")))

        assert list(session) == list(session)
