"""Tests for reading the text to speed read."""

import io

import pytest

from speedreader.text_source import TextSourceError, read_text


def test_reads_file(tmp_path):
    path = tmp_path / "book.txt"
    path.write_text("Call me Ishmael.", encoding="utf-8")

    assert read_text(str(path)) == "Call me Ishmael."


def test_missing_file(tmp_path):
    with pytest.raises(TextSourceError, match="does not exist"):
        read_text(str(tmp_path / "nope.txt"))


def test_undecodable_file(tmp_path):
    path = tmp_path / "binary.txt"
    path.write_bytes(b"\xff\xfe\xfa")

    with pytest.raises(TextSourceError, match="Failed to read"):
        read_text(str(path))


def test_reads_stdin_when_no_file():
    assert read_text(stdin=io.StringIO("piped words")) == "piped words"


@pytest.mark.parametrize("text", ["", "   \n\t"])
def test_blank_text_is_rejected(text):
    with pytest.raises(TextSourceError, match="No text provided"):
        read_text(stdin=io.StringIO(text))
