"""Test the line buffer."""

import pytest
from markpad.model import TextBuffer


@pytest.mark.parametrize("text", [
    "",
    "hello",
    "line one\nline two",
    "trailing newline\n",
    "\n\n",
    "# Title\n\n- item\r\nwindows line",
])
def test_text_round_trip(text):
    """Splitting and joining on newlines reproduces the file text exactly."""
    assert TextBuffer.from_text(text).to_text() == text


def test_empty_document_is_one_empty_line():
    assert TextBuffer().lines == [""]
    assert TextBuffer([]).lines == [""]
    assert TextBuffer.from_text("").lines == [""]


def test_insert_line_after():
    buffer = TextBuffer(["a", "b"])
    buffer.insert_line_after(0)
    assert buffer.lines == ["a", "", "b"]
    buffer.insert_line_after(2)
    assert buffer.lines == ["a", "", "b", ""]


def test_insert_line_after_out_of_range_is_ignored():
    buffer = TextBuffer(["a"])
    buffer.insert_line_after(5)
    buffer.insert_line_after(-1)
    assert buffer.lines == ["a"]


def test_delete_character_before():
    buffer = TextBuffer(["hello"])
    assert buffer.delete_character_before(0, 5) is True
    assert buffer.lines == ["hell"]
    assert buffer.delete_character_before(0, 1) is True
    assert buffer.lines == ["ell"]


def test_delete_character_before_column_zero_does_not_join():
    buffer = TextBuffer(["first", "second"])
    assert buffer.delete_character_before(1, 0) is False
    assert buffer.lines == ["first", "second"]


def test_delete_character_before_invalid_positions():
    buffer = TextBuffer(["abc"])
    assert buffer.delete_character_before(3, 1) is False
    assert buffer.delete_character_before(0, 10) is False
    assert buffer.lines == ["abc"]


def test_insert_character():
    buffer = TextBuffer(["hllo"])
    buffer.insert_character(0, 1, "e")
    assert buffer.lines == ["hello"]
    buffer.insert_character(0, 5, "!")
    assert buffer.lines == ["hello!"]


def test_buffer_never_empty_after_deletes():
    buffer = TextBuffer(["x"])
    buffer.delete_character_before(0, 1)
    buffer.delete_character_before(0, 1)
    assert buffer.lines == [""]
    assert buffer.line_count == 1
