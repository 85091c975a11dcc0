"""Text buffer and cursor model for a single document."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class CursorPosition:
    line: int = 0
    column: int = 0


class TextBuffer:
    """Ordered list of document lines.

    The buffer never holds zero lines: an empty document is a single empty
    line. Converting to and from a text blob splits and joins on ``\\n``
    only, so ``TextBuffer.from_text(text).to_text() == text`` for any text.
    """

    lines: list[str]

    def __init__(self, lines: Optional[list[str]] = None):
        self.lines = list(lines) if lines else [""]

    @classmethod
    def from_text(cls, text: str) -> "TextBuffer":
        return cls(text.split("\n"))

    def to_text(self) -> str:
        return "\n".join(self.lines)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_length(self, index: int) -> int:
        return len(self.lines[index])

    def insert_line_after(self, line_index: int) -> None:
        """Insert an empty line immediately after ``line_index``.

        Out-of-range indexes are ignored; callers pass the cursor line.
        """
        if not 0 <= line_index < len(self.lines):
            return
        self.lines.insert(line_index + 1, "")

    def delete_character_before(self, line: int, column: int) -> bool:
        """Remove the character left of ``column`` on ``line``.

        At column 0 nothing happens: the line is not joined with the
        previous one.

        Returns:
            True if a character was removed
        """
        if column <= 0 or not 0 <= line < len(self.lines):
            return False
        text = self.lines[line]
        if column > len(text):
            return False
        self.lines[line] = text[:column - 1] + text[column:]
        return True

    def insert_character(self, line: int, column: int, ch: str) -> None:
        """Insert ``ch`` at ``column`` on ``line``, shifting the rest right."""
        text = self.lines[line]
        self.lines[line] = text[:column] + ch + text[column:]


class TextModel:
    """A buffer plus the cursor that edits it.

    Every motion is computed from the current buffer contents, and
    ``clamp_cursor`` re-establishes ``0 <= column <= len(line)`` after any
    mutation that shortens a line.
    """

    buffer: TextBuffer
    cursor_position: CursorPosition

    def __init__(self, buffer: Optional[TextBuffer] = None):
        self.buffer = buffer or TextBuffer()
        self.cursor_position = CursorPosition()

    @classmethod
    def from_text(cls, text: str) -> "TextModel":
        return cls(TextBuffer.from_text(text))

    @property
    def lines(self) -> list[str]:
        return self.buffer.lines

    def clamp_cursor(self):
        last_line = self.buffer.line_count - 1
        line = min(max(self.cursor_position.line, 0), last_line)
        column = min(max(self.cursor_position.column, 0), self.buffer.line_length(line))
        self.cursor_position.line = line
        self.cursor_position.column = column

    def up_line(self):
        target = max(0, self.cursor_position.line - 1)
        self.cursor_position.line = target
        self.cursor_position.column = min(self.cursor_position.column, self.buffer.line_length(target))

    def down_line(self):
        target = min(self.buffer.line_count - 1, self.cursor_position.line + 1)
        self.cursor_position.line = target
        self.cursor_position.column = min(self.cursor_position.column, self.buffer.line_length(target))

    def left_char(self):
        if self.cursor_position.column > 0:
            self.cursor_position.column -= 1
        elif self.cursor_position.line > 0:
            self.cursor_position.line -= 1
            self.cursor_position.column = self.buffer.line_length(self.cursor_position.line)

    def right_char(self):
        if self.cursor_position.column < self.buffer.line_length(self.cursor_position.line):
            self.cursor_position.column += 1
        elif self.cursor_position.line + 1 < self.buffer.line_count:
            self.cursor_position.line += 1
            self.cursor_position.column = 0

    def insert_newline(self):
        """Open an empty line below the cursor line and move onto it.

        The current line is not split; text right of the cursor stays put.
        """
        self.clamp_cursor()
        self.buffer.insert_line_after(self.cursor_position.line)
        self.cursor_position.line += 1
        self.cursor_position.column = 0

    def insert_char(self, ch: str):
        self.clamp_cursor()
        self.buffer.insert_character(self.cursor_position.line, self.cursor_position.column, ch)
        self.cursor_position.column += 1

    def backspace(self) -> bool:
        """Delete the character before the cursor; no-op at column 0."""
        self.clamp_cursor()
        deleted = self.buffer.delete_character_before(
            self.cursor_position.line, self.cursor_position.column
        )
        if deleted:
            self.cursor_position.column -= 1
        self.clamp_cursor()
        return deleted
