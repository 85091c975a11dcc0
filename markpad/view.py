from dataclasses import dataclass
from enum import Enum
from typing import assert_never

from .classifier import LineCategory, classify
from .constants import EditorConstants
from .modes import EditorMode
from .session import SessionSnapshot


class LineStyle(Enum):
    """Visual style of a rendered line; everything but PLAIN is preview-only."""
    PLAIN = "plain"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    HEADING_4 = "heading_4"
    LIST_ITEM = "list_item"


_HEADING_STYLES = {
    1: LineStyle.HEADING_1,
    2: LineStyle.HEADING_2,
    3: LineStyle.HEADING_3,
    4: LineStyle.HEADING_4,
}

# Left padding of each heading level in the preview
_HEADING_INDENT = {
    LineStyle.HEADING_1: 0,
    LineStyle.HEADING_2: 1,
    LineStyle.HEADING_3: 2,
    LineStyle.HEADING_4: 4,
}


@dataclass(frozen=True)
class RenderedLine:
    number: int  # 1-based document line number
    text: str
    style: LineStyle = LineStyle.PLAIN
    indent: int = 0
    continuation: bool = False  # Wrapped row after the first; no line number


def render_with_cursor(line: str, column: int) -> str:
    """Draw the cursor glyph over the character at ``column``.

    At the end of the line (or on an empty line) the glyph is appended.
    """
    glyph = EditorConstants.CURSOR_GLYPH
    if column >= len(line):
        return line + glyph
    return line[:column] + glyph + line[column + 1:]


def render_preview_line(line: str, number: int) -> RenderedLine:
    classified = classify(line)
    if classified.category == LineCategory.HEADING:
        style = _HEADING_STYLES[classified.level]
        return RenderedLine(number, classified.text, style, _HEADING_INDENT[style])
    if classified.category == LineCategory.LIST_ITEM:
        text = f"  {EditorConstants.BULLET_GLYPH} {classified.text}"
        return RenderedLine(number, text, LineStyle.LIST_ITEM)
    return RenderedLine(number, classified.text)


def render_line(snapshot: SessionSnapshot, index: int) -> RenderedLine:
    line = snapshot.lines[index]
    match snapshot.mode:
        case EditorMode.EDIT:
            if index == snapshot.cursor.line:
                line = render_with_cursor(line, snapshot.cursor.column)
            return RenderedLine(index + 1, line)
        case EditorMode.VIEW:
            return RenderedLine(index + 1, line)
        case EditorMode.PREVIEW:
            return render_preview_line(line, index + 1)
        case _:
            assert_never(snapshot.mode)


def scroll_top_for(cursor_row: int, top_row: int, num_rows: int) -> int:
    """Return the first visible row so that ``cursor_row`` is on screen."""
    if num_rows <= 0:
        return cursor_row
    if cursor_row < top_row:
        return cursor_row
    if cursor_row >= top_row + num_rows:
        return cursor_row - num_rows + 1
    return top_row


def wrap_line(line: RenderedLine, width: int) -> list[RenderedLine]:
    """Split a rendered line into rows that fit ``width`` cells after its indent.

    Only the first row keeps the line number in the gutter; the others are
    marked as continuations.
    """
    room = max(1, width - line.indent)
    if len(line.text) <= room:
        return [line]
    return [
        RenderedLine(line.number, line.text[start:start + room], line.style, line.indent,
                     continuation=start > 0)
        for start in range(0, len(line.text), room)
    ]


def render_document(snapshot: SessionSnapshot, width: int) -> tuple[list[RenderedLine], int]:
    """Render every document line as wrapped rows.

    Returns:
        (rows, cursor_row) where cursor_row indexes the row holding the cursor
    """
    rows: list[RenderedLine] = []
    cursor_row = 0
    for i in range(len(snapshot.lines)):
        wrapped = wrap_line(render_line(snapshot, i), width)
        if i == snapshot.cursor.line:
            room = max(1, width - wrapped[0].indent)
            cursor_row = len(rows) + min(snapshot.cursor.column // room, len(wrapped) - 1)
        rows.extend(wrapped)
    return rows, cursor_row


def status_segments(snapshot: SessionSnapshot) -> tuple[str, str, str]:
    """Split the status text into (prefix, mode label, position) for styling."""
    position = f" | Line: {snapshot.cursor.line + 1}, Column: {snapshot.cursor.column + 1}"
    if snapshot.modified:
        position += " (modified)"
    return ("Mode: ", snapshot.mode.label, position)


def status_line(snapshot: SessionSnapshot) -> str:
    """Build the status text, e.g. "Mode: EDIT | Line: 3, Column: 1 (modified)"."""
    return "".join(status_segments(snapshot))


class DocumentView:
    """Visible window onto the document.

    ``render`` rebuilds ``lines`` from a session snapshot. Long lines wrap
    onto several rows, and the window scrolls by rows just enough to keep
    the cursor row visible.
    """

    num_rows: int
    num_columns: int
    top_row: int = 0
    lines: list[RenderedLine]

    def __init__(self, num_rows: int = EditorConstants.BOX_HEIGHT,
                 num_columns: int = EditorConstants.BOX_WIDTH - EditorConstants.GUTTER_WIDTH):
        self.num_rows = num_rows
        self.num_columns = num_columns  # Text columns right of the gutter
        self.top_row = 0
        self.lines = []

    def render(self, snapshot: SessionSnapshot) -> list[RenderedLine]:
        rows, cursor_row = render_document(snapshot, self.num_columns)
        last_row = max(0, len(rows) - self.num_rows)
        self.top_row = min(scroll_top_for(cursor_row, self.top_row, self.num_rows), last_row)
        self.lines = rows[self.top_row:self.top_row + self.num_rows]
        return self.lines
