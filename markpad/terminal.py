"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import blessed
from contextlib import contextmanager
from typing import Optional, Sequence
import sys
import select
import termios

from .constants import EditorConstants
from .view import LineStyle, RenderedLine, scroll_top_for

logger = logging.getLogger(__name__)

# Rounded box drawing characters
TOP_LEFT, TOP_RIGHT = "╭", "╮"
BOTTOM_LEFT, BOTTOM_RIGHT = "╰", "╯"
HORIZONTAL, VERTICAL = "─", "│"


def content_size(box_width: int, box_height: int) -> tuple[int, int]:
    """Return (rows, columns) available for text inside the editor box."""
    inset = 2 + 2 * EditorConstants.BOX_PADDING  # Border plus padding on both sides
    return (max(1, box_height - inset), max(1, box_width - inset))


@contextmanager
def control_keys_enabled():
    """Deliver Ctrl-S and Ctrl-Q as keys instead of tty flow control.

    Enter this after blessed's cbreak() so the cbreak settings are what
    gets restored on exit.
    """
    old_settings = None
    try:
        old_settings = termios.tcgetattr(sys.stdin)
        new_settings = list(old_settings)
        # IXON/IXOFF in input flags (index 0) swallow Ctrl-S and Ctrl-Q
        new_settings[0] &= ~(termios.IXON | termios.IXOFF)
        termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
    except (termios.error, OSError) as e:
        logger.debug(f"Could not disable flow control: {e}")
        old_settings = None
    try:
        yield
    finally:
        if old_settings is not None:
            try:
                termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
            except (termios.error, OSError) as e:
                logger.warning(f"Could not restore terminal settings: {e}")


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._selector_top = 0  # First list entry shown by draw_selector

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen)
        print(self.term.hide_cursor)
        print(self.term.clear)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input
                # Enter raw mode immediately so reads work
                self._curtsies_input = Input(keynames='curtsies')
                self._curtsies_input.__enter__()
            except Exception as e:
                # Without curtsies input the editor can still draw; get_key
                # then returns None and the caller sees no keys.
                logger.error(f"Could not initialize keyboard input: {e}")
                self._curtsies_input = None

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen)
            print(self.term.normal_cursor)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            except Exception as e:
                # Teardown must not crash the app; the terminal is already
                # out of fullscreen at this point.
                logger.warning(f"Could not restore keyboard input mode: {e}")
            finally:
                self._curtsies_input = None

    def clear_screen(self):
        """Clear the entire screen."""
        print(self.term.home + self.term.clear, end='')

    def _styled(self, text: str, style: LineStyle) -> str:
        if style == LineStyle.HEADING_1:
            return self.term.bold_blue_on_black(text)
        if style == LineStyle.HEADING_2:
            return self.term.bold_cyan(text)
        if style == LineStyle.HEADING_3:
            return self.term.bold_green(text)
        if style == LineStyle.HEADING_4:
            return self.term.yellow(text)
        return text

    def _compose_line(self, line: RenderedLine, text_width: int) -> str:
        """Compose gutter + styled text, padded to ``text_width`` cells."""
        gutter_width = EditorConstants.GUTTER_WIDTH
        number = "" if line.continuation else str(line.number)
        gutter = number.ljust(gutter_width)[:gutter_width]
        body_width = max(0, text_width - gutter_width)
        indent = min(line.indent, body_width)
        body = line.text[:body_width - indent]
        padding = ' ' * (body_width - indent - len(body))
        return (
            self.term.bright_black(gutter)
            + ' ' * indent
            + self._styled(body, line.style)
            + padding
        )

    def draw_editor(self, lines: Sequence[RenderedLine], status: tuple[str, str, str],
                    help_text: str, box_width: int, box_height: int):
        """Draw the bordered document box, the status line and the help line.

        Args:
            lines: Rendered document lines, at most the box's content rows
            status: (prefix, mode label, position) from view.status_segments
            help_text: Key help shown on the last line
            box_width: Outer width of the box including border
            box_height: Outer height of the box including border
        """
        rows, columns = content_size(box_width, box_height)
        pad = EditorConstants.BOX_PADDING
        inner = box_width - 2

        print(self.term.home + self.term.clear, end='')
        print(self.term.move(0, 0) + TOP_LEFT + HORIZONTAL * inner + TOP_RIGHT, end='')
        for y in range(1, box_height - 1):
            print(self.term.move(y, 0) + VERTICAL, end='')
            print(self.term.move(y, box_width - 1) + VERTICAL, end='')
        print(self.term.move(box_height - 1, 0) + BOTTOM_LEFT + HORIZONTAL * inner + BOTTOM_RIGHT, end='')

        for i, line in enumerate(lines[:rows]):
            print(self.term.move(1 + pad + i, 1 + pad) + self._compose_line(line, columns), end='')

        prefix, label, position = status
        print(self.term.move(box_height, 0) + prefix + self.term.bold_green(label) + position, end='')
        help_line = help_text[:self.term.width] if self.term.width else help_text
        print(self.term.move(box_height + 1, 0) + help_line, end='', flush=True)

    def draw_selector(self, title: str, labels: Sequence[str], selected_index: int):
        """Draw the document list with the selected entry highlighted.

        The list gets every row below the title and scrolls to keep the
        selected entry on screen.
        """
        visible = max(1, self.term.height - 1)
        self._selector_top = min(scroll_top_for(selected_index, self._selector_top, visible),
                                 max(0, len(labels) - visible))
        print(self.term.home + self.term.clear, end='')
        print(self.term.move(0, 0) + title, end='')
        for row, label in enumerate(labels[self._selector_top:self._selector_top + visible]):
            i = self._selector_top + row
            if i == selected_index:
                text = self.term.cyan("❯ " + label)
            else:
                text = "  " + label
            print(self.term.move(1 + row, 0) + text, end='')
        print('', end='', flush=True)

    def draw_message(self, message: str):
        """Draw a single message at the top of a cleared screen."""
        print(self.term.home + self.term.clear, end='')
        print(self.term.move(0, 0) + message, end='', flush=True)

    def draw_error_message(self, message1: str, message2: str = ""):
        """Draw an error message in the center of the screen.

        Args:
            message1: Primary error message
            message2: Secondary information
        """
        print(self.term.home + self.term.clear, end='')

        center_y = self.term.height // 2
        box_width = max(len(message1), len(message2)) + 4
        left_margin = max(0, (self.term.width - box_width) // 2)

        print(self.term.move(center_y - 2, left_margin) + "╔" + "═" * (box_width - 2) + "╗", end='')
        print(self.term.move(center_y - 1, left_margin) + "║ " + message1.center(box_width - 4) + " ║", end='')
        if message2:
            print(self.term.move(center_y, left_margin) + "║ " + message2.center(box_width - 4) + " ║", end='')
            print(self.term.move(center_y + 1, left_margin) + "╚" + "═" * (box_width - 2) + "╝", end='')
        else:
            print(self.term.move(center_y, left_margin) + "╚" + "═" * (box_width - 2) + "╝", end='')

        help_text = "Resize terminal to continue"
        help_pos = max(0, (self.term.width - len(help_text)) // 2)
        print(self.term.move(self.term.height - 1, help_pos) + help_text, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name as a string, or None if no key arrived
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height
