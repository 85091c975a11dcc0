"""Main editor controller for the markdown editor."""

import logging
import os
import select
import signal
from typing import Optional, Sequence

from .commands import CommandRegistry
from .constants import EditorConstants
from .discovery import DocumentChoice
from .errors import DocumentReadError, DocumentWriteError
from .keyboard import KeyboardHandler, KeyEvent
from .selector import FileSelector, SelectorOutcome
from .session import EditorSession, ExitAction
from .settings import EditorSettings
from .storage import load_document, save_document
from .terminal import TerminalInterface, content_size, control_keys_enabled
from .view import DocumentView, status_segments

logger = logging.getLogger(__name__)


class Editor:
    """Markdown editor application controller."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings: Optional[EditorSettings] = None):
        """Initialize the editor components."""
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.settings = settings or EditorSettings()
        rows, columns = content_size(self.settings.box_width, self.settings.box_height)
        self.view = DocumentView(num_rows=rows, num_columns=max(1, columns - EditorConstants.GUTTER_WIDTH))
        self.session = EditorSession()
        self.command_registry = CommandRegistry()  # Command pattern for key handling
        self.running = False
        self.error_mode = False  # True when the terminal cannot hold the editor box
        self.errors: list[str] = []  # Reported after the terminal is restored
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None

    @property
    def min_width(self) -> int:
        return self.settings.box_width

    @property
    def min_height(self) -> int:
        # Box plus the status and help lines below it
        return self.settings.box_height + 2

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def choose_document(self, choices: Sequence[DocumentChoice]) -> Optional[str]:
        """Run the file selection screen.

        Returns:
            Path of the chosen document, or None if the user left
        """
        selector = FileSelector(choices)
        self.terminal.setup()
        try:
            with self.terminal.term.cbreak(), control_keys_enabled():
                while selector.outcome == SelectorOutcome.PENDING:
                    self._draw_selector(selector)
                    key_event = self.keyboard.get_key_event(timeout=None)
                    if key_event:
                        selector.handle_key(key_event)
        except KeyboardInterrupt:
            logger.info("File selection interrupted")
            return None
        finally:
            self.terminal.cleanup()

        chosen = selector.selected
        return chosen.path if chosen else None

    def _draw_selector(self, selector: FileSelector):
        if not selector.choices:
            self.terminal.draw_message(EditorConstants.NO_DOCUMENTS_MESSAGE)
        else:
            self.terminal.draw_selector(EditorConstants.SELECT_PROMPT, selector.labels, selector.index)

    def run(self):
        """Run the main editor loop until the session ends."""
        self.terminal.setup()
        self.running = True
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        try:
            with self.terminal.term.cbreak(), control_keys_enabled():
                need_draw = True

                while self.running:
                    # Only draw when needed
                    if need_draw:
                        self._refresh()
                        need_draw = False

                    # Wait for input on stdin or resize pipe
                    ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                    if self._resize_pipe_r in ready:
                        # Clear the pipe
                        os.read(self._resize_pipe_r, 1024)
                        need_draw = True
                    elif 0 in ready:
                        # Non-blocking since select says stdin is ready
                        key_event = self.keyboard.get_key_event(timeout=0)
                        if key_event:
                            self._handle_key_event(key_event)
                            need_draw = True

        except KeyboardInterrupt:
            logger.info("Interrupted, leaving without saving")
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self._resize_pipe_r = self._resize_pipe_w = None
            self.running = False
            self.terminal.cleanup()

    def _refresh(self):
        if self.terminal.width < self.min_width or self.terminal.height < self.min_height:
            self.error_mode = True
            self._draw_error()
        else:
            self.error_mode = False
            self._draw()

    def _draw(self):
        """Draw the current editor state to terminal."""
        snapshot = self.session.snapshot()
        self.view.render(snapshot)
        self.terminal.draw_editor(
            self.view.lines,
            status_segments(snapshot),
            EditorConstants.HELP_LINE,
            self.settings.box_width,
            self.settings.box_height,
        )

    def _draw_error(self):
        """Draw error message when terminal is too small."""
        self.terminal.draw_error_message(
            EditorConstants.TERMINAL_TOO_SMALL_MESSAGE.format(self.min_width, self.min_height),
            EditorConstants.CURRENT_SIZE_MESSAGE.format(self.terminal.width, self.terminal.height)
        )

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        # Don't process keys while the editor box doesn't fit
        if self.error_mode:
            return

        self.command_registry.execute(self.session, key_event)
        if self.session.finished:
            self._finish_session()

    def _finish_session(self):
        if self.session.exit_action == ExitAction.SAVE:
            # The session ends whether or not the save worked
            self.save_file()
        self.running = False

    def load_file(self, path: str):
        """Load a file into the editor.

        A missing file starts a new document. An unreadable file starts an
        empty document and the error is reported when the editor exits.

        Args:
            path: Path to file to load
        """
        try:
            text = load_document(path)
        except DocumentReadError as e:
            self.errors.append(str(e))
            text = ""
        self.session = EditorSession.from_text(text, path=path)
        self.view.top_row = 0

    def save_file(self) -> bool:
        """Save the current document to its path.

        Returns:
            True if the document was written
        """
        path = self.session.path
        if path is None:
            logger.error("No file name to save to")
            self.errors.append("Error: No file name to save to")
            return False
        try:
            save_document(path, self.session.text())
        except DocumentWriteError as e:
            self.errors.append(str(e))
            return False
        self.session.modified = False
        return True
