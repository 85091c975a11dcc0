"""Command pattern implementation for editor actions.

The registry is the input dispatcher: every key event resolves to at most
one command. Commands other than the mode switch only run in edit mode;
in view and preview mode they are silently ignored.
"""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType
from .session import ExitAction

if TYPE_CHECKING:
    from .keyboard import KeyEvent
    from .session import EditorSession


class EditorCommand(ABC):
    """Base class for editor commands."""

    # Whether the command is gated on edit mode
    requires_edit_mode = True

    @abstractmethod
    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            session: Session to act on
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """
        pass


class ModeCycleCommand(EditorCommand):
    """Advance EDIT -> VIEW -> PREVIEW -> EDIT. Accepted in every mode."""

    requires_edit_mode = False

    def execute(self, session, key_event) -> bool:
        session.cycle_mode()
        return False


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """Movement commands don't modify the document."""
        self._move(session, key_event)
        return False

    @abstractmethod
    def _move(self, session: 'EditorSession', key_event: 'KeyEvent'):
        """Perform the movement."""
        pass


class LeftCharCommand(MovementCommand):
    def _move(self, session, key_event):
        session.model.left_char()


class RightCharCommand(MovementCommand):
    def _move(self, session, key_event):
        session.model.right_char()


class UpLineCommand(MovementCommand):
    def _move(self, session, key_event):
        session.model.up_line()


class DownLineCommand(MovementCommand):
    def _move(self, session, key_event):
        session.model.down_line()


class EditCommand(EditorCommand):
    """Base class for editing commands.

    Every edit marks the session modified, even one that turns out to be
    a no-op such as backspace at column 0.
    """

    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        self._edit(session, key_event)
        return True

    @abstractmethod
    def _edit(self, session: 'EditorSession', key_event: 'KeyEvent'):
        """Perform the edit."""
        pass


class BackspaceCommand(EditCommand):
    def _edit(self, session, key_event):
        session.model.backspace()


class InsertNewlineCommand(EditCommand):
    def _edit(self, session, key_event):
        session.model.insert_newline()


class InsertTextCommand(EditCommand):
    def _edit(self, session, key_event):
        session.model.insert_char(key_event.value)


class SystemCommand(EditorCommand):
    """Base class for commands that end the session."""

    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """System commands don't modify document content directly."""
        self._execute_system(session, key_event)
        return False

    @abstractmethod
    def _execute_system(self, session: 'EditorSession', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class SaveAndExitCommand(SystemCommand):
    def _execute_system(self, session, key_event):
        session.request_exit(ExitAction.SAVE)


class DiscardAndExitCommand(SystemCommand):
    def _execute_system(self, session, key_event):
        session.request_exit(ExitAction.DISCARD)


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._insert_text = InsertTextCommand()
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Mode switch
        self.register((KeyType.SPECIAL, 'escape'), ModeCycleCommand())

        # Movement commands
        self.register((KeyType.SPECIAL, 'left'), LeftCharCommand())
        self.register((KeyType.SPECIAL, 'right'), RightCharCommand())
        self.register((KeyType.SPECIAL, 'up'), UpLineCommand())
        self.register((KeyType.SPECIAL, 'down'), DownLineCommand())

        # Editing commands; many terminals send 'delete' for the backspace key
        backspace = BackspaceCommand()
        self.register((KeyType.SPECIAL, 'backspace'), backspace)
        self.register((KeyType.SPECIAL, 'delete'), backspace)
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())

        # System commands
        self.register((KeyType.CTRL, 's'), SaveAndExitCommand())
        self.register((KeyType.CTRL, 'q'), DiscardAndExitCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_event: 'KeyEvent') -> Optional[EditorCommand]:
        """Resolve the command for a key event, falling back to text insertion."""
        command = self._commands.get((key_event.key_type, key_event.value))
        if command is None and key_event.is_printable:
            return self._insert_text
        return command

    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        if session.finished:
            return False
        command = self.get_command(key_event)
        if command is None:
            return False
        if command.requires_edit_mode and not session.mode.allows_editing:
            return False
        modified = command.execute(session, key_event)
        if modified:
            session.modified = True
        return modified
