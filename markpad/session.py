"""Editing session state.

A session owns everything that changes while a document is open: the
buffer and cursor (via ``TextModel``), the active mode, the modified flag
and the exit request. Key handlers mutate the session through a single
``EditorSession`` handle, and renderers read a ``SessionSnapshot``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .model import CursorPosition, TextModel
from .modes import EditorMode


class ExitAction(Enum):
    """How the user asked to leave the session."""
    SAVE = "save"
    DISCARD = "discard"


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only copy of session state handed to the renderer."""
    lines: tuple[str, ...]
    cursor: CursorPosition
    mode: EditorMode
    modified: bool
    path: Optional[str] = None


@dataclass
class EditorSession:
    model: TextModel = field(default_factory=TextModel)
    mode: EditorMode = EditorMode.EDIT
    modified: bool = False
    path: Optional[str] = None
    exit_action: Optional[ExitAction] = None

    @classmethod
    def from_text(cls, text: str, path: Optional[str] = None) -> "EditorSession":
        return cls(model=TextModel.from_text(text), path=path)

    @property
    def finished(self) -> bool:
        return self.exit_action is not None

    def cycle_mode(self) -> EditorMode:
        self.mode = self.mode.next()
        return self.mode

    def request_exit(self, action: ExitAction) -> None:
        self.exit_action = action

    def text(self) -> str:
        """Return the document as a single text blob."""
        return self.model.buffer.to_text()

    def snapshot(self) -> SessionSnapshot:
        cursor = self.model.cursor_position
        return SessionSnapshot(
            lines=tuple(self.model.lines),
            cursor=CursorPosition(cursor.line, cursor.column),
            mode=self.mode,
            modified=self.modified,
            path=self.path,
        )
