"""Editor modes and the cycle between them."""

from enum import Enum
from typing import assert_never


class EditorMode(Enum):
    """The three mutually exclusive editor modes.

    The only transition is ``next()``, which cycles
    EDIT -> VIEW -> PREVIEW -> EDIT.
    """
    EDIT = "edit"
    VIEW = "view"
    PREVIEW = "preview"

    def next(self) -> "EditorMode":
        match self:
            case EditorMode.EDIT:
                return EditorMode.VIEW
            case EditorMode.VIEW:
                return EditorMode.PREVIEW
            case EditorMode.PREVIEW:
                return EditorMode.EDIT
            case _:
                assert_never(self)

    @property
    def allows_editing(self) -> bool:
        """True if content edits, cursor motion and exit commands are accepted."""
        match self:
            case EditorMode.EDIT:
                return True
            case EditorMode.VIEW | EditorMode.PREVIEW:
                return False
            case _:
                assert_never(self)

    @property
    def label(self) -> str:
        return self.value.upper()
