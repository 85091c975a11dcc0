"""Markpad - A terminal markdown editor."""

from .classifier import ClassifiedLine, LineCategory, classify
from .model import CursorPosition, TextBuffer, TextModel
from .modes import EditorMode
from .session import EditorSession, ExitAction, SessionSnapshot

__all__ = [
    'ClassifiedLine',
    'CursorPosition',
    'EditorMode',
    'EditorSession',
    'ExitAction',
    'LineCategory',
    'SessionSnapshot',
    'TextBuffer',
    'TextModel',
    'classify',
]
