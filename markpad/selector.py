"""Document selection screen shown when no file is given on the command line."""

from enum import Enum
from typing import Optional, Sequence

from .discovery import DocumentChoice
from .keyboard import KeyEvent, KeyType


class SelectorOutcome(Enum):
    PENDING = "pending"
    SELECTED = "selected"
    CANCELLED = "cancelled"


# Keys that leave the selector without opening anything
_CANCEL_KEYS = {
    (KeyType.SPECIAL, 'escape'),
    (KeyType.CTRL, 'c'),
    (KeyType.CTRL, 'q'),
}


class FileSelector:
    """Highlight-and-pick list over discovered documents.

    Up and Down move the highlight and wrap around at either end. Enter
    picks the highlighted document. With an empty list any key leaves.
    """

    def __init__(self, choices: Sequence[DocumentChoice]):
        self.choices = list(choices)
        self.index = 0
        self.outcome = SelectorOutcome.PENDING

    @property
    def labels(self) -> list[str]:
        return [choice.label for choice in self.choices]

    @property
    def selected(self) -> Optional[DocumentChoice]:
        """The chosen document once the outcome is SELECTED."""
        if self.outcome != SelectorOutcome.SELECTED:
            return None
        return self.choices[self.index]

    def handle_key(self, key_event: KeyEvent) -> SelectorOutcome:
        if self.outcome != SelectorOutcome.PENDING:
            return self.outcome

        if not self.choices:
            self.outcome = SelectorOutcome.CANCELLED
            return self.outcome

        key = (key_event.key_type, key_event.value)
        if key in _CANCEL_KEYS:
            self.outcome = SelectorOutcome.CANCELLED
        elif key == (KeyType.SPECIAL, 'up'):
            self.index = (self.index - 1) % len(self.choices)
        elif key == (KeyType.SPECIAL, 'down'):
            self.index = (self.index + 1) % len(self.choices)
        elif key == (KeyType.SPECIAL, 'enter'):
            self.outcome = SelectorOutcome.SELECTED
        return self.outcome
