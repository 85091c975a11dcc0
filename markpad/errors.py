"""Exceptions raised by markpad's file collaborators."""


class MarkpadError(Exception):
    """Base class for markpad errors."""


class DocumentReadError(MarkpadError):
    """Raised when a document exists but cannot be read."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


class DocumentWriteError(MarkpadError):
    """Raised when a document cannot be saved."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path
