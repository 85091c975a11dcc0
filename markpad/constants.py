"""Constants and configuration for the markpad editor."""


class EditorConstants:
    """Central configuration constants for the editor."""

    # Documents
    DOCUMENT_EXTENSION = ".md"  # Extension offered by the file selector

    # Editor box layout
    BOX_WIDTH = 80  # Outer width of the bordered editor box
    BOX_HEIGHT = 20  # Outer height of the bordered editor box
    BOX_PADDING = 1  # Blank cells between the border and the text
    GUTTER_WIDTH = 4  # Columns reserved for line numbers

    # Glyphs
    CURSOR_GLYPH = "█"  # █ drawn at the cursor in edit mode
    BULLET_GLYPH = "•"  # • drawn before list items in preview mode

    # File operations
    ATOMIC_SAVE_PREFIX = "."  # Prefix for temporary save files
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Messages
    SELECT_PROMPT = "Select a markdown file:"
    NO_DOCUMENTS_MESSAGE = "No markdown files found."
    HELP_LINE = (
        "Press ESC to switch modes, Ctrl+S to save and exit, "
        "Ctrl+Q to exit without saving."
    )
    TERMINAL_TOO_SMALL_MESSAGE = "Terminal too small! Need at least {}x{}."
    CURRENT_SIZE_MESSAGE = "Current size: {}x{}."
