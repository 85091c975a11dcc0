#!/usr/bin/env python3
"""Markpad - A terminal markdown editor.

Usage:
    python main.py [filename]

With no filename, pick a markdown file from the current directory.

Controls:
    ESC: Cycle Edit -> View -> Preview modes
    Arrow keys: Move the cursor (edit mode)
    Type to insert text, Enter for a new line, Backspace to delete
    Ctrl-S: Save and exit
    Ctrl-Q: Exit without saving
"""

from markpad.__main__ import main


if __name__ == "__main__":
    main()
