"""Markpad CLI entry point.

Allows running via `python -m markpad` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import platformdirs

from .settings import APP_NAME, SettingsStore
from .version import get_version_string

LOG_LEVEL_ENV = "MARKPAD_LOG_LEVEL"

logger = logging.getLogger(__name__)


def configure_logging(log_dir: Path | None = None) -> Path | None:
    """Send log records to a file, since the terminal is in fullscreen.

    The level comes from ``MARKPAD_LOG_LEVEL`` (default WARNING).

    Returns:
        The log file path, or None if the log directory cannot be created
    """
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING

    log_dir = log_dir or Path(platformdirs.user_log_dir(APP_NAME))
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"Warning: cannot create log directory {log_dir}: {e}", file=sys.stderr)
        logging.getLogger().setLevel(level)
        return None

    log_file = log_dir / "markpad.log"
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)
    return log_file


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    # Represent control/escape characters visibly
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Print parsed key events until ESC is pressed."""
    from .terminal import TerminalInterface, control_keys_enabled
    from .keyboard import KeyboardHandler, KeyEvent, KeyType

    print("Keyboard test mode: press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)

    try:
        with control_keys_enabled():
            while True:
                ev: KeyEvent | None = kb.get_key_event(timeout=None)
                if not ev:
                    continue
                if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                    print("Exiting keyboard test.")
                    break
                parts = [f"type={ev.key_type.value}", f"value={ev.value}", f"raw='{_escape_bytes(ev.raw)}'"]
                flags = [name for name, on in (('alt', ev.is_alt), ('ctrl', ev.is_ctrl), ('seq', ev.is_sequence)) if on]
                if flags:
                    parts.append(f"flags={'+'.join(flags)}")
                print(' '.join(parts))
    finally:
        term.cleanup()


def main() -> None:
    # Very small arg parsing to support keyboard test mode, version, and optional filename
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    configure_logging()
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return

    settings = SettingsStore().load_or_create()

    # Lazy import to avoid importing UI deps for --version
    from .discovery import find_documents
    from .editor import Editor
    editor = Editor(settings=settings)

    if args:
        path = args[0]
    else:
        path = editor.choose_document(find_documents(extension=settings.document_extension))

    if path is not None:
        editor.load_file(path)
        editor.run()

    for error in editor.errors:
        print(error, file=sys.stderr)
    print("\nGoodbye!")


if __name__ == "__main__":  # pragma: no cover
    main()
