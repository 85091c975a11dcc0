"""Loading and atomically saving documents."""

import errno
import logging
import os
import tempfile

from .constants import EditorConstants
from .errors import DocumentReadError, DocumentWriteError

logger = logging.getLogger(__name__)


def load_document(path: str) -> str:
    """Read a document as UTF-8 text.

    Args:
        path: Path to the document

    Returns:
        The file contents, or "" if the file does not exist yet

    Raises:
        DocumentReadError: if the file exists but cannot be read
    """
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            return f.read()
    except FileNotFoundError:
        logger.info(f"{path} does not exist, starting a new document")
        return ""
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading {path}: {e}")
        raise DocumentReadError(path, f"Error reading {path}: {e}") from e


def save_document(path: str, content: str) -> None:
    """Save a document atomically.

    The content goes to a temporary file in the target directory, which is
    flushed, fsynced and then renamed over the target, so a failed save
    never leaves a truncated document behind.

    Args:
        path: Path to save to
        content: Full document text

    Raises:
        DocumentWriteError: if the document could not be written
    """
    dir_name = os.path.dirname(path) or '.'
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', newline='',
                                         dir=dir_name,
                                         prefix=EditorConstants.ATOMIC_SAVE_PREFIX,
                                         suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                         delete=False) as temp_file:
            temp_filename = temp_file.name
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())

        os.replace(temp_filename, path)
        logger.info(f"Saved {path}")

    except PermissionError as e:
        _remove_temp(temp_filename)
        logger.error(f"Permission denied saving {path}: {e}")
        raise DocumentWriteError(path, f"Error: Permission denied saving {path}") from e
    except OSError as e:
        _remove_temp(temp_filename)
        logger.error(f"Cannot save {path}: {e}")
        if e.errno == errno.ENOSPC:
            raise DocumentWriteError(path, "Error: No space left on device") from e
        raise DocumentWriteError(path, f"Error: Cannot save to {path}") from e


def _remove_temp(temp_filename):
    if temp_filename and os.path.exists(temp_filename):
        try:
            os.remove(temp_filename)
        except OSError:
            logger.warning(f"Could not remove temporary file {temp_filename}")
