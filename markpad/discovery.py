"""Finding candidate documents to open."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentChoice:
    label: str  # Path shown to the user, relative to the search root
    path: str  # Absolute path


def find_documents(root: Optional[str] = None,
                   extension: str = EditorConstants.DOCUMENT_EXTENSION) -> list[DocumentChoice]:
    """List documents in ``root`` and one level of its subdirectories.

    Files directly in ``root`` are labelled by name; files inside a
    subdirectory are labelled ``dir/name``. Deeper levels are not searched,
    and unreadable subdirectories are skipped.

    Args:
        root: Directory to search, defaults to the current directory
        extension: File name suffix to match, e.g. ".md"

    Returns:
        Matching documents in name order
    """
    root = os.path.abspath(root or os.getcwd())
    choices: list[DocumentChoice] = []

    for name in sorted(os.listdir(root)):
        full_path = os.path.join(root, name)
        if os.path.isdir(full_path):
            try:
                children = sorted(os.listdir(full_path))
            except OSError as e:
                logger.debug(f"Skipping unreadable directory {full_path}: {e}")
                continue
            for child in children:
                child_path = os.path.join(full_path, child)
                if child.endswith(extension) and not os.path.isdir(child_path):
                    choices.append(DocumentChoice(label=f"{name}/{child}", path=child_path))
        elif name.endswith(extension):
            choices.append(DocumentChoice(label=name, path=full_path))

    return choices
