from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

DIST_NAME = "markpad"


class BuildInfo(NamedTuple):
    version: Optional[str]
    commit: Optional[str]
    dirty: bool


def _run_git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode().strip() or None


def _installed_version() -> Optional[str]:
    try:
        return importlib.metadata.version(DIST_NAME)
    except importlib.metadata.PackageNotFoundError:
        return None


def get_build_info() -> BuildInfo:
    here = Path(__file__).resolve().parent
    commit = _run_git(["rev-parse", "HEAD"], here)
    dirty = bool(commit and _run_git(["status", "--porcelain"], here))
    return BuildInfo(version=_installed_version(), commit=commit, dirty=dirty)


def get_version_string() -> str:
    info = get_build_info()
    version = info.version or "unknown"
    if not info.commit:
        return f"markpad {version}"
    # Use short (7-character) git hashes
    dirty_suffix = "-dirty" if info.dirty else ""
    return f"markpad {version} ({info.commit[:7]}{dirty_suffix})"
