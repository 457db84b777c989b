from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path resolution and the directory listing boundary
used by the search core. Listings are pre-filtered with a case-insensitive
glob and never propagate access failures: an unreadable directory simply
contributes no names.
"""

import fnmatch
import logging
import os
from typing import List, Optional

from fuzzypath.domain.errors import FilesystemAccessError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "FuzzyPath"
UNIX_APP_DIR_NAME = ".fuzzypath"

# Characters with a special meaning inside fnmatch patterns
_GLOB_SPECIALS = "*?["

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/FuzzyPath
    - Linux/Mac: ~/.fuzzypath

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        logger.debug(f"Could not create user data dir '{path}': {e}")

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def root_of(path: str) -> str:
    """Return the filesystem root (drive anchor on Windows) containing ``path``."""
    drive, _ = os.path.splitdrive(os.path.abspath(path))
    return drive + os.sep


# -----------------------------------------------------------------------------
# GLOB PRE-FILTER API
# -----------------------------------------------------------------------------

def build_glob_pattern(fragment: str) -> str:
    """
    Interleave a fragment's characters with wildcards.

    'tf' becomes '*t*f*'. Pattern metacharacters typed by the user are
    escaped so they only match themselves.

    Args:
        fragment: Query fragment.

    Returns:
        str: fnmatch-compatible pattern.
    """
    escaped = [f"[{c}]" if c in _GLOB_SPECIALS else c for c in fragment]
    return "*" + "*".join(escaped) + "*"


def matches_glob(name: str, pattern: str) -> bool:
    """Case-insensitive fnmatch, identical on every platform."""
    return fnmatch.fnmatchcase(name.lower(), pattern.lower())


# -----------------------------------------------------------------------------
# DIRECTORY LISTING API
# -----------------------------------------------------------------------------

def scan_entry_names(
        directory: str,
        glob_pattern: str,
        *,
        dirs: bool = True,
        files: bool = False,
) -> List[str]:
    """
    List the top-level entry names of a directory that match a glob.

    Names are sorted so repeated searches see the same order. When both
    kinds are requested, files come first, then directories.

    Args:
        directory: Directory to list.
        glob_pattern: Case-insensitive fnmatch pattern.
        dirs: Include subdirectories.
        files: Include non-directory entries.

    Returns:
        List[str]: Matching names.

    Raises:
        FilesystemAccessError: If the directory cannot be read.
    """
    dir_names: List[str] = []
    file_names: List[str] = []

    try:
        with os.scandir(directory) as it:
            for entry in it:
                if not matches_glob(entry.name, glob_pattern):
                    continue
                try:
                    is_dir = entry.is_dir()
                except OSError:
                    continue
                if is_dir and dirs:
                    dir_names.append(entry.name)
                elif not is_dir and files:
                    file_names.append(entry.name)
    except OSError as e:
        raise FilesystemAccessError(directory, e.strerror or str(e)) from e

    return sorted(file_names) + sorted(dir_names)


def list_subdirectory_names(directory: str, glob_pattern: str) -> List[str]:
    """
    Return the names of the subdirectories of ``directory`` matching a glob.

    Access failures are reported as an empty list.

    Args:
        directory: Directory to list.
        glob_pattern: Case-insensitive fnmatch pattern, e.g. '*i*'.

    Returns:
        List[str]: Sorted subdirectory names.
    """
    try:
        return scan_entry_names(directory, glob_pattern, dirs=True, files=False)
    except FilesystemAccessError as e:
        logger.debug(str(e))
        return []


def list_file_names(directory: str, glob_pattern: str) -> List[str]:
    """
    Return the names of the non-directory entries of ``directory`` matching a glob.

    Access failures are reported as an empty list.
    """
    try:
        return scan_entry_names(directory, glob_pattern, dirs=False, files=True)
    except FilesystemAccessError as e:
        logger.debug(str(e))
        return []
