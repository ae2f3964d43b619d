"""Filesystem helpers: repository enumeration and layout checks."""

import os
from typing import List

from ..core.types import RepositoryKind

EXTENSIONS_DIR = 'extensions'
SKINS_DIR = 'skins'


def list_subdirectories(dir_path: str) -> List[str]:
    """List the immediate subdirectories of a directory.

    Args:
        dir_path: Directory to enumerate

    Returns:
        Subdirectory paths sorted by name; empty if dir_path is missing
        or not a directory
    """
    if not os.path.isdir(dir_path):
        return []
    with os.scandir(dir_path) as entries:
        names = sorted(entry.name for entry in entries if entry.is_dir())
    return [os.path.join(dir_path, name) for name in names]


def count_directories(dir_path: str) -> int:
    """Count the immediate subdirectories of a directory."""
    return len(list_subdirectories(dir_path))


def is_mediawiki_directory(path: str) -> bool:
    """Check if a directory looks like a MediaWiki installation.

    Args:
        path: Directory path to check

    Returns:
        True if index.php, api.php, includes/, extensions/ and skins/ exist
    """
    return (
        os.path.isfile(os.path.join(path, 'index.php'))
        and os.path.isfile(os.path.join(path, 'api.php'))
        and os.path.isdir(os.path.join(path, 'includes'))
        and os.path.isdir(os.path.join(path, EXTENSIONS_DIR))
        and os.path.isdir(os.path.join(path, SKINS_DIR))
    )


def kind_directory(base_path: str, kind: RepositoryKind) -> str:
    """Get the directory holding repositories of a kind."""
    if kind == RepositoryKind.CORE:
        return base_path
    if kind == RepositoryKind.EXTENSION:
        return os.path.join(base_path, EXTENSIONS_DIR)
    return os.path.join(base_path, SKINS_DIR)


def resolve_target_path(base_path: str, kind: RepositoryKind, name: str = "") -> str:
    """Get the path of a single named repository.

    Raises:
        ValueError: If an extension or skin is requested without a name
    """
    if kind == RepositoryKind.CORE:
        return base_path
    if not name:
        raise ValueError(f"'update {kind.value}' requires a NAME argument")
    return os.path.join(kind_directory(base_path, kind), name)
