"""Directory enumeration for project folders, task folders and link files.

Every listing is a glob followed by a conjunction of predicates:

    list_project_dirs  - <target>/*    real directories, not ignored
    list_task_dirs     - <project>/t_* real directories, not ignored
    list_link_files    - <link>/<backend pattern>  backend links, not directories, not ignored

A name is ignored when its first character is one of the configured ignore
characters (default '!#@').
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from taskol.backends.base import LinkBackend

logger = logging.getLogger(__name__)

TASK_GLOB = 't_*'


class EnumerationError(Exception):
    """Raised when a directory cannot be listed."""
    pass


Predicate = Callable[[Path], bool]
ErrorHandler = Callable[[EnumerationError], None]


def is_dir(path: Path) -> bool:
    """True for real directories; symlinks are never followed."""
    return path.is_dir() and not path.is_symlink()


def should_be_ignored(path: Path, ignores: str) -> bool:
    """Check whether the first character of the base name is an ignore character."""
    name = path.name
    return bool(name) and name[0] in ignores


def filter_paths(paths: Iterable[Path], predicates: Sequence[Predicate]) -> List[Path]:
    """
    Keep paths for which every predicate holds.

    Args:
        paths: Candidate paths
        predicates: Tests to apply; all must pass

    Returns:
        Matching paths in input order. Empty when no predicates are given.
    """
    if not predicates:
        return []
    return [p for p in paths if all(pred(p) for pred in predicates)]


def _glob(base_dir: Path, pattern: str) -> List[Path]:
    try:
        return sorted(base_dir.glob(pattern))
    except OSError as e:
        raise EnumerationError(f"Cannot list {base_dir}: {e}") from e


def _safe_glob(base_dir: Path, pattern: str, on_error: Optional[ErrorHandler]) -> List[Path]:
    """Glob that treats listing failures as "nothing found"."""
    try:
        return _glob(base_dir, pattern)
    except EnumerationError as e:
        logger.warning(str(e))
        if on_error is not None:
            on_error(e)
        return []


def list_project_dirs(
    target_dir: Path,
    ignores: str,
    on_error: Optional[ErrorHandler] = None,
) -> List[Path]:
    """List project folders directly under target_dir."""
    return filter_paths(_safe_glob(target_dir, '*', on_error), [
        is_dir,
        lambda p: not should_be_ignored(p, ignores),
    ])


def list_task_dirs(
    project_dir: Path,
    ignores: str,
    on_error: Optional[ErrorHandler] = None,
) -> List[Path]:
    """List 't_*' task folders directly under a project folder."""
    return filter_paths(_safe_glob(project_dir, TASK_GLOB, on_error), [
        is_dir,
        lambda p: not should_be_ignored(p, ignores),
    ])


def list_link_files(
    link_dir: Path,
    ignores: str,
    backend: LinkBackend,
    on_error: Optional[ErrorHandler] = None,
) -> List[Path]:
    """List existing link files of the given backend in link_dir."""
    return filter_paths(_safe_glob(link_dir, backend.glob_pattern, on_error), [
        lambda p: not is_dir(p),
        lambda p: not should_be_ignored(p, ignores),
        backend.is_link,
    ])
