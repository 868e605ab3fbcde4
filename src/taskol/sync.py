"""
Link refresh: delete every existing link, then create one per task folder.

Runs strictly in order (projects sorted, then tasks sorted) so two runs on
an unchanged tree produce the same link names. Per-item failures are logged
and skipped; only configuration problems stop a run, and those are raised
before anything is deleted.
"""

import logging
from dataclasses import dataclass, field
from os.path import normcase
from pathlib import Path
from typing import List, Optional

from taskol.backends.base import LinkBackend, LinkError
from taskol.config import ConfigError, SyncSettings
from taskol.discovery import (
    EnumerationError,
    ErrorHandler,
    list_link_files,
    list_project_dirs,
    list_task_dirs,
)
from taskol.error_logging import ErrorLogger, ErrorType
from taskol.link_format import PLACEHOLDERS, format_link_name
from taskol.logging import TaskolLogger
from taskol.naming import (
    ProjectIdentity,
    TaskIdentity,
    parse_project_identity,
    parse_task_identity,
)

logger = logging.getLogger(__name__)

COMMAND = "sync"


@dataclass
class LinkEntry:
    """One task folder and the link planned for it."""

    target: Path
    link_path: Path
    project: ProjectIdentity
    task: TaskIdentity
    created: bool = False
    error: Optional[str] = None

    @property
    def link_name(self) -> str:
        return self.link_path.name


@dataclass
class SyncResult:
    """Outcome of one sync run."""

    dry_run: bool = False
    removed: List[Path] = field(default_factory=list)
    entries: List[LinkEntry] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return sum(1 for e in self.entries if e.created)

    @property
    def link_names(self) -> List[str]:
        return [e.link_name for e in self.entries]


class _FailureRecorder:
    """Sends one per-item failure to every log and the result."""

    def __init__(
        self,
        result: SyncResult,
        taskol_logger: Optional[TaskolLogger],
        error_logger: Optional[ErrorLogger],
    ):
        self.result = result
        self.taskol_logger = taskol_logger
        self.error_logger = error_logger

    def record(self, error_type: ErrorType, message: str, context: dict) -> None:
        logger.warning(message)
        self.result.failures.append(message)
        if self.taskol_logger is not None:
            self.taskol_logger.log_error(COMMAND, message, {**context, "error_type": error_type.value})
        if self.error_logger is not None:
            self.error_logger.log_error(COMMAND, error_type, message, context=context)

    def enumeration_failed(self, error: EnumerationError) -> None:
        self.record(ErrorType.ENUMERATION_FAILED, str(error), {})


def plan_links(
    settings: SyncSettings,
    backend: LinkBackend,
    on_error: Optional[ErrorHandler] = None,
) -> List[LinkEntry]:
    """
    Work out every link a sync would create, without touching the link directory.

    Args:
        settings: Validated settings
        backend: Link backend (decides the file extension)
        on_error: Called with EnumerationError when a directory can't be listed

    Returns:
        One LinkEntry per task folder, in project then task order
    """
    entries: List[LinkEntry] = []

    for project_dir in list_project_dirs(settings.target_dir, settings.ignores, on_error):
        project = parse_project_identity(project_dir)
        logger.debug("Project %s -> abbreviation=%r name=%r",
                     project_dir.name, project.abbreviation, project.display_name)

        for task_dir in list_task_dirs(project_dir, settings.ignores, on_error):
            task = parse_task_identity(task_dir)
            name = format_link_name(settings.link_format, project, task)
            link_path = settings.link_dir / f"{name}{backend.extension}"
            logger.debug("%s => %s", task_dir, link_path.name)

            entries.append(LinkEntry(
                target=task_dir,
                link_path=link_path,
                project=project,
                task=task,
            ))

    return entries


def sync_links(
    settings: SyncSettings,
    backend: LinkBackend,
    dry_run: bool = False,
    taskol_logger: Optional[TaskolLogger] = None,
    error_logger: Optional[ErrorLogger] = None,
) -> SyncResult:
    """
    Replace all links in the link directory with fresh ones.

    Args:
        settings: Validated settings (see config.resolve_settings)
        backend: Link backend used for listing, removing and creating links
        dry_run: Only compute what would happen; nothing is removed or created
        taskol_logger: Operator log for per-link events (optional)
        error_logger: JSONL error log for per-item failures (optional)

    Returns:
        SyncResult with removed links, planned/created entries and failures

    Raises:
        ConfigError: If the link directory can't be created
    """
    result = SyncResult(dry_run=dry_run)
    failures = _FailureRecorder(result, taskol_logger, error_logger)

    if not any(p in settings.link_format for p in PLACEHOLDERS):
        logger.warning("Format %r has no placeholders; every task gets the same link name",
                       settings.link_format)

    if not dry_run and not settings.link_dir.exists():
        try:
            settings.link_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"Cannot create link directory {settings.link_dir}: {e}") from e

    # Old links go first; everything is recreated below
    existing = list_link_files(settings.link_dir, settings.ignores, backend,
                               failures.enumeration_failed)
    for link_path in existing:
        if dry_run:
            result.removed.append(link_path)
            continue
        try:
            backend.remove(link_path)
        except LinkError as e:
            failures.record(ErrorType.LINK_REMOVE_FAILED, str(e), {"link": str(link_path)})
            continue
        result.removed.append(link_path)

    result.entries = plan_links(settings, backend, failures.enumeration_failed)

    # Keyed the way the filesystem compares names (case-folded on Windows)
    seen: set = set()
    for entry in result.entries:
        context = {"target": str(entry.target), "link": str(entry.link_path)}

        key = normcase(str(entry.link_path))
        if key in seen:
            entry.error = f"Duplicate link name {entry.link_name} for {entry.target}"
            failures.record(ErrorType.LINK_CREATE_FAILED, entry.error, context)
            continue
        seen.add(key)

        if dry_run:
            continue

        try:
            backend.create(entry.target, entry.link_path)
        except LinkError as e:
            entry.error = str(e)
            failures.record(ErrorType.LINK_CREATE_FAILED, entry.error, context)
            continue

        entry.created = True
        if taskol_logger is not None:
            taskol_logger.log("DEBUG", COMMAND, f"Created link: {entry.link_name}", context)

    return result
