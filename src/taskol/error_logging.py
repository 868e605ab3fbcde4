"""Error log for taskol runs.

Per-item failures (a link that could not be removed or created, a directory
that could not be listed) don't stop a sync. They are appended to
~/.taskol/errors.jsonl so `taskol errors` can show them afterwards.

Entry schema:
{
    "timestamp": "2026-10-18T09:12:00Z",
    "command": "sync",
    "error_type": "LINK_CREATE_FAILED",
    "message": "Failed to create symlink ...",
    "context": {"target": "...", "link": "..."}
}
"""

import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class ErrorType(Enum):
    """Error taxonomy for taskol."""

    CONFIG_ERROR = "CONFIG_ERROR"
    ENUMERATION_FAILED = "ENUMERATION_FAILED"
    LINK_REMOVE_FAILED = "LINK_REMOVE_FAILED"
    LINK_CREATE_FAILED = "LINK_CREATE_FAILED"


@dataclass
class ErrorEntry:
    """Represents a single error log entry."""

    timestamp: str
    command: str
    error_type: ErrorType
    message: str
    context: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        result = {
            "timestamp": self.timestamp,
            "command": self.command,
            "error_type": self.error_type.value,
            "message": self.message,
        }
        if self.context is not None:
            result["context"] = self.context
        return result


class ErrorLogger:
    """Appends errors to a JSONL file, keeping at most max_entries lines."""

    DEFAULT_MAX_ENTRIES = 1000

    def __init__(
        self,
        error_file: Optional[Path] = None,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ):
        """Initialize error logger.

        Args:
            error_file: Path to errors.jsonl file. Defaults to ~/.taskol/errors.jsonl
            max_entries: Maximum entries to keep (older entries are removed)
        """
        if error_file is None:
            error_file = Path.home() / ".taskol" / "errors.jsonl"

        self.error_file = Path(error_file)
        self.max_entries = max_entries

    def log_error(
        self,
        command: str,
        error_type: ErrorType,
        message: str,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        """Append one error entry.

        Args:
            command: Command name (e.g., "sync")
            error_type: ErrorType enum value
            message: Human-readable error message
            context: Optional paths or values involved
        """
        entry = ErrorEntry(
            timestamp=datetime.now().isoformat() + "Z",
            command=command,
            error_type=error_type,
            message=message,
            context=context,
        )

        self.error_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.error_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry.to_dict(), ensure_ascii=False) + "\n")

        self._rotate_if_needed()

    def _rotate_if_needed(self) -> None:
        if not self.error_file.exists():
            return

        lines = self.error_file.read_text(encoding="utf-8").strip().split("\n")
        if len(lines) > self.max_entries:
            keep_lines = lines[-self.max_entries:]
            self.error_file.write_text("\n".join(keep_lines) + "\n", encoding="utf-8")

    def get_recent_errors(
        self,
        limit: int = 10,
        error_type: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        """Get recent error entries, most recent first.

        Args:
            limit: Maximum number of entries to return
            error_type: Only return entries with this error_type value
        """
        entries = self._read_entries()
        if error_type:
            entries = [e for e in entries if e.get("error_type") == error_type]

        return list(reversed(entries[-limit:])) if limit > 0 else []

    def _read_entries(self) -> list[dict[str, Any]]:
        if not self.error_file.exists():
            return []

        entries = []
        for line in self.error_file.read_text(encoding="utf-8").strip().split("\n"):
            if not line:
                continue
            try:
                entries.append(json.loads(line))
            except json.JSONDecodeError:
                continue

        return entries
