"""Operator log for taskol runs.

One line per event, readable on the left and parseable on the right:

    2026-10-18 09:12:30 INFO  [sync] Sync started: /work -> /links | {"dry_run": false}

Lines go to a monthly file, ~/.taskol/logs/taskol-YYYY-MM.log. The directory
is created on the first write, so a run that logs nothing leaves no trace.
"""
import json
from pathlib import Path
from datetime import datetime
from typing import Dict, Any, Optional


class TaskolLogger:
    """Appends hybrid-format lines to the monthly taskol log."""

    def __init__(self, log_dir: Optional[Path] = None):
        if log_dir is None:
            log_dir = Path.home() / ".taskol" / "logs"
        self.log_dir = Path(log_dir)

    @property
    def log_file(self) -> Path:
        return self.log_dir / f"taskol-{datetime.now():%Y-%m}.log"

    def log(
        self,
        level: str,
        command: str,
        message: str,
        data: Optional[Dict[str, Any]] = None
    ) -> None:
        """Append one line.

        Args:
            level: DEBUG, INFO or ERROR
            command: Command that produced the event (sync, ...)
            message: Human-readable part
            data: JSON part; folder names are kept unescaped
        """
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        json_str = json.dumps(data or {}, ensure_ascii=False)
        line = f"{timestamp} {level.ljust(5)} [{command}] {message} | {json_str}\n"

        self.log_dir.mkdir(parents=True, exist_ok=True)
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(line)

    def log_sync_started(self, target: Path, link: Path, data: Dict[str, Any]) -> None:
        self.log("INFO", "sync", f"Sync started: {target} -> {link}",
                 {"target": str(target), "link": str(link), **data})

    def log_sync_finished(self, duration_ms: int, counts: Dict[str, int]) -> None:
        """Log the end of a sync with its link counts (created, removed, failed...)."""
        summary = ", ".join(f"{key} {value}" for key, value in counts.items())
        self.log("INFO", "sync", f"Sync finished in {duration_ms}ms: {summary}",
                 {**counts, "duration_ms": duration_ms})

    def log_error(self, command: str, message: str, data: Dict[str, Any]) -> None:
        reason = data.get("reason")
        if reason:
            message = f"{message}: {reason}"
        self.log("ERROR", command, message, data)
