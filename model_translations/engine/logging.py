"""
Model Translations Logging — Structured JSONL event log next to stdlib logging.

Implements:
- LogEntry: one structured event destined for a category file
- FileLogger: per-category log files with daily rotation
- Log entry builders for synchronizer and system events
- Global logger singleton (init_logging / init_logging_from_settings / log / shutdown_logging)

Files: {directory}/{category}/{YYYY-MM-DD}.jsonl
"""

from __future__ import annotations

import json
import logging
import threading
from collections import defaultdict
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger("model_translations.engine.logging")

CATEGORIES = ("sync", "system")


class LogEntry:
    """A structured log entry destined for a specific category file."""

    __slots__ = ("category", "data")

    def __init__(self, category: str, data: Dict[str, Any]):
        self.category = category
        self.data = data

    def to_json(self) -> str:
        return json.dumps(self.data, default=str, separators=(",", ":"))


class FileLogger:
    """
    Writes structured JSON log entries to per-category files.
    Files rotate daily: {log_dir}/{category}/{YYYY-MM-DD}.jsonl

    Thread-safe — uses a lock per file path.
    """

    def __init__(self, log_dir: str = "logs"):
        self._log_dir = Path(log_dir)
        self._file_locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        for cat in CATEGORIES:
            (self._log_dir / cat).mkdir(parents=True, exist_ok=True)

    def write(self, entry: LogEntry) -> None:
        """Write a single log entry to the appropriate file."""
        file_path = self._resolve_path(entry.category)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        key = str(file_path)

        with self._file_locks[key]:
            with open(file_path, "a", encoding="utf-8") as f:
                f.write(entry.to_json())
                f.write("\n")

    def _resolve_path(self, category: str) -> Path:
        """Resolve the log file path for today's date."""
        return self._log_dir / category / f"{date.today().isoformat()}.jsonl"

    @property
    def log_dir(self) -> Path:
        return self._log_dir

    def read(self, category: str, day: Optional[date] = None) -> List[Dict[str, Any]]:
        """Read all parseable entries of one category file (today by default)."""
        day = day or date.today()
        path = self._log_dir / category / f"{day.isoformat()}.jsonl"
        if not path.exists():
            return []

        entries: List[Dict[str, Any]] = []
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    entries.append(json.loads(line))
                except json.JSONDecodeError:
                    logger.warning("Skipping malformed log line in %s", path)
        return entries


# ---------------------------------------------------------------------------
# Log Entry Builders
# ---------------------------------------------------------------------------

def _base_entry(event: str, level: str, **extra: Any) -> Dict[str, Any]:
    """Build a base log entry with common fields."""
    entry: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "event": event,
    }
    entry.update(extra)
    return entry


def log_translation_sync(
    operation: str,
    model: str,
    success: bool,
    record_id: Optional[Any] = None,
    locales: Optional[List[str]] = None,
    duration_ms: Optional[float] = None,
    error: Optional[Dict[str, Any]] = None,
) -> LogEntry:
    """Build a synchronizer operation log entry (committed or rolled back)."""
    data = _base_entry(
        event=f"translations_{operation}",
        level="INFO" if success else "ERROR",
        model=model,
        operation=operation,
        success=success,
    )
    if record_id is not None:
        data["record_id"] = record_id
    if locales:
        data["locales"] = sorted(locales)
    if duration_ms is not None:
        data["duration_ms"] = duration_ms
    if error:
        data["error"] = error
    return LogEntry("sync", data)


def log_system_event(
    event: str,
    level: str = "INFO",
    details: Optional[Dict[str, Any]] = None,
) -> LogEntry:
    """Build a system event log entry (model registration, config changes)."""
    data = _base_entry(event=event, level=level)
    if details:
        data["details"] = details
    return LogEntry("system", data)


# ---------------------------------------------------------------------------
# Convenience: Global File Logger Singleton
# ---------------------------------------------------------------------------

_file_logger: Optional[FileLogger] = None


def init_logging(log_dir: Optional[str] = None, level: str = "INFO") -> Optional[FileLogger]:
    """
    Set the package logger level and, when a directory is given,
    start writing structured events to it.
    """
    global _file_logger
    logging.getLogger("model_translations").setLevel(level.upper())
    _file_logger = FileLogger(log_dir=log_dir) if log_dir else None
    return _file_logger


def get_file_logger() -> Optional[FileLogger]:
    return _file_logger


def log(entry: LogEntry) -> bool:
    """Write a structured entry. Returns False when no file logger is initialized."""
    if _file_logger is None:
        return False
    try:
        _file_logger.write(entry)
    except OSError as e:
        logger.error(f"Log write error: {e}")
        return False
    return True


def shutdown_logging() -> None:
    """Drop the global file logger."""
    global _file_logger
    _file_logger = None


def init_logging_from_settings(settings: Optional[Any] = None) -> Optional[FileLogger]:
    """Initialize logging from the ``logging`` section of translatable.yaml."""
    if settings is None:
        from model_translations.engine.config import get_settings
        settings = get_settings()

    file_logger = init_logging(settings.logging.directory, settings.logging.level)
    log(log_system_event(
        "logging_initialized",
        details={"level": settings.logging.level, "directory": settings.logging.directory},
    ))
    return file_logger
