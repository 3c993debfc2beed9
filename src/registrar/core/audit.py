"""Audit log.

Append-only record of every mutating operation and every validation
failure. The engine only writes here; display and reporting read it.
Each entry is mirrored to structlog so the same trail reaches the
process log.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_MAX_ENTRIES = 10000


class AuditLevel(str, Enum):
    """Severity of an audit entry."""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    SUCCESS = "SUCCESS"


@dataclass(frozen=True)
class AuditEntry:
    """A single audit record."""

    log_id: int
    level: AuditLevel
    timestamp: str
    operation: str
    details: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "log_id": self.log_id,
            "level": self.level.value,
            "timestamp": self.timestamp,
            "operation": self.operation,
            "details": self.details,
        }


class AuditLog:
    """Bounded audit log; the oldest entry is dropped on overflow."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError("max_entries must be positive")
        self._entries: deque[AuditEntry] = deque()
        self._max_entries = max_entries
        self._next_id = 1
        self._dropped = 0

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def dropped(self) -> int:
        """Number of entries discarded because the log was full."""
        return self._dropped

    def record(self, level: AuditLevel, operation: str, details: str) -> AuditEntry:
        """Append an entry and mirror it to the process log."""
        if len(self._entries) >= self._max_entries:
            evicted = self._entries.popleft()
            self._dropped += 1
            logger.warning(
                "audit.overflow",
                max_entries=self._max_entries,
                evicted_log_id=evicted.log_id,
            )

        entry = AuditEntry(
            log_id=self._next_id,
            level=level,
            timestamp=datetime.now(timezone.utc).isoformat(),
            operation=operation,
            details=details,
        )
        self._next_id += 1
        self._entries.append(entry)

        if level == AuditLevel.ERROR:
            log_method = logger.error
        elif level == AuditLevel.WARNING:
            log_method = logger.warning
        else:
            log_method = logger.info
        log_method("audit.recorded", level=level.value, operation=operation, details=details)
        return entry

    def info(self, operation: str, details: str) -> AuditEntry:
        return self.record(AuditLevel.INFO, operation, details)

    def warning(self, operation: str, details: str) -> AuditEntry:
        return self.record(AuditLevel.WARNING, operation, details)

    def error(self, operation: str, details: str) -> AuditEntry:
        return self.record(AuditLevel.ERROR, operation, details)

    def success(self, operation: str, details: str) -> AuditEntry:
        return self.record(AuditLevel.SUCCESS, operation, details)

    def entries(self) -> list[AuditEntry]:
        """All retained entries, oldest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
