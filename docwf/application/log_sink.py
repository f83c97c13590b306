"""Append-only run log."""

import logging
from collections.abc import Iterator

from docwf.domain.models.log_entry import LogSeverity, WorkflowLogEntry
from docwf.domain.models.role import RoleKey

logger = logging.getLogger(__name__)


class LogSink:
    """Ordered, append-only sequence of WorkflowLogEntry for one run.

    Every entry is mirrored to the standard logging module so runs are
    visible in whatever handlers the host application configured.
    """

    def __init__(self) -> None:
        self._entries: list[WorkflowLogEntry] = []

    def append(
        self,
        message: str,
        severity: LogSeverity = LogSeverity.INFO,
        role: RoleKey | None = None,
    ) -> WorkflowLogEntry:
        entry = WorkflowLogEntry(message=message, severity=severity, role=role)
        self._entries.append(entry)

        level = logging.ERROR if severity == LogSeverity.ERROR else logging.INFO
        prefix = f"[{role.value}] " if role else ""
        logger.log(level, f"{prefix}{message}")
        return entry

    def entries(self) -> tuple[WorkflowLogEntry, ...]:
        """Snapshot of all entries in append order."""
        return tuple(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self) -> Iterator[WorkflowLogEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
